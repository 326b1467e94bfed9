"""
Generative text providers and the model registry.

Each provider turns a single instruction payload into raw text. Prompt
construction and response shaping are handled by the content services.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from openai import AsyncOpenAI

from config.settings import settings
from content.errors import ProviderError, UnknownModelError

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Abstract base class for all generative text providers."""

    provider_name: str = "base"

    @abstractmethod
    async def complete(self, messages: List[BaseMessage], model: str, temperature: float) -> str:
        """
        Send a formatted prompt and return the raw text response.

        Args:
            messages: Formatted prompt messages (system + human)
            model: The API model identifier (e.g., "gemini-1.5-pro", "gpt-4o")
            temperature: Sampling temperature

        Returns:
            Raw text response from the provider

        Raises:
            ProviderError: If the call fails or the response is empty
        """
        ...


class GeminiProvider(LLMProvider):
    """Google Gemini through LangChain."""

    provider_name = "gemini"

    def __init__(self, api_key: str = None):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        self._clients: Dict[Tuple[str, float], ChatGoogleGenerativeAI] = {}

    def _get_llm(self, model: str, temperature: float) -> ChatGoogleGenerativeAI:
        key = (model, temperature)
        if key not in self._clients:
            self._clients[key] = ChatGoogleGenerativeAI(
                model=model,
                temperature=temperature,
                max_tokens=settings.MAX_OUTPUT_TOKENS,
                google_api_key=self.api_key or None,
            )
        return self._clients[key]

    async def complete(self, messages: List[BaseMessage], model: str, temperature: float) -> str:
        try:
            llm = self._get_llm(model, temperature)
            response = await llm.ainvoke(messages)
        except Exception as e:
            raise ProviderError(str(e)) from e

        content = response.content
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        if not content:
            raise ProviderError("Empty response from Gemini")
        return content


class OpenAIChatProvider(LLMProvider):
    """OpenAI Chat Completions API."""

    provider_name = "openai"

    def __init__(self, api_key: str = None):
        self.client = AsyncOpenAI(api_key=api_key or settings.OPENAI_API_KEY or "missing-key")

    async def complete(self, messages: List[BaseMessage], model: str, temperature: float) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[self._to_chat_message(m) for m in messages],
                max_completion_tokens=settings.MAX_OUTPUT_TOKENS,
                temperature=temperature,
            )
        except Exception as e:
            raise ProviderError(str(e)) from e

        content = response.choices[0].message.content
        if not content:
            raise ProviderError("Empty response from OpenAI Chat Completions API")
        return content

    @staticmethod
    def _to_chat_message(message: BaseMessage) -> Dict[str, str]:
        if isinstance(message, SystemMessage):
            role = "system"
        elif isinstance(message, AIMessage):
            role = "assistant"
        else:
            role = "user"
        return {"role": role, "content": message.content}


# ── Model Registry ────────────────────────────────────────────────────────────
# Maps a user-facing model id to the provider type, the model string sent to
# the provider API and a display name for the authoring UI.

MODEL_REGISTRY: Dict[str, Dict[str, str]] = {
    "gemini-1.5-pro": {
        "display_name": "Gemini 1.5 Pro",
        "provider": "gemini",
        "api_model": "gemini-1.5-pro",
        "description": "Default model. Long, well-structured lessons and projects.",
    },
    "gemini-1.5-flash": {
        "display_name": "Gemini 1.5 Flash",
        "provider": "gemini",
        "api_model": "gemini-1.5-flash",
        "description": "Faster and cheaper. Good for quizzes and short exercises.",
    },
    "gemini-2.0-flash": {
        "display_name": "Gemini 2.0 Flash",
        "provider": "gemini",
        "api_model": "gemini-2.0-flash",
        "description": "Newer fast model.",
    },
    "gpt-4o": {
        "display_name": "GPT-4o",
        "provider": "openai",
        "api_model": "gpt-4o",
        "description": "OpenAI flagship chat model.",
    },
    "gpt-4o-mini": {
        "display_name": "GPT-4o Mini",
        "provider": "openai",
        "api_model": "gpt-4o-mini",
        "description": "Budget OpenAI model.",
    },
}

# Lazily created provider singletons, keyed by provider type
_provider_instances: Dict[str, LLMProvider] = {}


def _create_provider(provider_type: str) -> LLMProvider:
    if provider_type == "gemini":
        return GeminiProvider()
    elif provider_type == "openai":
        return OpenAIChatProvider()
    else:
        raise ValueError(f"Unknown provider type: {provider_type}")


def get_provider(model_id: str) -> Tuple[LLMProvider, str]:
    """
    Get the provider instance and API model name for a model id.

    Raises:
        UnknownModelError: If the model id is not in the registry
    """
    if model_id not in MODEL_REGISTRY:
        raise UnknownModelError(
            f"Unknown model: {model_id}. "
            f"Available models: {', '.join(MODEL_REGISTRY.keys())}"
        )

    model_info = MODEL_REGISTRY[model_id]
    provider_type = model_info["provider"]

    if provider_type not in _provider_instances:
        _provider_instances[provider_type] = _create_provider(provider_type)
        logger.info(f"Created {provider_type} provider")

    return _provider_instances[provider_type], model_info["api_model"]


def list_models() -> List[Dict[str, str]]:
    """Return the available models for the authoring UI."""
    return [
        {
            "id": model_id,
            "display_name": info["display_name"],
            "provider": info["provider"],
            "description": info.get("description", ""),
        }
        for model_id, info in MODEL_REGISTRY.items()
    ]
