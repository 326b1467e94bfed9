"""Core content generator: builds a type-specific prompt and calls the selected provider."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from config.settings import settings
from content.errors import ContentGenerationError, ContentServiceError
from content.llm_provider import LLMProvider, get_provider
from content.prompt_templates import get_prompt_template
from models.schemas import GenerateContentRequest, GenerationOptions

logger = logging.getLogger(__name__)

ProviderResolver = Callable[[str], Tuple[LLMProvider, str]]

DEFAULT_STYLE = "comprehensive"
DEFAULT_FORMAT = "markdown"


@dataclass
class GeneratedContent:
    body: str
    providerModel: str
    contentType: str
    title: str


class ContentGenerator:
    """Generate educational content with the configured generative provider."""

    def __init__(self, provider_resolver: Optional[ProviderResolver] = None):
        self.provider_resolver = provider_resolver or get_provider
        self.temperature = settings.GENERATION_TEMPERATURE
        logger.info("ContentGenerator initialized")

    async def generate(self, params: GenerateContentRequest) -> GeneratedContent:
        """
        Generate content of the requested type.

        The provider output is returned as-is; no structural validation is
        performed on it.

        Args:
            params: Validated generation request

        Returns:
            GeneratedContent with the raw body and the model that produced it

        Raises:
            ContentGenerationError: If the model is unknown or the provider call fails
        """
        content_type = params.contentType or "lesson"
        options = params.generationOptions or GenerationOptions()
        model_id = options.model or settings.DEFAULT_MODEL

        messages = self.build_messages(params)

        try:
            provider, api_model = self.provider_resolver(model_id)
            body = await provider.complete(messages, api_model, self.temperature)
        except ContentServiceError as e:
            logger.error(f"Error generating {content_type} '{params.title}': {e}")
            raise ContentGenerationError(f"Failed to generate content: {e}") from e

        logger.info(f"Successfully generated {content_type} '{params.title}' with {model_id}")
        return GeneratedContent(
            body=body,
            providerModel=model_id,
            contentType=content_type,
            title=params.title,
        )

    def build_messages(self, params: GenerateContentRequest):
        """Format the type-specific template with the request parameters."""
        options = params.generationOptions or GenerationOptions()
        template = get_prompt_template(params.contentType or "lesson")

        return template.format_messages(
            format=options.format.value if options.format else DEFAULT_FORMAT,
            content_type=params.contentType,
            title=params.title,
            difficulty=params.difficulty,
            duration=params.duration,
            objectives=params.objectives,
            instructions=params.instructions,
            style=options.style.value if options.style else DEFAULT_STYLE,
            feature_directives=self._build_feature_directives(options),
        )

    def _build_feature_directives(self, options: GenerationOptions) -> str:
        directives: List[str] = []
        if options.includeCode:
            directives.append("Please include code examples.")
        if options.includeVisuals:
            directives.append("Please include visual element descriptions.")
        if options.includeChecks:
            directives.append("Please include knowledge check questions.")
        return "\n".join(directives)
