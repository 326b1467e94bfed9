"""Rewrite existing content according to a modification kind and free-text instructions."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from config.settings import settings
from content.errors import ContentModificationError, ContentServiceError
from content.generator import ProviderResolver
from content.llm_provider import get_provider
from content.prompt_templates import MODIFICATION_PROMPT

logger = logging.getLogger(__name__)


class ModificationKind(Enum):
    """Ways an existing body can be rewritten."""
    REFINE = "refine"
    EXPAND = "expand"
    SIMPLIFY = "simplify"
    ADAPT = "adapt"
    DUPLICATE = "duplicate"
    REGENERATE = "regenerate"

    @classmethod
    def parse(cls, label: str) -> Optional["ModificationKind"]:
        try:
            return cls((label or "").strip().lower())
        except ValueError:
            return None


MODIFICATION_GUIDANCE: Dict[ModificationKind, str] = {
    ModificationKind.REFINE: "Improve quality, clarity, and accuracy without changing the scope.",
    ModificationKind.EXPAND: "Add more details, examples, and depth without removing existing material.",
    ModificationKind.SIMPLIFY: "Make the content clearer and easier to understand.",
    ModificationKind.ADAPT: "Adjust the content for a different audience or context.",
    ModificationKind.DUPLICATE: "Create a variant with the specified changes.",
    ModificationKind.REGENERATE: "Completely rewrite while maintaining only the core topic.",
}


@dataclass
class ModifiedContent:
    newBody: str
    originalBody: str
    modificationType: str
    stats: Dict[str, Any] = field(default_factory=dict)


class ContentModifier:
    """Modify stored educational content through the generative provider."""

    def __init__(self, provider_resolver: Optional[ProviderResolver] = None):
        self.provider_resolver = provider_resolver or get_provider
        self.temperature = settings.GENERATION_TEMPERATURE
        logger.info("ContentModifier initialized")

    async def modify(
        self,
        existing_body: str,
        modification_kind: str,
        instructions: str,
        model_id: Optional[str] = None,
    ) -> ModifiedContent:
        """
        Replace a content body with a provider rewrite.

        Args:
            existing_body: Current body, sent verbatim
            modification_kind: One of refine, expand, simplify, adapt, duplicate, regenerate
            instructions: Free-text modification instructions
            model_id: Registry model id, defaults to the configured model

        Returns:
            ModifiedContent carrying the whole new body

        Raises:
            ContentModificationError: If the provider call fails
        """
        messages = MODIFICATION_PROMPT.format_messages(
            modification_type=modification_kind,
            modification_guidance=self.get_guidance(modification_kind),
            original_content=existing_body,
            instructions=instructions,
        )

        model_id = model_id or settings.DEFAULT_MODEL
        try:
            provider, api_model = self.provider_resolver(model_id)
            new_body = await provider.complete(messages, api_model, self.temperature)
        except ContentServiceError as e:
            logger.error(f"Error applying {modification_kind} modification: {e}")
            raise ContentModificationError(f"Failed to modify content: {e}") from e

        logger.info(f"Successfully applied {modification_kind} modification")
        return ModifiedContent(
            newBody=new_body,
            originalBody=existing_body,
            modificationType=modification_kind,
            stats=self.calculate_content_diff(existing_body, new_body),
        )

    def get_guidance(self, modification_kind: str) -> str:
        """One sentence of guidance for a known kind; all of them otherwise."""
        kind = ModificationKind.parse(modification_kind)
        if kind is not None:
            return MODIFICATION_GUIDANCE[kind]
        return "\n".join(
            f"If {k.value}: {text}" for k, text in MODIFICATION_GUIDANCE.items()
        )

    def calculate_content_diff(
        self,
        original_content: str,
        modified_content: str
    ) -> Dict[str, Any]:
        """
        Track size differences between content versions.

        Args:
            original_content: Original content
            modified_content: Modified content

        Returns:
            Dictionary with diff statistics
        """
        original_words = original_content.split()
        modified_words = modified_content.split()

        length_change = len(modified_words) - len(original_words)
        length_change_pct = (length_change / len(original_words) * 100) if original_words else 0

        return {
            'original_word_count': len(original_words),
            'modified_word_count': len(modified_words),
            'length_change': length_change,
            'length_change_percent': round(length_change_pct, 2),
            'original_char_count': len(original_content),
            'modified_char_count': len(modified_content)
        }
