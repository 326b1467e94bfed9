"""Content discovery, generation, modification and presentation services."""

from content.generator import ContentGenerator
from content.content_modifier import ContentModifier, ModificationKind
from content.content_storage import (
    ContentRepository,
    CurriculumRepository,
    InMemoryContentRepository,
    SQLContentRepository,
)
from content.content_types import ContentType, resolve_presentation
from content.discovery import DiscoveryService
from content.vector_store import VectorStoreService

__all__ = [
    'ContentGenerator',
    'ContentModifier',
    'ModificationKind',
    'ContentRepository',
    'CurriculumRepository',
    'InMemoryContentRepository',
    'SQLContentRepository',
    'ContentType',
    'resolve_presentation',
    'DiscoveryService',
    'VectorStoreService',
]
