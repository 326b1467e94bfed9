"""Shared service instances injected into the routers."""

from functools import lru_cache

from content.content_modifier import ContentModifier
from content.content_storage import (
    ContentRepository,
    CurriculumRepository,
    create_content_repository,
)
from content.discovery import DiscoveryService
from content.generator import ContentGenerator
from content.vector_store import VectorStoreService


@lru_cache()
def get_content_repository() -> ContentRepository:
    return create_content_repository()


@lru_cache()
def get_curriculum_repository() -> CurriculumRepository:
    return CurriculumRepository()


@lru_cache()
def get_vector_store() -> VectorStoreService:
    return VectorStoreService()


@lru_cache()
def get_content_generator() -> ContentGenerator:
    return ContentGenerator()


@lru_cache()
def get_content_modifier() -> ContentModifier:
    return ContentModifier()


@lru_cache()
def get_discovery_service() -> DiscoveryService:
    return DiscoveryService(vector_store=get_vector_store())
