from fastapi import APIRouter, Depends

from models.schemas import HealthCheckResponse
from api.dependencies import get_content_repository, get_vector_store
from config.settings import settings
from content.content_storage import ContentRepository
from content.vector_store import VectorStoreService
from content.time_format import utcnow

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    repository: ContentRepository = Depends(get_content_repository),
    store: VectorStoreService = Depends(get_vector_store)
):
    """Basic health check for the store, the corpus and provider configuration"""

    services = {}

    try:
        services["content_store"] = f"{settings.STORAGE_BACKEND}: {len(await repository.list_all())} records"
    except Exception as e:
        services["content_store"] = f"unavailable: {str(e)}"

    vector_status = await store.get_status()
    services["vector_store"] = vector_status["status"]

    services["gemini"] = "configured" if settings.GOOGLE_API_KEY else "missing api key"
    services["openai"] = "configured" if settings.OPENAI_API_KEY else "missing api key"

    status = "ok" if vector_status.get("healthy") and not services["content_store"].startswith("unavailable") else "degraded"

    return HealthCheckResponse(
        status=status,
        timestamp=utcnow().isoformat(),
        services=services
    )
