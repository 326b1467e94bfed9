"""FastAPI router exposing the document corpus search."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_vector_store
from content.vector_store import VectorStoreService
from models.schemas import VectorSearchRequest, VectorSearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vectordb", tags=["vectordb"])


@router.post("/search", response_model=VectorSearchResponse)
async def search(
    request: VectorSearchRequest,
    store: VectorStoreService = Depends(get_vector_store)
):
    try:
        return await store.search(request.query, request.limit)
    except Exception as e:
        logger.error(f"Vector search failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/status")
async def status(store: VectorStoreService = Depends(get_vector_store)):
    try:
        return await store.get_status()
    except Exception as e:
        logger.error(f"Vector store status failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/stats")
async def stats(store: VectorStoreService = Depends(get_vector_store)):
    try:
        return await store.get_stats()
    except Exception as e:
        logger.error(f"Vector store stats failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
