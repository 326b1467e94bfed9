"""FastAPI router for retrieval-augmented content discovery."""

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from api.dependencies import get_discovery_service
from content.discovery import DiscoveryService
from content.errors import ContentServiceError
from models.schemas import DiscoveryRequest, DiscoveryResponse, QueryAnalysisResponse
from services.progress import ProgressTicker, ThoughtRevealSchedule, build_reveal_events

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/discover", tags=["discovery"])


@router.post("", response_model=DiscoveryResponse)
async def discover(
    request: DiscoveryRequest,
    service: DiscoveryService = Depends(get_discovery_service)
):
    """
    Search the document corpus and build a curriculum recommendation.

    Returns the full, final result at once; pacing is left to the client
    or to /discover/stream.
    """
    result = await service.discover(request.query)
    return result.to_dict()


@router.post("/analyze", response_model=QueryAnalysisResponse)
async def analyze_query(
    request: DiscoveryRequest,
    service: DiscoveryService = Depends(get_discovery_service)
):
    """Plain-text analysis of the learning need behind a query."""
    try:
        return await service.analyze_query(request.query)
    except ContentServiceError as e:
        logger.error(f"Query analysis failed: {e}")
        raise HTTPException(status_code=400, detail=f"Failed to analyze content query: {e}")


def _ndjson(event: dict) -> str:
    return json.dumps(event) + "\n"


@router.post("/stream")
async def discover_stream(
    request: DiscoveryRequest,
    service: DiscoveryService = Depends(get_discovery_service)
):
    """
    Stream discovery as newline-delimited JSON events.

    Progress ticks are emitted while the discovery call runs. Once it
    resolves the ticker stops and thoughts, documents and the final result
    are released on a fixed pace. Disconnecting cancels everything pending.
    """

    async def event_stream():
        ticker = ProgressTicker()
        schedule = None
        task = asyncio.create_task(service.discover(request.query))
        await ticker.start()

        try:
            while not task.done():
                await asyncio.wait({task}, timeout=ticker.interval)
                while not ticker.updates.empty():
                    yield _ndjson({'type': 'progress', 'progress': ticker.updates.get_nowait()})

            try:
                result = task.result()
            except Exception as e:
                logger.error(f"Streaming discovery failed: {e}")
                await ticker.stop(completed=False)
                yield _ndjson({'type': 'error', 'message': str(e)})
                return

            await ticker.stop(completed=True)
            yield _ndjson({'type': 'progress', 'progress': ticker.progress})

            schedule = ThoughtRevealSchedule(build_reveal_events(result.to_dict()))
            async for event in schedule:
                yield _ndjson(event)
        finally:
            await ticker.stop(completed=False)
            if not task.done():
                task.cancel()
            if schedule is not None:
                schedule.cancel()

    return StreamingResponse(event_stream(), media_type="application/x-ndjson")
