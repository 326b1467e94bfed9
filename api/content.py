"""FastAPI router for content generation, modification, listing and preview."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_content_generator, get_content_modifier, get_content_repository
from config.settings import settings
from content.content_modifier import ContentModifier
from content.content_storage import ContentRepository
from content.content_types import ContentType, resolve_presentation
from content.errors import ContentGenerationError, ContentModificationError, ContentNotFoundError
from content.generator import ContentGenerator
from content.llm_provider import list_models
from content.quiz_scoring import score_quiz
from content.time_format import get_time_ago
from models.content_models import ContentRecord
from models.schemas import (
    ContentEditRequest,
    ContentPreviewResponse,
    GenerateContentRequest,
    GeneratedContentResponse,
    ModelInfo,
    ModifiedContentResponse,
    ModifyContentRequest,
    QuizScoreRequest,
    QuizScoreResponse,
    RecentContentItem,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


async def _get_record_or_404(content_id: int, repository: ContentRepository) -> ContentRecord:
    record = await repository.get(content_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Content not found")
    return record


@router.post("/generate", response_model=GeneratedContentResponse)
async def generate_content(
    request: GenerateContentRequest,
    generator: ContentGenerator = Depends(get_content_generator),
    repository: ContentRepository = Depends(get_content_repository)
):
    """
    Generate new educational content and store it.

    One provider call followed by one store write; a provider failure is
    reported to the caller and nothing is stored.
    """
    try:
        generated = await generator.generate(request)
    except ContentGenerationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    content_id = await repository.create({
        'title': request.title,
        'contentType': request.contentType,
        'content': generated.body,
        'curriculumId': request.curriculumId,
    })

    return GeneratedContentResponse(
        id=content_id,
        body=generated.body,
        providerModel=generated.providerModel,
        contentType=generated.contentType,
        title=generated.title,
    )


@router.post("/modify", response_model=ModifiedContentResponse)
async def modify_content(
    request: ModifyContentRequest,
    modifier: ContentModifier = Depends(get_content_modifier),
    repository: ContentRepository = Depends(get_content_repository)
):
    """Rewrite a stored body and replace it in place."""
    original = await _get_record_or_404(request.contentId, repository)

    try:
        modified = await modifier.modify(
            original.content,
            request.modificationType,
            request.instructions
        )
    except ContentModificationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await repository.update(request.contentId, {'content': modified.newBody})
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Content not found")

    return ModifiedContentResponse(
        id=request.contentId,
        newBody=modified.newBody,
        originalBody=modified.originalBody,
        modificationType=modified.modificationType,
        stats=modified.stats,
    )


@router.get("/list", response_model=List[ContentRecord])
async def list_content(repository: ContentRepository = Depends(get_content_repository)):
    return await repository.list_all()


@router.get("/recent", response_model=List[RecentContentItem])
async def recent_content(repository: ContentRepository = Depends(get_content_repository)):
    """Most recently created content with a coarse age string."""
    records = await repository.list_recent(settings.RECENT_CONTENT_LIMIT)
    return [
        RecentContentItem(
            id=record.id,
            title=record.title,
            type=record.contentType,
            timeAgo=get_time_ago(record.createdAt),
        )
        for record in records
    ]


@router.get("/models", response_model=List[ModelInfo])
async def available_models():
    return list_models()


@router.get("/{content_id}", response_model=ContentRecord)
async def get_content(
    content_id: int,
    repository: ContentRepository = Depends(get_content_repository)
):
    return await _get_record_or_404(content_id, repository)


@router.get("/{content_id}/preview", response_model=ContentPreviewResponse)
async def preview_content(
    content_id: int,
    repository: ContentRepository = Depends(get_content_repository)
):
    """Typed, always-renderable view of a stored body."""
    record = await _get_record_or_404(content_id, repository)
    capability = resolve_presentation(record.contentType)
    decoded = capability.parse(record.content)

    if not decoded.ok:
        logger.info(f"Content {content_id} is not valid {capability.name} JSON, showing placeholder")

    return ContentPreviewResponse(
        id=record.id,
        contentType=record.contentType,
        presentation=capability.name,
        parsed=decoded.ok,
        view=capability.render(decoded.value, title=record.title),
    )


@router.post("/{content_id}/edit", response_model=ContentPreviewResponse)
async def edit_content(
    content_id: int,
    request: ContentEditRequest,
    repository: ContentRepository = Depends(get_content_repository)
):
    """Apply a structural edit and store the re-serialized body."""
    record = await _get_record_or_404(content_id, repository)
    capability = resolve_presentation(record.contentType)
    decoded = capability.parse(record.content)

    if not decoded.ok and not capability.keeps_body_on_fallback:
        raise HTTPException(
            status_code=400,
            detail=f"Stored body is not structured {capability.name} JSON; editing it would discard the original text"
        )
    structure = decoded.value

    try:
        edited = capability.edit(structure, request.patch)
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid edit: {e}")

    updated = await repository.update(content_id, {'content': capability.serialize(edited)})
    return ContentPreviewResponse(
        id=updated.id,
        contentType=updated.contentType,
        presentation=capability.name,
        parsed=True,
        view=capability.render(edited, title=updated.title),
    )


@router.post("/{content_id}/quiz/score", response_model=QuizScoreResponse)
async def score_content_quiz(
    content_id: int,
    request: QuizScoreRequest,
    repository: ContentRepository = Depends(get_content_repository)
):
    """Check a set of selected answers against a stored quiz."""
    record = await _get_record_or_404(content_id, repository)
    if ContentType.parse(record.contentType) != ContentType.QUIZ:
        raise HTTPException(status_code=400, detail="Content is not a quiz")

    quiz = resolve_presentation(record.contentType).parse(record.content).value
    result = score_quiz(request.selectedAnswers, quiz.questions)
    if not result.complete:
        raise HTTPException(status_code=400, detail="Answer every question before checking")

    return QuizScoreResponse(
        score=result.score,
        total=result.total,
        percentage=result.percentage,
        complete=result.complete,
    )
