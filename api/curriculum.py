"""
Curriculum API Endpoints

Read access to the curriculum reference data that generated content is
attached to.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_curriculum_repository
from content.content_storage import CurriculumRepository
from models.content_models import CurriculumRecord

router = APIRouter(prefix="/curricula", tags=["curriculum"])


@router.get("", response_model=List[CurriculumRecord])
async def list_curricula(repository: CurriculumRepository = Depends(get_curriculum_repository)):
    return repository.list_all()


@router.get("/{curriculum_id}", response_model=CurriculumRecord)
async def get_curriculum(
    curriculum_id: int,
    repository: CurriculumRepository = Depends(get_curriculum_repository)
):
    curriculum = repository.get(curriculum_id)
    if curriculum is None:
        raise HTTPException(status_code=404, detail="Curriculum not found")
    return curriculum
