"""Typed structures for stored content records and their type-specific bodies."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class ContentRecord(BaseModel):
    """One generated or modified unit of learning material."""
    id: int
    title: str
    contentType: str
    content: str
    curriculumId: int
    createdAt: datetime
    updatedAt: Optional[datetime] = None


class CurriculumRecord(BaseModel):
    id: int
    title: str
    description: str
    difficulty: str
    lessons: int
    quizzes: int
    exercises: int
    projects: int
    isRecommended: Optional[bool] = False
    createdAt: datetime
    updatedAt: datetime


# Quiz

class QuizQuestion(BaseModel):
    question: str
    options: List[str] = Field(..., min_length=2)
    correctAnswerIndex: int = 0
    explanation: Optional[str] = None

    @model_validator(mode="after")
    def check_answer_index(self):
        if not 0 <= self.correctAnswerIndex < len(self.options):
            raise ValueError(
                f"correctAnswerIndex {self.correctAnswerIndex} out of range for {len(self.options)} options"
            )
        return self


class QuizContent(BaseModel):
    title: Optional[str] = None
    description: str = ""
    questions: List[QuizQuestion] = []


# Programming exercise

class TestCase(BaseModel):
    input: str = ""
    expectedOutput: str = ""
    description: str = ""


class ExerciseSpec(BaseModel):
    description: str = ""
    instructions: str = ""
    initialCode: str = "# Your code here"
    language: str = "python"
    testCases: List[TestCase] = []
    solution: Optional[str] = None


# Notebook-style project

class CellType(str, Enum):
    MARKDOWN = "markdown"
    CODE = "code"


class ProjectCell(BaseModel):
    id: str
    type: CellType
    content: str = ""
    language: Optional[str] = None
    output: Optional[str] = None

    @model_validator(mode="after")
    def language_only_for_code(self):
        if self.type == CellType.CODE and not self.language:
            self.language = "python"
        elif self.type == CellType.MARKDOWN:
            self.language = None
        return self


class ProjectContent(BaseModel):
    description: str = ""
    cells: List[ProjectCell] = []
