"""
Content-type dispatch for presentation and editing.

Every stored body is turned into a renderable structure, whatever the
provider emitted: lessons and unknown types are plain markdown, quizzes,
exercises and projects are decoded from JSON and fall back to a fully
populated placeholder when decoding fails.
"""

import json
import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from models.content_models import (
    CellType,
    ExerciseSpec,
    ProjectCell,
    ProjectContent,
    QuizContent,
    QuizQuestion,
    TestCase,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

SIMULATED_OUTPUT = (
    "# Simulated output for {language} code\n"
    "This is what would appear if the code was actually executed."
)


class ContentType(str, Enum):
    LESSON = "lesson"
    QUIZ = "quiz"
    EXERCISE = "exercise"
    PROJECT = "project"

    @classmethod
    def parse(cls, label: Optional[str]) -> Optional["ContentType"]:
        """Case-insensitive, trimmed lookup; None for unknown labels."""
        normalized = (label or "").strip().lower()
        if normalized == "programming exercise":
            return cls.EXERCISE
        try:
            return cls(normalized)
        except ValueError:
            return None


@dataclass
class DecodeResult(Generic[T]):
    value: T
    ok: bool
    error: Optional[str] = None


def decode_or_default(body: str, model: Type[M], default_factory: Callable[[], M]) -> DecodeResult[M]:
    """
    Decode a JSON body into a model, or return a complete default value.

    Never yields a partially populated structure.
    """
    try:
        data = json.loads(body)
        if isinstance(data, list) and model is QuizContent:
            data = {"questions": data}
        return DecodeResult(value=model.model_validate(data), ok=True)
    except (ValueError, TypeError, ValidationError) as e:
        logger.debug(f"Falling back to default {model.__name__}: {e}")
        return DecodeResult(value=default_factory(), ok=False, error=str(e))


def _checked_index(patch: Dict[str, Any], key: str, size: int) -> int:
    """Read a list position from an edit patch; negative positions are rejected."""
    index = patch[key]
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"{key} must be an integer")
    if not 0 <= index < size:
        raise ValueError(f"{key} {index} out of range")
    return index


class PresentationCapability:
    """parse / render / edit / serialize for one content type."""

    name = "base"
    # Whether the placeholder built on a failed parse still carries the raw body
    keeps_body_on_fallback = True

    def parse(self, body: str) -> DecodeResult:
        raise NotImplementedError

    def render(self, structure, title: str = "") -> Dict[str, Any]:
        raise NotImplementedError

    def edit(self, structure, patch: Dict[str, Any]):
        raise NotImplementedError

    def serialize(self, structure) -> str:
        raise NotImplementedError

    def _unknown_op(self, op: str):
        raise ValueError(f"Unsupported edit operation '{op}' for {self.name} content")


class MarkdownCapability(PresentationCapability):
    name = "markdown"

    def parse(self, body: str) -> DecodeResult[str]:
        return DecodeResult(value=body, ok=True)

    def render(self, structure: str, title: str = "") -> Dict[str, Any]:
        return {"kind": self.name, "title": title, "markdown": structure}

    def edit(self, structure: str, patch: Dict[str, Any]) -> str:
        op = patch.get("op", "update")
        if op != "update":
            self._unknown_op(op)
        return patch.get("content", structure)

    def serialize(self, structure: str) -> str:
        return structure


class JSONCapability(PresentationCapability):
    """Shared behaviour for JSON-bodied content."""

    model: Type[BaseModel] = BaseModel
    editable_fields = ()

    def default(self, body: str) -> BaseModel:
        raise NotImplementedError

    def parse(self, body: str) -> DecodeResult:
        return decode_or_default(body, self.model, lambda: self.default(body))

    def render(self, structure: BaseModel, title: str = "") -> Dict[str, Any]:
        return {"kind": self.name, "title": title, **structure.model_dump(mode="json")}

    def serialize(self, structure: BaseModel) -> str:
        return structure.model_dump_json(exclude_none=True)

    def _update_fields(self, structure: BaseModel, patch: Dict[str, Any]) -> BaseModel:
        data = structure.model_dump()
        data.update({k: v for k, v in patch.items() if k in self.editable_fields})
        return self.model.model_validate(data)


class QuizCapability(JSONCapability):
    name = "quiz"
    keeps_body_on_fallback = False
    model = QuizContent
    editable_fields = ("title", "description")

    def default(self, body: str) -> QuizContent:
        return QuizContent(
            description="Quiz content",
            questions=[
                QuizQuestion(
                    question="Sample question",
                    options=["Option 1", "Option 2", "Option 3"],
                    correctAnswerIndex=0,
                )
            ],
        )

    def edit(self, structure: QuizContent, patch: Dict[str, Any]) -> QuizContent:
        op = patch.get("op", "update")
        quiz = structure.model_copy(deep=True)
        questions = quiz.questions

        if op == "update":
            return self._update_fields(quiz, patch)
        if op == "add_question":
            questions.append(
                QuizQuestion(
                    question=patch.get("question", "New question"),
                    options=patch.get("options", ["Option 1", "Option 2", "Option 3"]),
                    correctAnswerIndex=patch.get("correctAnswerIndex", 0),
                )
            )
        elif op == "remove_question":
            questions.pop(_checked_index(patch, "questionIndex", len(questions)))
        elif op == "update_question":
            index = _checked_index(patch, "questionIndex", len(questions))
            data = questions[index].model_dump()
            data.update({k: v for k, v in patch.items() if k in ("question", "options", "correctAnswerIndex", "explanation")})
            questions[index] = QuizQuestion.model_validate(data)
        elif op == "add_option":
            question = questions[_checked_index(patch, "questionIndex", len(questions))]
            text = patch.get("text", "New option")
            if not isinstance(text, str):
                raise ValueError("Option text must be a string")
            question.options.append(text)
        elif op == "remove_option":
            question = questions[_checked_index(patch, "questionIndex", len(questions))]
            option_index = _checked_index(patch, "optionIndex", len(question.options))
            if len(question.options) <= 2:
                raise ValueError("A question needs at least two options")
            question.options.pop(option_index)
            if question.correctAnswerIndex == option_index:
                question.correctAnswerIndex = 0
            elif question.correctAnswerIndex > option_index:
                question.correctAnswerIndex -= 1
        elif op == "set_correct_answer":
            question = questions[_checked_index(patch, "questionIndex", len(questions))]
            question.correctAnswerIndex = _checked_index(patch, "optionIndex", len(question.options))
        else:
            self._unknown_op(op)

        # In-place edits bypass field validation; re-check the whole quiz
        return QuizContent.model_validate(quiz.model_dump())


class ExerciseCapability(JSONCapability):
    name = "exercise"
    model = ExerciseSpec
    editable_fields = ("description", "instructions", "initialCode", "language", "solution", "testCases")

    def default(self, body: str) -> ExerciseSpec:
        return ExerciseSpec(
            description="Exercise description",
            instructions=body,
            initialCode="# Your code here",
            language="python",
        )

    def edit(self, structure: ExerciseSpec, patch: Dict[str, Any]) -> ExerciseSpec:
        op = patch.get("op", "update")
        exercise = structure.model_copy(deep=True)

        if op == "update":
            return self._update_fields(exercise, patch)
        if op == "add_test_case":
            exercise.testCases.append(
                TestCase(
                    input=patch.get("input", ""),
                    expectedOutput=patch.get("expectedOutput", ""),
                    description=patch.get("description", ""),
                )
            )
        elif op == "remove_test_case":
            exercise.testCases.pop(patch["testCaseIndex"])
        else:
            self._unknown_op(op)
        return exercise


class ProjectCapability(JSONCapability):
    name = "project"
    model = ProjectContent
    editable_fields = ("description",)

    def default(self, body: str) -> ProjectContent:
        return ProjectContent(
            description="Project description",
            cells=[ProjectCell(id="1", type=CellType.MARKDOWN, content=body)],
        )

    def edit(self, structure: ProjectContent, patch: Dict[str, Any]) -> ProjectContent:
        op = patch.get("op", "update")
        project = structure.model_copy(deep=True)
        cells = project.cells

        if op == "update":
            return self._update_fields(project, patch)
        if op == "add_cell":
            cell_type = CellType(patch.get("type", CellType.MARKDOWN.value))
            default_text = "## New section" if cell_type == CellType.MARKDOWN else "# Enter your code here"
            cell = ProjectCell(
                id=uuid.uuid4().hex[:7],
                type=cell_type,
                content=patch.get("content", default_text),
                language=patch.get("language"),
            )
            after = patch.get("afterIndex", len(cells) - 1)
            cells.insert(after + 1, cell)
        elif op == "remove_cell":
            project.cells = [c for c in cells if c.id != patch["cellId"]]
        elif op == "move_cell":
            index = self._cell_index(cells, patch["cellId"])
            direction = patch.get("direction", "down")
            target = index - 1 if direction == "up" else index + 1
            if 0 <= target < len(cells):
                cells.insert(target, cells.pop(index))
        elif op == "update_cell":
            cell = cells[self._cell_index(cells, patch["cellId"])]
            if "content" in patch:
                cell.content = patch["content"]
            if "language" in patch and cell.type == CellType.CODE:
                cell.language = patch["language"]
        elif op == "run_cell":
            cell = cells[self._cell_index(cells, patch["cellId"])]
            if cell.type != CellType.CODE:
                raise ValueError("Only code cells can be run")
            cell.output = SIMULATED_OUTPUT.format(language=cell.language)
        elif op == "clear_output":
            cells[self._cell_index(cells, patch["cellId"])].output = None
        else:
            self._unknown_op(op)
        return project

    @staticmethod
    def _cell_index(cells, cell_id: str) -> int:
        for index, cell in enumerate(cells):
            if cell.id == cell_id:
                return index
        raise ValueError(f"Cell {cell_id} not found")


_MARKDOWN = MarkdownCapability()
_QUIZ = QuizCapability()
_EXERCISE = ExerciseCapability()
_PROJECT = ProjectCapability()


_CAPABILITIES: Dict[ContentType, PresentationCapability] = {
    ContentType.LESSON: _MARKDOWN,
    ContentType.QUIZ: _QUIZ,
    ContentType.EXERCISE: _EXERCISE,
    ContentType.PROJECT: _PROJECT,
}


def resolve_presentation(content_type: Optional[str]) -> PresentationCapability:
    """Map a content-type label to its capability; unknown labels render as markdown."""
    kind = ContentType.parse(content_type)
    if kind is None:
        return _MARKDOWN
    return _CAPABILITIES[kind]
