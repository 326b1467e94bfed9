"""Scoring for multiple-choice quizzes."""

from dataclasses import dataclass
from typing import List, Sequence

from models.content_models import QuizQuestion

UNANSWERED = -1


@dataclass
class QuizScore:
    score: int
    total: int
    percentage: int
    complete: bool


def is_quiz_complete(selected_answers: Sequence[int]) -> bool:
    """A quiz can be checked only once every question has a selected answer."""
    return all(answer != UNANSWERED for answer in selected_answers)


def score_quiz(selected_answers: Sequence[int], questions: List[QuizQuestion]) -> QuizScore:
    """
    Count positions where the selected index matches the correct one.

    Missing selections count as unanswered.
    """
    answers = list(selected_answers)[:len(questions)]
    answers += [UNANSWERED] * (len(questions) - len(answers))

    score = sum(
        1 for answer, question in zip(answers, questions)
        if answer == question.correctAnswerIndex
    )
    total = len(questions)
    percentage = round(100 * score / total) if total else 0

    return QuizScore(
        score=score,
        total=total,
        percentage=percentage,
        complete=is_quiz_complete(answers),
    )
