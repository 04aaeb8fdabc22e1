"""Quiz rounds and the attempt log."""
from datetime import datetime

from patente_tutor.db import get_connection
from patente_tutor.models import Category, LearningItem, QuizAttempt
from patente_tutor.review import ReviewPrompt
from patente_tutor.sm2 import update_progress

UNANSWERED = "UNANSWERED"
ANSWERED = "ANSWERED"

CORRECT_QUALITY = 5
WRONG_QUALITY = 0


class QuizRound:
    """One multiple-choice prompt; answerable exactly once."""

    def __init__(self, item: LearningItem, options: list[str]):
        if item.answer not in options:
            raise ValueError(f"Options for {item.id} do not contain its answer")
        self.item = item
        self.options = list(options)
        self.selected_index: int | None = None
        self.is_correct: bool | None = None
        self.updated_item: LearningItem | None = None

    @classmethod
    def from_prompt(cls, prompt: ReviewPrompt) -> "QuizRound":
        return cls(prompt.item, prompt.options)

    @property
    def state(self) -> str:
        return UNANSWERED if self.selected_index is None else ANSWERED

    @property
    def correct_index(self) -> int:
        return self.options.index(self.item.answer)

    def answer(self, index: int, now: int | None = None) -> LearningItem | None:
        """Grade the chosen option and reschedule the item.

        Returns the updated item, or None if the round was already answered.
        """
        if self.selected_index is not None:
            return None
        if not 0 <= index < len(self.options):
            raise IndexError(f"Option {index} out of range (0-{len(self.options) - 1})")
        self.selected_index = index
        self.is_correct = self.options[index] == self.item.answer
        quality = CORRECT_QUALITY if self.is_correct else WRONG_QUALITY
        self.updated_item = update_progress(self.item, quality, now=now)
        return self.updated_item

    @property
    def attempt(self) -> QuizAttempt:
        return QuizAttempt(
            item=self.item,
            options=list(self.options),
            selected_index=self.selected_index,
            is_correct=self.is_correct,
        )


def record_quiz_answer(db_path: str, attempt: QuizAttempt) -> None:
    if attempt.is_correct is None:
        raise ValueError("Cannot record an unanswered attempt")
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO quiz_results (item_id, category, selected_answer, is_correct, answered_at)
        VALUES (?, ?, ?, ?, ?)""",
        (
            attempt.item.id, attempt.item.category.name, attempt.selected_answer,
            int(attempt.is_correct), datetime.now().isoformat(),
        ),
    )
    conn.commit()
    conn.close()


def get_attempt_counts(db_path: str) -> tuple[int, int]:
    """Return (total attempts, correct attempts)."""
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT COUNT(*) as total, SUM(is_correct) as correct FROM quiz_results"
    ).fetchone()
    conn.close()
    return row["total"], row["correct"] or 0


def get_quiz_score(db_path: str) -> float:
    """Overall quiz score as percentage."""
    total, correct = get_attempt_counts(db_path)
    if total == 0:
        return 0.0
    return round((correct / total) * 100, 1)


def get_category_quiz_scores(db_path: str) -> dict:
    """Quiz scores broken down by category."""
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT category, COUNT(*) as total, SUM(is_correct) as correct
        FROM quiz_results
        GROUP BY category"""
    ).fetchall()
    conn.close()
    return {
        Category[row["category"]]: round((row["correct"] / row["total"]) * 100, 1)
        for row in rows
    }
