"""Progress statistics for the home screen."""
from typing import Iterable

from patente_tutor.models import Category, LearningItem, UserStats
from patente_tutor.quiz import get_attempt_counts
from patente_tutor.sm2 import now_ms, round_half_up

MASTERED_REPETITIONS = 5


def count_learned(items: Iterable[LearningItem]) -> int:
    return sum(1 for item in items if item.repetition > 0)


def count_mastered(items: Iterable[LearningItem]) -> int:
    return sum(1 for item in items if item.repetition > MASTERED_REPETITIONS)


def count_due(items: Iterable[LearningItem], now: int | None = None) -> int:
    if now is None:
        now = now_ms()
    return sum(1 for item in items if item.is_due(now))


def get_category_progress(items: Iterable[LearningItem]) -> list[dict]:
    """Learned/total per category, in enum order."""
    items = list(items)
    results = []
    for category in Category:
        in_category = [item for item in items if item.category is category]
        learned = count_learned(in_category)
        total = len(in_category)
        results.append({
            "category": category,
            "label": category.label,
            "total": total,
            "learned": learned,
            "percent": round_half_up(learned / total * 100) if total else 0,
        })
    return results


def get_progress_color(percent: float) -> str:
    if percent >= 80:
        return "green"
    elif percent >= 50:
        return "yellow"
    elif percent > 0:
        return "dark_orange"
    return "red"


def get_user_stats(db_path: str, items: Iterable[LearningItem], now: int | None = None) -> UserStats:
    items = list(items)
    total, correct = get_attempt_counts(db_path)
    return UserStats(
        total_attempts=total,
        total_correct=correct,
        learned_count=count_learned(items),
        mastered_count=count_mastered(items),
        due_count=count_due(items, now),
        by_category=get_category_progress(items),
    )
