"""Next-item selection and multiple-choice option building."""
import random
from dataclasses import dataclass
from typing import Iterable

from loguru import logger

from patente_tutor.models import ALL, Category, LearningItem
from patente_tutor.sm2 import now_ms

OPTION_COUNT = 3


class EmptyPoolError(LookupError):
    """Raised when the requested category has nothing to review."""


@dataclass
class ReviewPrompt:
    item: LearningItem
    options: list[str]


def filter_pool(items: Iterable[LearningItem], category: Category | str = ALL) -> list[LearningItem]:
    if isinstance(category, str) and category.upper() == ALL:
        return list(items)
    category = Category.parse(category)
    return [item for item in items if item.category is category]


def pick_item(pool: list[LearningItem], now: int, rng: random.Random) -> LearningItem:
    """Due items first, then never-learned items, then anything in the pool."""
    due = [item for item in pool if item.is_due(now)]
    if due:
        return rng.choice(due)
    unseen = [item for item in pool if item.repetition == 0]
    if unseen:
        return rng.choice(unseen)
    return rng.choice(pool)


def build_options(
    chosen: LearningItem,
    vocabulary: Iterable[LearningItem],
    rng: random.Random,
    count: int = OPTION_COUNT,
) -> list[str]:
    """Correct answer plus up to ``count - 1`` distinct distractors, shuffled.

    Distractors come from the whole vocabulary, not just the filtered pool.
    With fewer distinct answers available the list is simply shorter.
    """
    candidates = []
    seen = {chosen.answer}
    for item in vocabulary:
        if item.id == chosen.id or item.answer in seen:
            continue
        seen.add(item.answer)
        candidates.append(item.answer)
    distractors = rng.sample(candidates, min(count - 1, len(candidates)))
    options = distractors + [chosen.answer]
    rng.shuffle(options)
    return options


def select_next(
    items: Iterable[LearningItem],
    category: Category | str = ALL,
    now: int | None = None,
    rng: random.Random | None = None,
) -> ReviewPrompt:
    """Pick the next item to review and build its answer options.

    Raises:
        EmptyPoolError: no item matches ``category``.
    """
    vocabulary = list(items)
    pool = filter_pool(vocabulary, category)
    if not pool:
        raise EmptyPoolError(f"No items to review for {category}")
    if now is None:
        now = now_ms()
    if rng is None:
        rng = random.Random()

    chosen = pick_item(pool, now, rng)
    options = build_options(chosen, vocabulary, rng)
    if len(options) < OPTION_COUNT:
        logger.info("Only {} option(s) available for item {}", len(options), chosen.id)
    return ReviewPrompt(item=chosen, options=options)
