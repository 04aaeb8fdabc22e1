"""SM-2 spaced repetition algorithm."""
import math
import time
from dataclasses import replace

from loguru import logger

from patente_tutor.models import LearningItem, MIN_EASE_FACTOR

DAY_MS = 86_400_000
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_quality(quality: int) -> int:
    """Clamp a quality score into 0..5, logging when the caller sent garbage."""
    clamped = min(MAX_QUALITY, max(MIN_QUALITY, int(quality)))
    if clamped != quality:
        logger.warning("Invalid quality {} clamped to {}", quality, clamped)
    return clamped


def sm2_update(
    quality: int,
    repetitions: int,
    ease_factor: float,
    interval: int,
) -> dict:
    """Calculate next review parameters using SM-2.

    Args:
        quality: Rating 0-5 (0=complete blackout, 5=perfect)
        repetitions: Number of consecutive correct reviews
        ease_factor: Current ease factor (minimum 1.3)
        interval: Current interval in days

    Returns:
        Dict with updated interval, repetitions, ease_factor.
    """
    new_ef = ease_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    new_ef = max(MIN_EASE_FACTOR, new_ef)

    if quality >= PASSING_QUALITY:
        if repetitions == 0:
            new_interval = 1
        elif repetitions == 1:
            new_interval = 6
        else:
            # Prior ease factor, not the one just computed; a reviewed item
            # never drops back to a zero-day interval
            new_interval = max(1, round_half_up(interval * ease_factor))
        new_repetitions = repetitions + 1
    else:
        new_repetitions = 0
        new_interval = 1

    return {
        "interval": new_interval,
        "repetitions": new_repetitions,
        "ease_factor": new_ef,
    }


def update_progress(item: LearningItem, quality: int, now: int | None = None) -> LearningItem:
    """Return a copy of ``item`` rescheduled after a review graded ``quality``.

    The input item is left untouched. ``now`` is epoch milliseconds and
    defaults to the current time.
    """
    quality = clamp_quality(quality)
    ease_factor = item.ease_factor
    if ease_factor < MIN_EASE_FACTOR:
        logger.warning("Item {} has ease factor {} below minimum, using {}", item.id, ease_factor, MIN_EASE_FACTOR)
        ease_factor = MIN_EASE_FACTOR
    if now is None:
        now = now_ms()

    updated = sm2_update(
        quality=quality,
        repetitions=max(0, item.repetition),
        ease_factor=ease_factor,
        interval=max(0, item.interval),
    )
    logger.debug(
        "Item {} graded {}: interval {} -> {}, ef {:.2f} -> {:.2f}",
        item.id, quality, item.interval, updated["interval"], ease_factor, updated["ease_factor"],
    )
    return replace(
        item,
        repetition=updated["repetitions"],
        interval=updated["interval"],
        ease_factor=updated["ease_factor"],
        next_review_date=now + updated["interval"] * DAY_MS,
    )
