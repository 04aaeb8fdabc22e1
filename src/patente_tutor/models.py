"""Data classes for the vocabulary trainer domain model."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from loguru import logger

ALL = "ALL"

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3


class Category(Enum):
    ROAD_SIGNS = "道路标志 (Segnali)"
    RULES = "交通规则 (Norme)"
    VEHICLE = "车辆构造 (Motore)"
    BEHAVIOR = "驾驶行为 (Comportamento)"
    SAFETY = "安全防护 (Sicurezza)"
    ACCIDENTS = "事故处理 (Incidenti)"
    DOCUMENTS = "证件法规 (Documenti)"
    GENERAL = "通用词汇 (Generale)"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Category":
        """Resolve a member name (any case) or a display label to a Category."""
        if isinstance(text, cls):
            return text
        key = str(text).strip()
        if key.upper() in cls.__members__:
            return cls[key.upper()]
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown category: {text!r}")


def _at_least(value, minimum, field_name: str, item_id: str):
    """Raise a stored field up to its floor, logging the bad record."""
    if value < minimum:
        logger.warning("Item {} has {} {} below minimum, using {}", item_id, field_name, value, minimum)
        return minimum
    return value


@dataclass
class LearningItem:
    id: str
    prompt: str
    answer: str
    category: Category = Category.GENERAL
    repetition: int = 0
    interval: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    next_review_date: int = 0

    @property
    def is_new(self) -> bool:
        return self.next_review_date == 0

    def is_due(self, now: int) -> bool:
        return self.next_review_date <= now

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "answer": self.answer,
            "category": self.category.name,
            "repetition": self.repetition,
            "interval": self.interval,
            "ease_factor": self.ease_factor,
            "next_review_date": self.next_review_date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LearningItem":
        """Build an item from a stored record.

        Accepts both the snake_case layout written by ``to_dict`` and the
        camelCase layout (``it``/``cn``/``easeFactor``/``nextReviewDate``)
        used by the browser version of the trainer.
        """
        def pick(*keys, default=None):
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        item_id = pick("id")
        prompt = pick("prompt", "it")
        answer = pick("answer", "cn")
        if item_id is None or prompt is None or answer is None:
            raise ValueError(f"Record is missing id/prompt/answer: {data!r}")
        item_id = str(item_id)
        return cls(
            id=item_id,
            prompt=str(prompt),
            answer=str(answer),
            category=Category.parse(pick("category", default=Category.GENERAL.name)),
            repetition=_at_least(int(pick("repetition", default=0)), 0, "repetition", item_id),
            interval=_at_least(int(pick("interval", default=0)), 0, "interval", item_id),
            ease_factor=_at_least(
                float(pick("ease_factor", "easeFactor", default=DEFAULT_EASE_FACTOR)),
                MIN_EASE_FACTOR, "ease_factor", item_id,
            ),
            next_review_date=_at_least(
                int(pick("next_review_date", "nextReviewDate", default=0)), 0, "next_review_date", item_id,
            ),
        )


@dataclass
class QuizAttempt:
    item: LearningItem
    options: list[str]
    selected_index: Optional[int] = None
    is_correct: Optional[bool] = None

    @property
    def selected_answer(self) -> Optional[str]:
        if self.selected_index is None:
            return None
        return self.options[self.selected_index]


@dataclass
class UserStats:
    total_attempts: int = 0
    total_correct: int = 0
    learned_count: int = 0
    mastered_count: int = 0
    due_count: int = 0
    by_category: list[dict] = field(default_factory=list)
