"""Vocabulary collection helpers and their sqlite persistence."""
from typing import Iterable

from loguru import logger

from patente_tutor.db import get_connection
from patente_tutor.models import Category, LearningItem
from patente_tutor.sm2 import now_ms

UPSERT_SQL = """INSERT INTO vocabulary
    (id, prompt, answer, category, repetition, interval, ease_factor, next_review_date, position)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT(id) DO UPDATE SET
        prompt=excluded.prompt, answer=excluded.answer, category=excluded.category,
        repetition=excluded.repetition, interval=excluded.interval,
        ease_factor=excluded.ease_factor, next_review_date=excluded.next_review_date"""


def merge_vocabulary(*collections: Iterable[LearningItem]) -> list[LearningItem]:
    """Merge collections by id; later versions win, first-seen order is kept."""
    merged: dict[str, LearningItem] = {}
    for collection in collections:
        for item in collection:
            merged[item.id] = item
    return list(merged.values())


def replace_item(items: Iterable[LearningItem], updated: LearningItem) -> list[LearningItem]:
    """Return a new list with the item sharing ``updated.id`` swapped out."""
    return [updated if item.id == updated.id else item for item in items]


def _row_to_item(row) -> LearningItem:
    return LearningItem(
        id=row["id"],
        prompt=row["prompt"],
        answer=row["answer"],
        category=Category[row["category"]],
        repetition=row["repetition"],
        interval=row["interval"],
        ease_factor=row["ease_factor"],
        next_review_date=row["next_review_date"],
    )


def _item_params(item: LearningItem, position: int) -> tuple:
    return (
        item.id, item.prompt, item.answer, item.category.name, item.repetition,
        item.interval, item.ease_factor, item.next_review_date, position,
    )


def load_vocabulary(db_path: str) -> list[LearningItem]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM vocabulary ORDER BY position, rowid").fetchall()
    conn.close()
    return [_row_to_item(r) for r in rows]


def get_item(db_path: str, item_id: str) -> LearningItem | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM vocabulary WHERE id = ?", (item_id,)).fetchone()
    conn.close()
    return _row_to_item(row) if row else None


def save_vocabulary(db_path: str, items: Iterable[LearningItem]) -> None:
    """Upsert the whole collection, storing its order."""
    conn = get_connection(db_path)
    conn.executemany(
        UPSERT_SQL + ", position=excluded.position",
        [_item_params(item, pos) for pos, item in enumerate(items)],
    )
    conn.commit()
    conn.close()


def save_item(db_path: str, item: LearningItem) -> None:
    """Upsert a single item; new items go to the end of the list."""
    conn = get_connection(db_path)
    next_pos = conn.execute("SELECT COALESCE(MAX(position), -1) + 1 FROM vocabulary").fetchone()[0]
    conn.execute(UPSERT_SQL, _item_params(item, next_pos))
    conn.commit()
    conn.close()


def add_custom_item(
    db_path: str,
    prompt: str,
    answer: str,
    category: Category | str = Category.GENERAL,
    now: int | None = None,
) -> LearningItem:
    """Create a user-entered word at the top of the list."""
    prompt, answer = prompt.strip(), answer.strip()
    if not prompt or not answer:
        raise ValueError("Both the Italian term and its translation are required")
    if now is None:
        now = now_ms()
    conn = get_connection(db_path)
    item_id = f"custom-{now}"
    suffix = 1
    while conn.execute("SELECT 1 FROM vocabulary WHERE id = ?", (item_id,)).fetchone():
        item_id = f"custom-{now}-{suffix}"
        suffix += 1
    item = LearningItem(id=item_id, prompt=prompt, answer=answer, category=Category.parse(category))
    first_pos = conn.execute("SELECT COALESCE(MIN(position), 0) - 1 FROM vocabulary").fetchone()[0]
    conn.execute(UPSERT_SQL, _item_params(item, first_pos))
    conn.commit()
    conn.close()
    logger.info("Added custom item {} ({})", item.id, item.prompt)
    return item
