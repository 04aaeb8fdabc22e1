"""Seed the database with the built-in vocabulary."""
import json
from pathlib import Path

from patente_tutor.db import get_connection
from patente_tutor.models import LearningItem
from patente_tutor.vocabulary import load_vocabulary, merge_vocabulary, save_vocabulary

CONTENT_DIR = Path(__file__).parent / "content"


def load_default_vocabulary() -> list[LearningItem]:
    """Read the packaged default word list."""
    data = json.loads((CONTENT_DIR / "vocabulary.json").read_text(encoding="utf-8"))
    return [LearningItem.from_dict(record) for record in data["items"]]


def is_seeded(db_path: str) -> bool:
    """Check whether the database holds any vocabulary yet."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM vocabulary").fetchone()[0]
    conn.close()
    return count > 0


def seed_vocabulary(db_path: str) -> list[LearningItem]:
    """Merge the defaults with stored items and write the result back.

    Stored items override defaults with the same id, so progress survives a
    new release of the word list while newly shipped words are picked up.
    """
    defaults = load_default_vocabulary()
    stored = load_vocabulary(db_path)
    default_ids = {item.id for item in defaults}
    # User and imported words stay ahead of the built-in list
    extra = [item for item in stored if item.id not in default_ids]
    merged = merge_vocabulary(extra, defaults, stored)
    save_vocabulary(db_path, merged)
    return merged
