"""Import vocabulary lists from JSON, YAML or CSV files."""
import csv
import json
from datetime import datetime
from pathlib import Path

from loguru import logger

from patente_tutor.db import get_connection
from patente_tutor.models import LearningItem
from patente_tutor.vocabulary import merge_vocabulary, save_item

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml", ".csv")


def _unwrap(data) -> list:
    # Accept a bare list or {"items": [...]} as written by the packaged defaults
    if isinstance(data, dict):
        data = data.get("items", data.get("vocabulary"))
    if not isinstance(data, list):
        raise ValueError("Expected a list of vocabulary records")
    return data


def read_records(file_path: str) -> list[dict]:
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _unwrap(json.loads(path.read_text(encoding="utf-8")))
    elif suffix in (".yaml", ".yml"):
        import yaml
        return _unwrap(yaml.safe_load(path.read_text(encoding="utf-8")))
    elif suffix == ".csv":
        with path.open(newline="", encoding="utf-8") as f:
            # Blank cells fall back to the defaults of a fresh item
            return [
                {key: value for key, value in row.items() if value not in (None, "")}
                for row in csv.DictReader(f)
            ]
    raise ValueError(f"Unsupported file type {suffix!r}; use one of {', '.join(SUPPORTED_SUFFIXES)}")


def read_vocabulary_file(file_path: str) -> list[LearningItem]:
    """Parse a vocabulary file; duplicate ids inside it keep the last record."""
    items = []
    for index, record in enumerate(read_records(file_path), 1):
        if not isinstance(record, dict):
            raise ValueError(f"Record {index} is not a mapping: {record!r}")
        try:
            items.append(LearningItem.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Record {index}: {e}") from e
    return merge_vocabulary(items)


def import_file(db_path: str, file_path: str) -> dict:
    """Import a file into the database, replacing stored items with the same id."""
    items = read_vocabulary_file(file_path)
    conn = get_connection(db_path)
    existing = {row["id"] for row in conn.execute("SELECT id FROM vocabulary").fetchall()}
    conn.close()

    added = updated = 0
    for item in items:
        save_item(db_path, item)
        if item.id in existing:
            updated += 1
        else:
            added += 1

    filename = Path(file_path).name
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO imported_content (filename, added, updated, imported_at) VALUES (?, ?, ?, ?)",
        (filename, added, updated, datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    logger.info("Imported {}: {} added, {} updated", filename, added, updated)
    return {"filename": filename, "added": added, "updated": updated}
