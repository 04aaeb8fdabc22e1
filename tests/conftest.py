import pytest
from loguru import logger

from patente_tutor.models import Category, LearningItem


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tutor.db")
    return db_path


@pytest.fixture
def log_messages():
    """Collect loguru output emitted during a test."""
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(handler_id)


def make_item(item_id, category=Category.GENERAL, **kwargs):
    fields = {"prompt": f"it-{item_id}", "answer": f"cn-{item_id}"}
    fields.update(kwargs)
    return LearningItem(id=item_id, category=category, **fields)
