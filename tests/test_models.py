"""Tests for data model classes."""
import pytest

from patente_tutor.models import Category, LearningItem, QuizAttempt


def test_learning_item_defaults():
    item = LearningItem(id="x", prompt="Casco", answer="头盔")
    assert item.category is Category.GENERAL
    assert item.repetition == 0
    assert item.interval == 0
    assert item.ease_factor == 2.5
    assert item.next_review_date == 0
    assert item.is_new


def test_new_item_is_always_due():
    item = LearningItem(id="x", prompt="Casco", answer="头盔")
    assert item.is_due(0)
    assert item.is_due(1_700_000_000_000)


def test_item_due_boundary():
    item = LearningItem(id="x", prompt="Casco", answer="头盔", next_review_date=1000)
    assert item.is_due(1000)
    assert not item.is_due(999)


def test_to_dict_from_dict_is_lossless():
    item = LearningItem(
        id="ru-2", prompt="Sorpasso", answer="超车", category=Category.RULES,
        repetition=3, interval=16, ease_factor=2.3600000000000003,
        next_review_date=1_712_345_678_901,
    )
    data = item.to_dict()
    assert data["category"] == "RULES"
    assert LearningItem.from_dict(data) == item


def test_from_dict_accepts_camel_case_records():
    record = {
        "id": "sa-1", "it": "Cintura di sicurezza", "cn": "安全带",
        "category": "安全防护 (Sicurezza)", "interval": 6, "easeFactor": 2.6,
        "nextReviewDate": 1_700_000_000_000, "repetition": 2,
    }
    item = LearningItem.from_dict(record)
    assert item.prompt == "Cintura di sicurezza"
    assert item.answer == "安全带"
    assert item.category is Category.SAFETY
    assert item.ease_factor == 2.6
    assert item.next_review_date == 1_700_000_000_000


def test_from_dict_fills_defaults():
    item = LearningItem.from_dict({"id": 7, "prompt": "Pedone", "answer": "行人"})
    assert item.id == "7"
    assert item.category is Category.GENERAL
    assert item.ease_factor == 2.5


def test_from_dict_missing_answer():
    with pytest.raises(ValueError):
        LearningItem.from_dict({"id": "a", "prompt": "Pedone"})


def test_category_parse_by_name_and_label():
    assert Category.parse("road_signs") is Category.ROAD_SIGNS
    assert Category.parse("证件法规 (Documenti)") is Category.DOCUMENTS
    assert Category.parse(Category.VEHICLE) is Category.VEHICLE


def test_category_parse_unknown():
    with pytest.raises(ValueError):
        Category.parse("WEATHER")


def test_category_set_is_closed():
    assert [c.name for c in Category] == [
        "ROAD_SIGNS", "RULES", "VEHICLE", "BEHAVIOR",
        "SAFETY", "ACCIDENTS", "DOCUMENTS", "GENERAL",
    ]


def test_quiz_attempt_selected_answer():
    item = LearningItem(id="x", prompt="Casco", answer="头盔")
    attempt = QuizAttempt(item=item, options=["安全带", "头盔"])
    assert attempt.selected_answer is None
    attempt.selected_index = 1
    assert attempt.selected_answer == "头盔"


def test_from_dict_raises_fields_to_their_floor(log_messages):
    item = LearningItem.from_dict({
        "id": "x", "prompt": "Casco", "answer": "头盔",
        "repetition": -1, "interval": -2, "easeFactor": 1.0, "nextReviewDate": -10,
    })
    assert item.repetition == 0
    assert item.interval == 0
    assert item.ease_factor == 1.3
    assert item.next_review_date == 0
    assert sum("below minimum" in m for m in log_messages) == 4


def test_from_dict_valid_record_is_silent(log_messages):
    LearningItem.from_dict({"id": "x", "prompt": "Casco", "answer": "头盔", "ease_factor": 1.3})
    assert not any("WARNING" in m for m in log_messages)
