# tests/test_importer.py
import json

import pytest

from conftest import make_item
from patente_tutor.db import init_db, get_connection
from patente_tutor.importer import import_file, read_vocabulary_file
from patente_tutor.models import Category
from patente_tutor.vocabulary import get_item, load_vocabulary, save_vocabulary


def test_read_json_list(tmp_path):
    f = tmp_path / "words.json"
    f.write_text(json.dumps([
        {"id": "w1", "prompt": "Semaforo", "answer": "红绿灯", "category": "RULES"},
    ]), encoding="utf-8")
    items = read_vocabulary_file(str(f))
    assert len(items) == 1
    assert items[0].category is Category.RULES


def test_read_json_items_wrapper(tmp_path):
    f = tmp_path / "words.json"
    f.write_text(json.dumps({"items": [{"id": "w1", "prompt": "Casco", "answer": "头盔"}]}), encoding="utf-8")
    assert read_vocabulary_file(str(f))[0].prompt == "Casco"


def test_read_browser_export(tmp_path):
    """Records exported from the browser app use camelCase keys and labels."""
    f = tmp_path / "patente_vocab_v2.json"
    f.write_text(json.dumps([{
        "id": "custom-1", "it": "Nebbia", "cn": "雾", "category": "驾驶行为 (Comportamento)",
        "interval": 6, "easeFactor": 2.6, "nextReviewDate": 1700000000000, "repetition": 2,
    }], ensure_ascii=False), encoding="utf-8")
    item = read_vocabulary_file(str(f))[0]
    assert item.category is Category.BEHAVIOR
    assert item.interval == 6
    assert item.next_review_date == 1700000000000


def test_read_yaml_file(tmp_path):
    f = tmp_path / "words.yaml"
    f.write_text(
        "- id: y1\n  prompt: Frizione\n  answer: 离合器\n  category: VEHICLE\n",
        encoding="utf-8",
    )
    items = read_vocabulary_file(str(f))
    assert items[0].answer == "离合器"
    assert items[0].category is Category.VEHICLE


def test_read_csv_file(tmp_path):
    f = tmp_path / "words.csv"
    f.write_text(
        "id,prompt,answer,category,repetition\n"
        "c1,Pedone,行人,GENERAL,\n"
        "c2,Incrocio,十字路口,general,2\n",
        encoding="utf-8",
    )
    items = read_vocabulary_file(str(f))
    assert [item.id for item in items] == ["c1", "c2"]
    assert items[0].repetition == 0
    assert items[1].repetition == 2


def test_duplicate_ids_in_file_keep_last(tmp_path):
    f = tmp_path / "words.json"
    f.write_text(json.dumps([
        {"id": "d", "prompt": "Old", "answer": "旧"},
        {"id": "d", "prompt": "New", "answer": "新"},
    ]), encoding="utf-8")
    items = read_vocabulary_file(str(f))
    assert len(items) == 1
    assert items[0].prompt == "New"


def test_unsupported_suffix(tmp_path):
    f = tmp_path / "words.txt"
    f.write_text("Casco = 头盔")
    with pytest.raises(ValueError, match="Unsupported"):
        read_vocabulary_file(str(f))


def test_bad_record_is_named(tmp_path):
    f = tmp_path / "words.json"
    f.write_text(json.dumps([
        {"id": "ok", "prompt": "Casco", "answer": "头盔"},
        {"id": "bad", "prompt": "Casco", "answer": "头盔", "category": "WEATHER"},
    ]), encoding="utf-8")
    with pytest.raises(ValueError, match="Record 2"):
        read_vocabulary_file(str(f))


def test_import_file_merges_by_id(tmp_path, tmp_db):
    init_db(tmp_db)
    save_vocabulary(tmp_db, [make_item("a", repetition=3), make_item("b")])
    f = tmp_path / "words.json"
    f.write_text(json.dumps([
        {"id": "a", "prompt": "Sosta", "answer": "停车", "category": "RULES"},
        {"id": "c", "prompt": "Corsia", "answer": "车道", "category": "RULES"},
    ]), encoding="utf-8")
    result = import_file(tmp_db, str(f))
    assert result == {"filename": "words.json", "added": 1, "updated": 1}
    loaded = load_vocabulary(tmp_db)
    assert [item.id for item in loaded] == ["a", "b", "c"]
    assert get_item(tmp_db, "a").prompt == "Sosta"
    assert get_item(tmp_db, "a").repetition == 0
    conn = get_connection(tmp_db)
    row = conn.execute("SELECT * FROM imported_content").fetchone()
    conn.close()
    assert row["filename"] == "words.json"
    assert row["added"] == 1


def test_import_file_raises_out_of_range_progress(tmp_path, tmp_db, log_messages):
    init_db(tmp_db)
    f = tmp_path / "broken.json"
    f.write_text(json.dumps([{
        "id": "w1", "prompt": "Sosta", "answer": "停车",
        "repetition": -3, "interval": -5, "ease_factor": 0.9,
    }]), encoding="utf-8")
    import_file(tmp_db, str(f))
    item = get_item(tmp_db, "w1")
    assert item.repetition == 0
    assert item.interval == 0
    assert item.ease_factor == pytest.approx(1.3)
    assert any("below minimum" in m and "w1" in m for m in log_messages)
