import json

import pytest

from spendwise.domain import DEFAULT_CATEGORIES, Goal, Transaction
from spendwise.storage import JsonStore


def test_load_defaults_when_files_missing(tmp_path):
    store = JsonStore(tmp_path / "data")

    assert store.load_transactions() == ()
    assert store.load_goals() == ()
    assert store.load_categories() == DEFAULT_CATEGORIES


def test_save_and_load(tmp_path):
    store = JsonStore(tmp_path / "data")
    trans = (
        Transaction(1, "Salary", 1000.0, "Income", "2025-01-01"),
        Transaction(2, "Groceries", -42.5, "Food", "2025-01-02"),
    )
    goals = (Goal(1, "Vacation", 2000.0, "2025-08-01", 150.0, "2025-01-01T10:00:00"),)

    store.save_transactions(trans)
    store.save_categories(("Food", "Other"))
    store.save_goals(goals)

    assert store.load_transactions() == trans
    assert store.load_categories() == ("Food", "Other")
    assert store.load_goals() == goals


def test_save_overwrites(tmp_path):
    store = JsonStore(tmp_path)
    store.save_transactions((Transaction(1, "A", 1.0, "Other", "2025-01-01"),))
    store.save_transactions(())
    assert store.load_transactions() == ()


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    (tmp_path / "transactions.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "categories.json").write_text('{"a": 1}', encoding="utf-8")

    store = JsonStore(tmp_path)
    assert store.load_transactions() == ()
    assert store.load_categories() == DEFAULT_CATEGORIES


def test_malformed_records_are_skipped(tmp_path):
    rows = [
        {"id": 1, "description": "ok", "amount": -5, "category": "Food", "date": "2025-01-01"},
        {"id": 2, "description": "missing amount", "category": "Food", "date": "2025-01-01"},
    ]
    (tmp_path / "transactions.json").write_text(json.dumps(rows), encoding="utf-8")

    trans = JsonStore(tmp_path).load_transactions()
    assert [t.id for t in trans] == [1]
    assert trans[0].amount == -5.0


def test_duplicate_categories_collapsed(tmp_path):
    (tmp_path / "categories.json").write_text('["Food", "Other", "Food"]', encoding="utf-8")
    assert JsonStore(tmp_path).load_categories() == ("Food", "Other")


def test_corrupt_file_is_kept_aside(tmp_path):
    (tmp_path / "transactions.json").write_text('[{"id": 1, "descr', encoding="utf-8")

    store = JsonStore(tmp_path)
    assert store.load_transactions() == ()
    store.save_transactions((Transaction(1, "New", -1.0, "Food", "2025-01-01"),))

    backup = tmp_path / "transactions.json.corrupt"
    assert backup.read_text(encoding="utf-8") == '[{"id": 1, "descr'
    assert len(store.load_transactions()) == 1


def test_failed_save_keeps_previous_file(tmp_path, monkeypatch):
    store = JsonStore(tmp_path)
    trans = tuple(Transaction(i, f"tx {i}", -1.0, "Food", "2025-01-01") for i in range(1, 51))
    store.save_transactions(trans)

    def broken_dump(data, handle, **kwargs):
        handle.write('[{"id": 1,')
        raise OSError("disk full")

    monkeypatch.setattr("spendwise.storage.json.dump", broken_dump)
    with pytest.raises(OSError):
        store.save_transactions(trans[:1])
    monkeypatch.undo()

    assert store.load_transactions() == trans
    assert [p.name for p in tmp_path.iterdir()] == ["transactions.json"]


def test_other_is_added_to_stored_categories(tmp_path):
    (tmp_path / "categories.json").write_text('["Food", "Rent"]', encoding="utf-8")
    assert JsonStore(tmp_path).load_categories() == ("Food", "Rent", "Other")


def test_goals_with_non_positive_target_are_skipped(tmp_path):
    rows = [
        {"id": 1, "name": "Zero", "target_amount": 0, "target_date": "2025-08-01",
         "current_amount": 0, "created_at": "2025-01-01T00:00:00"},
        {"id": 2, "name": "Bike", "target_amount": 300, "target_date": "2025-08-01",
         "current_amount": 0, "created_at": "2025-01-01T00:00:00"},
    ]
    (tmp_path / "goals.json").write_text(json.dumps(rows), encoding="utf-8")
    assert [g.id for g in JsonStore(tmp_path).load_goals()] == [2]
