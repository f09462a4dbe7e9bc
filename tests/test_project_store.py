"""
Project store tests — save/load/list over key-value storage.

Covers the in-memory backing and the SQL backing (storage_items table).
"""

import json
import logging

import pytest

from calcbuild import models
from calcbuild.config import settings
from calcbuild.schemas import Project
from calcbuild.storage import MemoryStorage, SqlStorage
from calcbuild.store import ProjectNotFound, ProjectStore


# ============================================================
# Save / load
# ============================================================

def test_round_trip(store, sample_project):
    store.save(sample_project)
    assert store.load("Maison Dupont") == sample_project


def test_save_returns_key(store, sample_project):
    assert store.save(sample_project) == "Maison Dupont"


def test_unnamed_project_uses_sentinel_key(store):
    project = Project.model_validate({"projectName": "", "rooms": [{"name": "A"}]})
    key = store.save(project)
    assert key == "Unnamed Project"
    loaded = store.load("Unnamed Project")
    assert loaded.project_name == ""
    assert loaded == project


def test_save_overwrites_existing_key(store, sample_project):
    store.save(sample_project)
    changed = sample_project.model_copy(update={"paint_price": 22.0, "rooms": []})
    store.save(changed)
    loaded = store.load("Maison Dupont")
    assert loaded.paint_price == 22.0
    assert loaded.rooms == []
    assert store.list_names() == ["Maison Dupont"]


def test_save_keeps_other_projects(store, sample_project):
    store.save(sample_project)
    store.save(Project.model_validate({"projectName": "Garage"}))
    assert store.list_names() == ["Maison Dupont", "Garage"]
    assert store.load("Maison Dupont") == sample_project


def test_repeated_save_is_idempotent(store, memory_storage, sample_project):
    store.save(sample_project)
    first = memory_storage.get_item(settings.STORE_KEY)
    store.save(sample_project)
    assert memory_storage.get_item(settings.STORE_KEY) == first


def test_room_order_preserved(store):
    rooms = [{"name": n, "L": 1, "W": 1, "openings": 0} for n in ("C", "A", "B")]
    store.save(Project.model_validate({"projectName": "Order", "rooms": rooms}))
    assert [r.name for r in store.load("Order").rooms] == ["C", "A", "B"]


def test_load_unknown_name_raises(store, sample_project):
    store.save(sample_project)
    with pytest.raises(ProjectNotFound) as exc:
        store.load("Nope")
    assert exc.value.name == "Nope"
    assert isinstance(exc.value, LookupError)


def test_load_from_empty_store_raises(store):
    with pytest.raises(ProjectNotFound):
        store.load("Anything")


def test_list_names_empty(store):
    assert store.list_names() == []


# ============================================================
# Persisted layout / corrupted content
# ============================================================

def test_persisted_layout(store, memory_storage, sample_project):
    store.save(sample_project)
    data = json.loads(memory_storage.get_item(settings.STORE_KEY))
    assert list(data) == ["Maison Dupont"]
    entry = data["Maison Dupont"]
    assert entry["projectName"] == "Maison Dupont"
    assert entry["wallWaste"] == 7.5
    assert entry["rooms"][1] == {"name": "Bedroom", "L": 3.5, "W": 3.0, "openings": 2.0}


def test_corrupted_json_reads_as_empty():
    storage = MemoryStorage({settings.STORE_KEY: "{not json"})
    store = ProjectStore(storage)
    assert store.list_names() == []
    with pytest.raises(ProjectNotFound):
        store.load("x")


def test_wrong_shape_reads_as_empty():
    storage = MemoryStorage({settings.STORE_KEY: json.dumps(["a", "b"])})
    assert ProjectStore(storage).list_names() == []


def test_save_over_corrupted_content_starts_fresh(sample_project):
    storage = MemoryStorage({settings.STORE_KEY: "garbage"})
    store = ProjectStore(storage)
    store.save(sample_project)
    assert store.list_names() == ["Maison Dupont"]


def test_stored_entries_missing_fields_get_defaults():
    raw = {"Old": {"projectName": "Old", "rooms": [{"name": "Hall"}]}}
    store = ProjectStore(MemoryStorage({settings.STORE_KEY: json.dumps(raw)}))
    project = store.load("Old")
    assert project.wall_height == 2.5
    assert project.rooms[0].length == 4.0


def test_custom_storage_key(memory_storage, sample_project):
    store = ProjectStore(memory_storage, key="other_slot")
    store.save(sample_project)
    assert memory_storage.get_item("other_slot") is not None
    assert memory_storage.get_item(settings.STORE_KEY) is None


# ============================================================
# SQL backing
# ============================================================

def test_sql_storage_round_trip(db, sample_project):
    store = ProjectStore(SqlStorage(db))
    store.save(sample_project)
    assert store.load("Maison Dupont") == sample_project
    assert db.query(models.StorageItem).count() == 1


def test_sql_storage_single_row_across_saves(db, sample_project):
    store = ProjectStore(SqlStorage(db))
    store.save(sample_project)
    store.save(Project.model_validate({"projectName": "Garage"}))
    rows = db.query(models.StorageItem).all()
    assert [r.key for r in rows] == [settings.STORE_KEY]


def test_sql_storage_missing_key(db):
    assert SqlStorage(db).get_item("missing") is None


def test_stored_integer_too_big_for_float_is_readable():
    raw = '{"P": {"projectName": "P", "wallHeight": 1' + "0" * 400 + "}}"
    store = ProjectStore(MemoryStorage({settings.STORE_KEY: raw}))
    assert store.list_names() == ["P"]
    assert store.load("P").wall_height == 0.0


def test_save_over_stored_huge_integer(sample_project):
    raw = '{"P": {"projectName": "P", "wallHeight": 1' + "0" * 400 + "}}"
    store = ProjectStore(MemoryStorage({settings.STORE_KEY: raw}))
    store.save(sample_project)
    assert store.list_names() == ["P", "Maison Dupont"]


# ============================================================
# Logging
# ============================================================

def test_load_is_logged(store, sample_project, caplog):
    store.save(sample_project)
    with caplog.at_level(logging.DEBUG, logger="calcbuild.store"):
        store.load("Maison Dupont")
        with pytest.raises(ProjectNotFound):
            store.load("Nope")
    messages = [r.getMessage() for r in caplog.records]
    assert "Loaded project 'Maison Dupont'" in messages
    assert "No project stored under 'Nope'" in messages
