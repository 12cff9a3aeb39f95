"""Tests for core.store.RecordStore."""

from __future__ import annotations

import json
import threading

import pytest

from storefront_api.app.core.errors import StorageError
from storefront_api.app.core.store import RecordStore
from storefront_api.app.schemas.product import Product
from storefront_api.app.schemas.user import User


def _user(name: str = "alice", email: str | None = None) -> dict:
    return {"username": name, "email": email or f"{name}@example.com", "password": "pw"}


@pytest.fixture
def store():
    return RecordStore(User)


class TestReads:
    def test_find_all_on_empty_store(self, store):
        assert store.find_all() == []

    def test_find_one(self, store):
        created = store.create(_user())
        assert store.find_one(created.id) == created
        assert store.find_one("missing") is None

    def test_find_by(self, store):
        store.create(_user("alice"))
        bob = store.create(_user("bob"))
        assert store.find_by("email", "bob@example.com") == bob
        assert store.find_by("email", "carol@example.com") is None

    def test_returned_records_are_copies(self, store):
        created = store.create(_user())
        created.username = "mallory"
        assert store.find_one(created.id).username == "alice"


class TestMutations:
    def test_create_ignores_undeclared_fields(self, store):
        created = store.create({**_user(), "id": "forced", "admin": True})
        assert created.id != "forced"
        assert not hasattr(created, "admin")

    def test_create_unique_rejects_duplicate(self, store):
        assert store.create_unique(_user("alice"), "email") is not None
        assert store.create_unique(_user("alice2", "alice@example.com"), "email") is None
        assert store.count() == 1

    def test_update_replaces_every_field(self, store):
        created = store.create(_user())
        updated = store.update(created.id, {"username": "alice2"})
        assert updated.id == created.id
        assert updated.username == "alice2"
        assert updated.email is None

    def test_update_unknown_id(self, store):
        assert store.update("missing", _user()) is None
        assert store.count() == 0

    def test_remove(self, store):
        created = store.create(_user())
        assert store.remove(created.id) is True
        assert store.remove(created.id) is False
        assert store.count() == 0

    def test_concurrent_unique_creates(self, store):
        results = []
        barrier = threading.Barrier(8)

        def register():
            barrier.wait()
            results.append(store.create_unique(_user("alice"), "email"))

        threads = [threading.Thread(target=register) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len([r for r in results if r is not None]) == 1
        assert store.count() == 1


class TestPersistence:
    def test_records_survive_reload(self, tmp_path):
        path = tmp_path / "products.json"
        store = RecordStore(Product, path)
        created = store.create({"name": "Lamp", "price": 5, "quantity": 1, "image": "l.png"})

        reloaded = RecordStore(Product, path)
        assert reloaded.find_one(created.id) == created
        assert json.loads(path.read_text())[created.id]["name"] == "Lamp"

    def test_missing_file_means_empty(self, tmp_path):
        assert RecordStore(User, tmp_path / "nested" / "users.json").find_all() == []

    def test_removal_is_persisted(self, tmp_path):
        path = tmp_path / "users.json"
        store = RecordStore(User, path)
        created = store.create(_user())
        store.remove(created.id)
        assert RecordStore(User, path).count() == 0

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text("{not json")
        with pytest.raises(StorageError):
            RecordStore(User, path)

    def test_write_failure_rolls_back(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = RecordStore(User, blocker / "users.json")
        with pytest.raises(StorageError):
            store.create(_user())
        assert store.count() == 0
