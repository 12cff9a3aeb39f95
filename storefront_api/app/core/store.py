"""
In‑memory record store with optional JSON file persistence.

A ``RecordStore`` keeps one resource's records in a dict keyed by id
and hands out pydantic models built from copies of the stored
mappings, so callers never hold a reference into the store.  Every
operation runs under the store's lock; operations that check before
they mutate (``create_unique``, ``update``, ``remove``) do both inside
the same critical section.

When a ``path`` is given the store loads it on construction (a missing
file means an empty store) and rewrites the whole file after every
mutation, mirroring the ``users.json``/``products.json`` files the
service has always kept.
"""

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from .errors import StorageError


RecordT = TypeVar("RecordT", bound=BaseModel)


def new_record_id() -> str:
    """Return a fresh record identifier."""
    return str(uuid.uuid4())


class RecordStore(Generic[RecordT]):
    """Lock‑guarded map of id → record for a single resource.

    Parameters
    ----------
    model : Type[BaseModel]
        Pydantic model describing a stored record.  It must declare an
        ``id`` field; every other declared field is a mutable attribute.
    path : Optional[str or Path]
        JSON file to persist records to.  ``None`` keeps records in
        memory only.
    """

    def __init__(self, model: Type[RecordT], path: Optional[Union[str, Path]] = None) -> None:
        self.model = model
        self.fields = [name for name in model.model_fields if name != "id"]
        self.path = Path(path) if path is not None else None
        self._lock = threading.Lock()
        self._records: Dict[str, Dict[str, Any]] = {}
        self._logger = logging.getLogger(__name__)
        if self.path is not None:
            self._records = self._load()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_all(self) -> List[RecordT]:
        with self._lock:
            return [self._to_model(record) for record in self._records.values()]

    def find_one(self, record_id: str) -> Optional[RecordT]:
        with self._lock:
            record = self._records.get(record_id)
            return self._to_model(record) if record is not None else None

    def find_by(self, field: str, value: Any) -> Optional[RecordT]:
        """Return the first record whose ``field`` equals ``value``."""
        with self._lock:
            record = self._find_by_locked(field, value)
            return self._to_model(record) if record is not None else None

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, fields: Mapping[str, Any]) -> RecordT:
        """Store a new record and return it, including its generated id."""
        with self._lock:
            return self._insert_locked(fields)

    def create_unique(self, fields: Mapping[str, Any], unique_field: str) -> Optional[RecordT]:
        """Create a record unless another one already has the same ``unique_field``.

        Returns ``None`` when a record with that value exists.  The
        lookup and the insert happen under one lock acquisition.
        """
        with self._lock:
            if self._find_by_locked(unique_field, fields.get(unique_field)) is not None:
                return None
            return self._insert_locked(fields)

    def update(self, record_id: str, fields: Mapping[str, Any]) -> Optional[RecordT]:
        """Replace every mutable field of an existing record.

        Returns the updated record, or ``None`` if ``record_id`` is
        unknown; nothing is created in that case.
        """
        with self._lock:
            if record_id not in self._records:
                return None
            previous = self._records[record_id]
            record = self._build(record_id, fields)
            self._records[record_id] = record
            try:
                self._save()
            except StorageError:
                self._records[record_id] = previous
                raise
            self._logger.info("Updated %s %s", self.model.__name__.lower(), record_id)
            return self._to_model(record)

    def remove(self, record_id: str) -> bool:
        """Delete a record; ``False`` if it did not exist."""
        with self._lock:
            if record_id not in self._records:
                return False
            previous = self._records.pop(record_id)
            try:
                self._save()
            except StorageError:
                self._records[record_id] = previous
                raise
            self._logger.info("Removed %s %s", self.model.__name__.lower(), record_id)
            return True

    # ------------------------------------------------------------------
    # Internal helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _find_by_locked(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        for record in self._records.values():
            if record.get(field) == value:
                return record
        return None

    def _insert_locked(self, fields: Mapping[str, Any]) -> RecordT:
        record_id = new_record_id()
        while record_id in self._records:
            record_id = new_record_id()
        record = self._build(record_id, fields)
        self._records[record_id] = record
        try:
            self._save()
        except StorageError:
            del self._records[record_id]
            raise
        self._logger.info("Created %s %s", self.model.__name__.lower(), record_id)
        return self._to_model(record)

    def _build(self, record_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        # Only declared attributes are kept; a caller supplied "id" never wins.
        record = {"id": record_id}
        for name in self.fields:
            record[name] = fields.get(name)
        return record

    def _to_model(self, record: Dict[str, Any]) -> RecordT:
        return self.model.model_validate(dict(record))

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StorageError(f"Cannot read {self.path}: expected a JSON object")
        records = {}
        for record_id, record in raw.items():
            if not isinstance(record, dict):
                raise StorageError(f"Cannot read {self.path}: record {record_id} is not an object")
            records[record_id] = self._build(record_id, record)
        self._logger.info("Loaded %d records from %s", len(records), self.path)
        return records

    def _save(self) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._records, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc
