"""Namespaced key-value record store.

Every collection lives under one key (``<namespace>_<collection>``) whose value
is a JSON-encoded array. There is no schema versioning: records are validated
into pydantic models on read and dumped back with camelCase keys on write.
Callers own the transaction; the store only flushes.
"""
import json
import logging
from typing import Iterable, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from kasir.config import settings
from kasir.errors import NotFound
from kasir.models.core import StoreEntry

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

USERS = "users"
RAW_MATERIALS = "raw_materials"
MENU_ITEMS = "menu_items"
TRANSACTIONS = "transactions"
PURCHASES = "purchases"
EXPENSES = "expenses"
SETTINGS = "settings"

COLLECTIONS = (USERS, RAW_MATERIALS, MENU_ITEMS, TRANSACTIONS, PURCHASES, EXPENSES, SETTINGS)


class RecordStore:
    def __init__(self, db: Session, namespace: str | None = None):
        self.db = db
        self.namespace = namespace or settings.STORE_NAMESPACE

    def key(self, collection: str) -> str:
        return f"{self.namespace}_{collection}"

    def _entry(self, collection: str) -> StoreEntry | None:
        return (
            self.db.query(StoreEntry)
            .filter(StoreEntry.namespace == self.namespace, StoreEntry.key == self.key(collection))
            .first()
        )

    # ---------- raw JSON ----------

    def get(self, collection: str) -> list[dict]:
        row = self._entry(collection)
        if not row or not row.value:
            return []
        return json.loads(row.value)

    def set(self, collection: str, records: list[dict]) -> None:
        row = self._entry(collection)
        value = json.dumps(records)
        if not row:
            row = StoreEntry(namespace=self.namespace, key=self.key(collection), value=value)
            self.db.add(row)
        else:
            row.value = value
            row.version = (row.version or 0) + 1
        self.db.flush()

    def keys(self) -> list[str]:
        rows = self.db.query(StoreEntry.key).filter(StoreEntry.namespace == self.namespace).all()
        return sorted(r[0] for r in rows)

    def entries(self) -> list[dict]:
        """Key, record count, write version and last write time of every collection."""
        rows = (
            self.db.query(StoreEntry)
            .filter(StoreEntry.namespace == self.namespace)
            .order_by(StoreEntry.key)
            .all()
        )
        return [
            {"key": r.key, "records": len(json.loads(r.value or "[]")), "version": r.version, "updated_at": r.updated_at}
            for r in rows
        ]

    def clear(self) -> int:
        n = self.db.query(StoreEntry).filter(StoreEntry.namespace == self.namespace).delete()
        self.db.flush()
        logger.warning("cleared %d collections in namespace %r", n, self.namespace)
        return n

    # ---------- typed helpers ----------

    def load(self, collection: str, model: type[M]) -> list[M]:
        return [model.model_validate(r) for r in self.get(collection)]

    def save(self, collection: str, items: Iterable[BaseModel]) -> None:
        self.set(collection, [i.model_dump(mode="json", by_alias=True) for i in items])

    def append(self, collection: str, item: BaseModel) -> None:
        records = self.get(collection)
        records.append(item.model_dump(mode="json", by_alias=True))
        self.set(collection, records)

    def find(self, collection: str, model: type[M], record_id: str) -> M:
        for item in self.load(collection, model):
            if getattr(item, "id", None) == record_id:
                return item
        raise NotFound(f"{collection} record {record_id} not found")

    def upsert(self, collection: str, item: BaseModel) -> None:
        records = self.get(collection)
        data = item.model_dump(mode="json", by_alias=True)
        for i, r in enumerate(records):
            if r.get("id") == data.get("id"):
                records[i] = data
                break
        else:
            records.append(data)
        self.set(collection, records)

    def remove(self, collection: str, record_id: str) -> None:
        records = self.get(collection)
        kept = [r for r in records if r.get("id") != record_id]
        if len(kept) == len(records):
            raise NotFound(f"{collection} record {record_id} not found")
        self.set(collection, kept)
