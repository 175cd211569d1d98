# test_storage.py
import pytest

from kasir.errors import NotFound
from kasir.schemas.inventory import RawMaterial
from kasir.services import storage
from kasir.services.seed import demo_materials
from kasir.services.storage import RecordStore


@pytest.fixture
def store(db_session):
    s = RecordStore(db_session, namespace="unit")
    yield s
    s.clear()


def test_keys_are_namespaced(store):
    assert store.key(storage.RAW_MATERIALS) == "unit_raw_materials"
    store.set(storage.EXPENSES, [])
    store.set(storage.PURCHASES, [])
    assert store.keys() == ["unit_expenses", "unit_purchases"]


def test_missing_collection_reads_empty(store):
    assert store.get(storage.TRANSACTIONS) == []
    assert store.load(storage.TRANSACTIONS, RawMaterial) == []


def test_records_are_stored_camel_case(store):
    store.save(storage.RAW_MATERIALS, demo_materials())
    raw = store.get(storage.RAW_MATERIALS)
    assert raw[0]["minStock"] == 10
    assert "min_stock" not in raw[0]

    loaded = store.load(storage.RAW_MATERIALS, RawMaterial)
    assert loaded[3].name == "Mentega"
    assert loaded[3].min_stock == 2


def test_upsert_find_remove(store):
    store.save(storage.RAW_MATERIALS, demo_materials())
    m = store.find(storage.RAW_MATERIALS, RawMaterial, "2")
    m.stock = 1
    store.upsert(storage.RAW_MATERIALS, m)
    assert store.find(storage.RAW_MATERIALS, RawMaterial, "2").stock == 1

    store.upsert(storage.RAW_MATERIALS, RawMaterial(id="9", name="Keju", unit="kg", supplier="Dairy Fresh"))
    assert len(store.get(storage.RAW_MATERIALS)) == 5

    store.remove(storage.RAW_MATERIALS, "9")
    with pytest.raises(NotFound):
        store.find(storage.RAW_MATERIALS, RawMaterial, "9")
    with pytest.raises(NotFound):
        store.remove(storage.RAW_MATERIALS, "9")


def test_clear_only_touches_own_namespace(db_session, store):
    other = RecordStore(db_session, namespace="other")
    other.set(storage.EXPENSES, [{"id": "x"}])
    store.set(storage.EXPENSES, [])
    store.set(storage.PURCHASES, [])

    assert store.clear() == 2
    assert store.keys() == []
    assert other.get(storage.EXPENSES) == [{"id": "x"}]
    other.clear()


def test_entries_report_counts_and_versions(store):
    store.save(storage.RAW_MATERIALS, demo_materials())
    store.save(storage.EXPENSES, [])
    store.append(storage.EXPENSES, RawMaterial(id="x", name="n", unit="u", supplier="s"))

    rows = store.entries()
    assert [r["key"] for r in rows] == ["unit_expenses", "unit_raw_materials"]
    assert rows[0]["records"] == 1
    assert rows[0]["version"] == 2
    assert rows[1]["records"] == 4
    assert rows[1]["version"] == 1
    assert rows[1]["updated_at"] is not None
