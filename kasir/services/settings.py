from kasir.schemas.settings import StoreSettings
from kasir.services import storage
from kasir.services.storage import RecordStore


def load_settings(store: RecordStore) -> StoreSettings:
    rows = store.load(storage.SETTINGS, StoreSettings)
    return rows[0] if rows else StoreSettings()


def save_settings(store: RecordStore, value: StoreSettings) -> StoreSettings:
    store.save(storage.SETTINGS, [value])
    return value
