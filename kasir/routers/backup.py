import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kasir.db import get_db
from kasir.deps import require_admin, get_store
from kasir.schemas.auth import User
from kasir.schemas.backup import BackupDocument, ImportResult
from kasir.schemas.finance import Expense, Purchase
from kasir.schemas.inventory import RawMaterial
from kasir.schemas.menu import MenuItem
from kasir.schemas.sales import Transaction
from kasir.services import storage
from kasir.services.storage import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/backup", tags=["backup"])

# document field -> collection; users are never part of a backup
BACKUP_FIELDS = {
    "raw_materials": storage.RAW_MATERIALS,
    "menu_items": storage.MENU_ITEMS,
    "transactions": storage.TRANSACTIONS,
    "purchases": storage.PURCHASES,
    "expenses": storage.EXPENSES,
}


@router.get("/export", response_model=BackupDocument)
def export_data(store: RecordStore = Depends(get_store), user: User = Depends(require_admin)):
    return BackupDocument(
        raw_materials=store.load(storage.RAW_MATERIALS, RawMaterial),
        menu_items=store.load(storage.MENU_ITEMS, MenuItem),
        transactions=store.load(storage.TRANSACTIONS, Transaction),
        purchases=store.load(storage.PURCHASES, Purchase),
        expenses=store.load(storage.EXPENSES, Expense),
        export_date=datetime.now(timezone.utc),
    )


@router.post("/import", response_model=ImportResult)
def import_data(body: BackupDocument, db: Session = Depends(get_db),
                store: RecordStore = Depends(get_store), user: User = Depends(require_admin)):
    """Restore the collections present in an exported document; absent ones are left alone."""
    restored: dict[str, int] = {}
    for field in sorted(BACKUP_FIELDS.keys() & body.model_fields_set):
        rows = getattr(body, field)
        store.save(BACKUP_FIELDS[field], rows)
        restored[BACKUP_FIELDS[field]] = len(rows)
    db.commit()
    logger.warning("backup restored by %s: %s", user.email, restored)
    return ImportResult(restored=restored)
