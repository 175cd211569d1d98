from datetime import date
from fastapi import APIRouter, Depends
from typing import List, Optional

from kasir.deps import current_user, get_store
from kasir.schemas.auth import User
from kasir.schemas.sales import Receipt, Transaction
from kasir.services import storage
from kasir.services.receipt import build_receipt
from kasir.services.reports import filter_by_date
from kasir.services.settings import load_settings
from kasir.services.storage import RecordStore

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("/", response_model=List[Transaction])
def list_transactions(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    store: RecordStore = Depends(get_store),
    user: User = Depends(current_user),
):
    rows = store.load(storage.TRANSACTIONS, Transaction)
    if start_date or end_date:
        rows = filter_by_date(rows, start_date or date.min, end_date or date.max)
    return rows


@router.get("/{txn_id}", response_model=Transaction)
def get_transaction(txn_id: str, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return store.find(storage.TRANSACTIONS, Transaction, txn_id)


@router.get("/{txn_id}/receipt", response_model=Receipt)
def receipt(txn_id: str, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    txn = store.find(storage.TRANSACTIONS, Transaction, txn_id)
    return build_receipt(txn, load_settings(store))
