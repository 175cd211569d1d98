from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from kasir.deps import current_user, get_store
from kasir.schemas.auth import User
from kasir.schemas.finance import Expense, Purchase
from kasir.schemas.inventory import RawMaterial
from kasir.schemas.menu import MenuItem
from kasir.schemas.reports import CashFlowReport, DashboardStats, Notification, SalesReport
from kasir.schemas.sales import Transaction
from kasir.services import reports, storage
from kasir.services.storage import RecordStore

router = APIRouter(prefix="/reports", tags=["reports"])


def _range(start_date: Optional[date], end_date: Optional[date]) -> tuple[date, date]:
    # both default to today, like the report screen
    start = start_date or reports.today()
    end = end_date or reports.today()
    if start > end:
        raise HTTPException(400, detail="start_date is after end_date")
    return start, end


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(day: Optional[date] = None, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return reports.dashboard_stats(
        store.load(storage.TRANSACTIONS, Transaction),
        store.load(storage.RAW_MATERIALS, RawMaterial),
        store.load(storage.MENU_ITEMS, MenuItem),
        store.load(storage.PURCHASES, Purchase),
        store.load(storage.EXPENSES, Expense),
        day or reports.today(),
    )


@router.get("/sales", response_model=SalesReport)
def sales(start_date: Optional[date] = None, end_date: Optional[date] = None,
          store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    start, end = _range(start_date, end_date)
    return reports.sales_report(store.load(storage.TRANSACTIONS, Transaction), start, end)


@router.get("/cash_flow", response_model=CashFlowReport)
def cash_flow(start_date: Optional[date] = None, end_date: Optional[date] = None,
              store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    start, end = _range(start_date, end_date)
    return reports.cash_flow_report(
        store.load(storage.TRANSACTIONS, Transaction),
        store.load(storage.PURCHASES, Purchase),
        store.load(storage.EXPENSES, Expense),
        start, end,
    )


@router.get("/best_seller", response_model=Optional[MenuItem])
def best_seller(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return reports.best_seller(
        store.load(storage.TRANSACTIONS, Transaction),
        store.load(storage.MENU_ITEMS, MenuItem),
    )


@router.get("/notifications", response_model=List[Notification])
def notifications(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return reports.notifications(
        store.load(storage.RAW_MATERIALS, RawMaterial),
        store.load(storage.TRANSACTIONS, Transaction),
    )
