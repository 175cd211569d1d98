import logging
from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from kasir.db import get_db
from kasir.deps import current_user, get_store
from kasir.schemas.auth import User
from kasir.errors import ValidationFailed
from kasir.models.common import new_id
from kasir.schemas.finance import EXPENSE_CATEGORIES, Expense, ExpenseIn, ExpenseSummary
from kasir.services import storage
from kasir.services.reports import expense_summary, today
from kasir.services.storage import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("/categories", response_model=List[str])
def categories(user: User = Depends(current_user)):
    return list(EXPENSE_CATEGORIES)


@router.get("/", response_model=List[Expense])
def list_expenses(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return store.load(storage.EXPENSES, Expense)


@router.get("/summary", response_model=ExpenseSummary)
def summary(day: Optional[date] = None, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return expense_summary(store.load(storage.EXPENSES, Expense), day or today())


@router.post("/", response_model=Expense)
def create_expense(body: ExpenseIn, db: Session = Depends(get_db),
                   store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    if not body.description.strip() or body.amount <= 0:
        raise ValidationFailed("expense needs a description and an amount above zero")
    e = Expense(
        id=new_id(),
        date=today(),
        category=body.category,
        description=body.description.strip(),
        amount=body.amount,
    )
    store.append(storage.EXPENSES, e)
    db.commit()
    logger.info("expense %s: %s %.2f", e.id, e.category, e.amount)
    return e


@router.delete("/{expense_id}")
def delete_expense(expense_id: str, db: Session = Depends(get_db),
                   store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    store.remove(storage.EXPENSES, expense_id)
    db.commit()
    return {"ok": True, "id": expense_id}
