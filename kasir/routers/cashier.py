import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from kasir.db import get_db
from kasir.deps import current_user, get_store
from kasir.models.common import new_id
from kasir.schemas.auth import User
from kasir.schemas.inventory import RawMaterial
from kasir.schemas.menu import MenuItem
from kasir.schemas.sales import CheckoutIn, CheckoutOut, Discount, Quote, QuoteIn, Transaction
from kasir.services import billing, storage
from kasir.services.reports import today
from kasir.services.stock import deduct_for_cart
from kasir.services.storage import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cashier", tags=["cashier"])


@router.get("/discounts", response_model=List[Discount])
def preset_discounts(user: User = Depends(current_user)):
    return billing.PRESET_DISCOUNTS


@router.post("/quote", response_model=Quote)
def quote(body: QuoteIn, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    """Price a cart without selling it: subtotal, clamped discount and total."""
    return billing.quote(body.lines, store.load(storage.MENU_ITEMS, MenuItem), body.discount)


@router.post("/checkout", response_model=CheckoutOut)
def checkout(body: CheckoutIn, db: Session = Depends(get_db),
             store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    menu_items = store.load(storage.MENU_ITEMS, MenuItem)
    q = billing.quote(body.lines, menu_items, body.discount)

    txn = Transaction(
        id=new_id(),
        date=today(),
        items=q.items,
        subtotal=q.subtotal,
        discount=q.discount,
        discount_reason=q.discount_reason,
        total=q.total,
        payment_method=body.payment_method,
        cashier_name=user.name,
        created_at=datetime.now(timezone.utc),
    )

    # stock first, then the sale record; a missing ingredient only skips itself
    materials = store.load(storage.RAW_MATERIALS, RawMaterial)
    changes = deduct_for_cart(materials, menu_items, q.items)
    store.save(storage.RAW_MATERIALS, materials)
    store.append(storage.TRANSACTIONS, txn)
    db.commit()

    logger.info("checkout %s by %s: %d lines, total %.2f (%s)",
                txn.id, user.name, len(txn.items), txn.total, txn.payment_method)
    return CheckoutOut(transaction=txn, stock_changes=changes)
