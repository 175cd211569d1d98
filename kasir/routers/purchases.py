import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from kasir.db import get_db
from kasir.deps import current_user, get_store
from kasir.schemas.auth import User
from kasir.models.common import new_id
from kasir.errors import ValidationFailed
from kasir.schemas.finance import Purchase, PurchaseIn, ReorderSuggestion
from kasir.schemas.inventory import RawMaterial
from kasir.services import storage
from kasir.services.billing import _money
from kasir.services.reports import today
from kasir.services.stock import apply_purchase, reorder_suggestions as suggest_reorders
from kasir.services.storage import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/purchases", tags=["purchases"])


@router.get("/", response_model=List[Purchase])
def list_purchases(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return store.load(storage.PURCHASES, Purchase)


@router.post("/", response_model=Purchase)
def create_purchase(body: PurchaseIn, db: Session = Depends(get_db),
                    store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    if body.price is not None and body.price < 0:
        raise ValidationFailed("Purchase price cannot be negative")
    materials = store.load(storage.RAW_MATERIALS, RawMaterial)
    change = apply_purchase(materials, body.material_id, body.quantity)
    material = next(m for m in materials if m.id == body.material_id)
    price = material.price if body.price is None else body.price

    p = Purchase(
        id=new_id(),
        date=today(),
        material_id=material.id,
        material_name=material.name,
        quantity=body.quantity,
        price=price,
        total=_money(body.quantity * price),
        supplier=(body.supplier or "").strip() or material.supplier,
    )
    store.append(storage.PURCHASES, p)
    store.save(storage.RAW_MATERIALS, materials)
    db.commit()
    logger.info("purchase %s: %s +%g %s (stock %g -> %g)",
                p.id, material.name, body.quantity, material.unit, change.before, change.after)
    return p


@router.get("/reorder", response_model=List[ReorderSuggestion])
def reorder_suggestions(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return suggest_reorders(store.load(storage.RAW_MATERIALS, RawMaterial))
