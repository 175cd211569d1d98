# kasir/routers/inventory.py
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from kasir.db import get_db
from kasir.deps import current_user, get_store
from kasir.schemas.auth import User
from kasir.errors import ValidationFailed
from kasir.models.common import new_id
from kasir.schemas.inventory import RawMaterial, RawMaterialIn
from kasir.services import storage
from kasir.services.reports import low_stock as find_low_stock
from kasir.services.storage import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])


def _check(body: RawMaterialIn) -> None:
    if not body.name.strip() or not body.supplier.strip():
        raise ValidationFailed("name and supplier are required")


@router.get("/materials", response_model=List[RawMaterial])
def list_materials(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return store.load(storage.RAW_MATERIALS, RawMaterial)


@router.get("/materials/{material_id}", response_model=RawMaterial)
def get_material(material_id: str, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return store.find(storage.RAW_MATERIALS, RawMaterial, material_id)


@router.post("/materials", response_model=RawMaterial)
def create_material(body: RawMaterialIn, db: Session = Depends(get_db),
                    store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    _check(body)
    m = RawMaterial(id=new_id(), **body.model_dump())
    store.append(storage.RAW_MATERIALS, m)
    db.commit()
    logger.info("raw material %s (%s) added", m.name, m.id)
    return m


@router.put("/materials/{material_id}", response_model=RawMaterial)
def update_material(material_id: str, body: RawMaterialIn, db: Session = Depends(get_db),
                    store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    _check(body)
    store.find(storage.RAW_MATERIALS, RawMaterial, material_id)
    m = RawMaterial(id=material_id, **body.model_dump())
    store.upsert(storage.RAW_MATERIALS, m)
    db.commit()
    return m


@router.delete("/materials/{material_id}")
def delete_material(material_id: str, db: Session = Depends(get_db),
                    store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    # recipes keep their reference; deduction skips it from now on
    store.remove(storage.RAW_MATERIALS, material_id)
    db.commit()
    return {"ok": True, "id": material_id}


@router.get("/low_stock", response_model=List[RawMaterial])
def low_stock(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return find_low_stock(store.load(storage.RAW_MATERIALS, RawMaterial))
