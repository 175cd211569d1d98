from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from kasir.db import get_db
from kasir.deps import current_user, get_store
from kasir.schemas.auth import User
from kasir.errors import ValidationFailed
from kasir.models.common import new_id
from kasir.schemas.inventory import MenuCosting, RawMaterial
from kasir.schemas.menu import MenuItem, MenuItemIn
from kasir.services import storage
from kasir.services.stock import costing
from kasir.services.storage import RecordStore

router = APIRouter(prefix="/menu", tags=["menu"])


# ---------- helpers ----------

def _validate(body: MenuItemIn, store: RecordStore) -> None:
    if not body.name.strip() or body.price <= 0:
        raise ValidationFailed("menu item needs a name and a price above zero")
    if not body.recipe:
        raise ValidationFailed("add at least one ingredient to the recipe")
    known = {m["id"] for m in store.get(storage.RAW_MATERIALS)}
    unknown = [r.material_id for r in body.recipe if r.material_id not in known]
    if unknown:
        raise ValidationFailed(f"unknown raw materials in recipe: {', '.join(unknown)}")


# ---------- ITEMS ----------

@router.get("/items", response_model=List[MenuItem])
def list_items(active_only: bool = False, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    rows = store.load(storage.MENU_ITEMS, MenuItem)
    if active_only:
        rows = [m for m in rows if m.is_active]
    return rows


@router.get("/items/search", response_model=List[MenuItem])
def search_items(q: str = "", store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    """Quick search for the cashier: active items whose name or category contains `q`."""
    term = q.strip().lower()
    if not term:
        return []
    return [
        m for m in store.load(storage.MENU_ITEMS, MenuItem)
        if m.is_active and (term in m.name.lower() or term in m.category.lower())
    ]


@router.get("/categories", response_model=List[str])
def list_categories(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return sorted({m.category for m in store.load(storage.MENU_ITEMS, MenuItem)})


@router.get("/items/{item_id}", response_model=MenuItem)
def get_item(item_id: str, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return store.find(storage.MENU_ITEMS, MenuItem, item_id)


@router.post("/items", response_model=MenuItem)
def create_item(body: MenuItemIn, db: Session = Depends(get_db),
                store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    _validate(body, store)
    it = MenuItem(id=new_id(), **body.model_dump())
    store.append(storage.MENU_ITEMS, it)
    db.commit()
    return it


@router.put("/items/{item_id}", response_model=MenuItem)
def update_item(item_id: str, body: MenuItemIn, db: Session = Depends(get_db),
                store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    store.find(storage.MENU_ITEMS, MenuItem, item_id)
    _validate(body, store)
    it = MenuItem(id=item_id, **body.model_dump())
    store.upsert(storage.MENU_ITEMS, it)
    db.commit()
    return it


@router.post("/items/{item_id}/toggle", response_model=MenuItem)
def toggle_item(item_id: str, db: Session = Depends(get_db),
                store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    it = store.find(storage.MENU_ITEMS, MenuItem, item_id)
    it.is_active = not it.is_active
    store.upsert(storage.MENU_ITEMS, it)
    db.commit()
    return it


@router.delete("/items/{item_id}")
def delete_item(item_id: str, db: Session = Depends(get_db),
                store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    store.remove(storage.MENU_ITEMS, item_id)
    db.commit()
    return {"ok": True, "id": item_id}


@router.get("/items/{item_id}/costing", response_model=MenuCosting)
def item_costing(item_id: str, store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    it = store.find(storage.MENU_ITEMS, MenuItem, item_id)
    return costing(it, store.load(storage.RAW_MATERIALS, RawMaterial))
