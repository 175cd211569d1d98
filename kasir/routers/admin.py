from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from kasir.db import get_db
from kasir.config import settings
from kasir.deps import require_admin, get_store
from kasir.schemas.auth import User
from kasir.schemas.backup import CollectionInfo
from kasir.services.seed import ensure_seeded, reset_demo
from kasir.services.storage import RecordStore

router = APIRouter(prefix="/admin", tags=["admin"])

@router.get("/store", response_model=List[CollectionInfo])
def store_entries(store: RecordStore = Depends(get_store), user: User = Depends(require_admin)):
    return store.entries()

@router.post("/reset-demo")
def reset_to_demo(db: Session = Depends(get_db), store: RecordStore = Depends(get_store),
                  user: User = Depends(require_admin)):
    reset_demo(store)
    db.commit()
    return {"ok": True, "keys": store.keys()}

@router.post("/clear")
def clear_all(confirm: bool = False, db: Session = Depends(get_db), store: RecordStore = Depends(get_store),
              user: User = Depends(require_admin)):
    if not confirm:
        raise HTTPException(400, detail="Pass confirm=true to delete every collection")
    n = store.clear()
    # without a users collection nobody could log in again
    reseeded = settings.SEED_DEMO and ensure_seeded(store)
    db.commit()
    return {"ok": True, "cleared": n, "reseeded": reseeded}
