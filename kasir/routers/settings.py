# kasir/routers/settings.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from kasir.db import get_db
from kasir.deps import current_user, require_admin, get_store
from kasir.schemas.auth import User
from kasir.schemas.settings import StoreSettings
from kasir.services.settings import load_settings, save_settings
from kasir.services.storage import RecordStore

router = APIRouter(prefix="/settings", tags=["settings"])

@router.get("", response_model=StoreSettings)
def get_settings(store: RecordStore = Depends(get_store), user: User = Depends(current_user)):
    return load_settings(store)

@router.put("", response_model=StoreSettings)
def put_settings(body: StoreSettings, db: Session = Depends(get_db),
                 store: RecordStore = Depends(get_store), user: User = Depends(require_admin)):
    out = save_settings(store, body)
    db.commit()
    return out
