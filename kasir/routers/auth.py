import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from kasir.db import get_db
from kasir.deps import current_user, get_store
from kasir.schemas.auth import User, UserOut
from kasir.schemas.common import Token
from kasir.services import storage
from kasir.services.storage import RecordStore
from kasir.util.security import create_token, hash_pw, needs_rehash, verify_pw

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=Token)
def login(email: str, password: str, db: Session = Depends(get_db), store: RecordStore = Depends(get_store)):
    email = email.strip().lower()
    user = next((u for u in store.load(storage.USERS, User) if u.email.lower() == email), None)
    if not user or not verify_pw(user.password, password):
        logger.info("failed login for %s", email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if needs_rehash(user.password):
        user.password = hash_pw(password)
        store.upsert(storage.USERS, user)
        db.commit()
    return Token(access_token=create_token(user.id))

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(current_user)):
    return UserOut(**user.model_dump(exclude={"password"}))
