from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
from sqlalchemy.orm import Session
from kasir.db import get_db
from kasir.errors import AuthError, Forbidden, NotFound
from kasir.schemas.auth import User
from kasir.services import storage
from kasir.services.storage import RecordStore
from kasir.util.security import decode_token

auth_scheme = HTTPBearer(auto_error=False)

def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)

def require_auth(creds: HTTPAuthorizationCredentials | None = Depends(auth_scheme)) -> str:
    if not creds:
        raise AuthError("Not authenticated")
    try:
        return decode_token(creds.credentials)
    except jwt.PyJWTError:
        raise AuthError("Invalid token")

def current_user(sub: str = Depends(require_auth), store: RecordStore = Depends(get_store)) -> User:
    try:
        return store.find(storage.USERS, User, sub)
    except NotFound:
        raise AuthError("Unknown user")

def require_admin(user: User = Depends(current_user)) -> User:
    # single hardcoded admin account; the role check guards maintenance routes
    if user.role != "admin":
        raise Forbidden("Admin role required")
    return user
