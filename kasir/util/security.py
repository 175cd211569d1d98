import jwt
from datetime import datetime, timedelta, timezone
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError
from kasir.config import settings

ph = PasswordHasher()

def hash_pw(p: str) -> str:
    return ph.hash(p)

def verify_pw(hashv: str, p: str) -> bool:
    try:
        return ph.verify(hashv, p)
    except (VerificationError, InvalidHashError):
        return False

def needs_rehash(hashv: str) -> bool:
    # stored hashes outlive hasher parameter changes
    return ph.check_needs_rehash(hashv)

def create_token(sub: str) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=settings.JWT_EXP_MIN)
    return jwt.encode(
        {"sub": sub, "iss": settings.JWT_ISS, "iat": now, "exp": exp},
        settings.APP_SECRET,
        algorithm="HS256",
    )

def decode_token(token: str) -> str:
    """Return the user id carried by a bearer token; raises jwt.PyJWTError when invalid or expired."""
    data = jwt.decode(token, settings.APP_SECRET, algorithms=["HS256"], issuer=settings.JWT_ISS,
                      options={"require": ["sub", "exp"]})
    return data["sub"]
