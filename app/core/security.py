# app/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from app.core.config import Settings
from app.policies.rbac import Principal

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(raw: str) -> str:
    return pwd_context.hash(raw)


def verify_password(raw: str, hashed: Optional[str]) -> bool:
    # a malformed or empty stored hash is a failed login, not a server error
    if not hashed:
        return False
    try:
        return pwd_context.verify(raw, hashed)
    except (UnknownHashError, ValueError):
        return False


def create_access_token(settings: Settings, principal: Principal, expires_minutes: Optional[int] = None) -> str:
    """
    Signed admin token. Claims: sub (account id), email, role, iat, exp.
    """
    minutes = expires_minutes or settings.jwt_access_token_minutes
    issued = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": principal.user_id,
        "email": principal.email,
        "role": principal.role.value,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(minutes=minutes)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(settings: Settings, token: str) -> Dict[str, Any]:
    """Raises jose.JWTError on a bad signature or an expired token."""
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
