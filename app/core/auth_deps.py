#app/core/auth_deps.py
from __future__ import annotations

from typing import Callable

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from app.core.deps import get_app_settings
from app.core.security import decode_token
from app.models.enums import UserRole
from app.policies.rbac import Principal, require_action

bearer = HTTPBearer(auto_error=True)


def get_current_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> Principal:
    """
    Admin account behind the bearer token.
    401 when the token is bad, expired, or lacks sub/role claims.
    """
    try:
        payload = decode_token(get_app_settings(request), creds.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        raise HTTPException(status_code=401, detail="Token missing required claims.")

    try:
        role_enum = UserRole(role)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid role in token.")

    principal = Principal(user_id=str(user_id), email=str(payload.get("email") or ""), role=role_enum)
    request.state.principal = principal
    return principal


def require_permission(action: str) -> Callable[..., Principal]:
    """Dependency factory guarding one moderation action (see app.policies.rbac)."""

    def _dep(principal: Principal = Depends(get_current_principal)) -> Principal:
        try:
            require_action(principal, action)
        except PermissionError as e:
            raise HTTPException(status_code=403, detail=str(e))
        return principal

    return _dep
