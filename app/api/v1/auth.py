#app/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Depends, Request
from sqlalchemy.orm import Session

from app.core.auth_deps import get_current_principal
from app.core.deps import get_app_settings
from app.core.envelope import ok
from app.core.security import create_access_token
from app.db.session import get_db
from app.policies.rbac import Principal, allowed_actions
from app.schemas.auth import LoginRequest, TokenResponse
from app.services.auth_service import authenticate

router = APIRouter(prefix="/auth")


@router.post("/login")
def login(req: LoginRequest, request: Request, db: Session = Depends(get_db)):
    principal = authenticate(db, req.email, req.password)
    if not principal:
        raise HTTPException(status_code=401, detail="Invalid credentials.")

    token = create_access_token(get_app_settings(request), principal)
    return ok(TokenResponse(access_token=token, role=principal.role.value).model_dump())


@router.get("/me")
def get_me(principal: Principal = Depends(get_current_principal)):
    return ok(
        {
            "user_id": principal.user_id,
            "email": principal.email,
            "role": principal.role.value,
            "permissions": sorted(allowed_actions(principal.role)),
        }
    )
