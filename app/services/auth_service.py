# app/services/auth_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.security import verify_password, hash_password
from app.models.admin_user import AdminUser
from app.models.enums import UserRole
from app.policies.rbac import Principal


def _find(db: Session, email: str) -> Optional[AdminUser]:
    return db.execute(
        select(AdminUser).where(AdminUser.email == email.strip().lower())
    ).scalar_one_or_none()


def authenticate(db: Session, email: str, password: str) -> Principal | None:
    u = _find(db, email)
    if not u or not u.is_active:
        return None

    if not verify_password(password, u.password_hash):
        return None

    return Principal(user_id=str(u.id), email=u.email, role=UserRole(u.role))


def create_user(
    db: Session, email: str, password: str, role: UserRole = UserRole.ADMIN
) -> AdminUser:
    """Create an account, or reset the password of an existing one."""
    u = _find(db, email)
    if u is None:
        u = AdminUser(email=email.strip().lower(), role=role.value)
        db.add(u)
    u.password_hash = hash_password(password)
    u.role = role.value
    u.is_active = True
    db.commit()
    db.refresh(u)
    return u
