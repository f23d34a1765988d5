#app/policies/rbac.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Set

from app.models.enums import UserRole


@dataclass(frozen=True)
class Principal:
    user_id: str
    email: str
    role: UserRole


# --- Core action constants ---
ACTION_APPROVE_PENDING = "APPROVE_PENDING"
ACTION_REJECT_PENDING = "REJECT_PENDING"
ACTION_ACCEPT_DOCUMENT = "ACCEPT_DOCUMENT"


def allowed_actions(role: UserRole) -> Set[str]:
    """
    Pure RBAC: which moderation actions a role may attempt.
    """

    if role == UserRole.ADMIN:
        return {ACTION_APPROVE_PENDING, ACTION_REJECT_PENDING, ACTION_ACCEPT_DOCUMENT}

    if role == UserRole.EDITOR:
        return set()

    return set()


def require_action(principal: Principal, action: str) -> None:
    if action not in allowed_actions(principal.role):
        raise PermissionError(
            f"Role {principal.role.value} not permitted for action {action}."
        )
