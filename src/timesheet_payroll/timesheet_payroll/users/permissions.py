from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import Actor

_DISPLAY_NAMES = {
    Role.EMPLOYEE: "Employee",
    Role.ADMIN: "Administrator",
    Role.SUPER: "Super administrator",
}


def has_permission(user_role: Role, required_role: Role) -> bool:
    return Role(user_role).level >= Role(required_role).level


def is_admin_or_above(user_role: Role) -> bool:
    return has_permission(user_role, Role.ADMIN)


def is_super(user_role: Role) -> bool:
    return Role(user_role) == Role.SUPER


def role_display_name(role: Role) -> str:
    return _DISPLAY_NAMES[Role(role)]


def require_role(actor: Actor, required_role: Role) -> None:
    if not has_permission(actor.role, required_role):
        raise AuthorizationError("You do not have permission to do this")


def landing_page_for(role: Optional[Role]) -> str:
    """Where a visitor lands after sign-in, by role."""
    if role is None:
        return "/login"
    role = Role(role)
    if role == Role.SUPER:
        return "/super"
    if role == Role.ADMIN:
        return "/admin"
    return "/dashboard"
