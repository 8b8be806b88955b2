from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role, ordered employee < admin < super."""

    EMPLOYEE = "employee"
    ADMIN = "admin"
    SUPER = "super"

    @property
    def level(self) -> int:
        return {Role.EMPLOYEE: 1, Role.ADMIN: 2, Role.SUPER: 3}[self]


class WorkKind(str, Enum):
    REGULAR = "regular"
    DAY_OFF = "day_off"


class ApprovalStatus(str, Enum):
    """Approval state of a work log entry."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DeductionKind(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class NetPayPolicy(str, Enum):
    """What to do when deductions exceed gross pay.

    PRESERVE keeps the negative net pay as computed; CLAMP floors it at zero.
    Both mark the result as over-deducted.
    """

    PRESERVE = "preserve"
    CLAMP = "clamp"


class ActivityStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    NEW = "new"
