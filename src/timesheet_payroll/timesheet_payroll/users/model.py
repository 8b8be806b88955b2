from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ActivityStatus, Role


@dataclass(frozen=True)
class EmployeeProfile:
    """Domain entity: identity and pay rate.

    Plain data object; no DB access code here.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    hourly_wage: int
    is_hidden: bool = False
    created_at: Optional[datetime] = None
    password_hash: str = ""


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation. Passed explicitly into every service call."""

    user_id: int
    role: Role


@dataclass(frozen=True)
class EmployeeActivity:
    profile: EmployeeProfile
    status: ActivityStatus
    last_work_date: Optional[date]
    total_work_days: int
    monthly_work_days: int
