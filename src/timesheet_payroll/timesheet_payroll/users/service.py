from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import month_bounds
from ..common.validators import require_min_length, require_non_empty, require_number
from ..core.constants import ACTIVE_WINDOW_DAYS, DEFAULT_HOURLY_WAGE
from ..core.enums import ActivityStatus, ApprovalStatus, Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..deductions.repository import DeductionRepository
from ..worklogs.repository import WorkLogRepository
from .model import Actor, EmployeeActivity, EmployeeProfile
from .permissions import require_role
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role

    def as_actor(self) -> Actor:
        return Actor(user_id=self.user_id, role=self.role)


class AuthService:
    """Use case: authenticate user (login) and first-login profile creation."""

    def __init__(self, employees: EmployeeRepository, *, default_hourly_wage: int = DEFAULT_HOURLY_WAGE):
        self._employees = employees
        self._default_wage = int(default_hourly_wage)

    @staticmethod
    def _verify(user: EmployeeProfile, password: str) -> SessionUser:
        try:
            ok = check_password_hash(user.password_hash, password)
        except (TypeError, ValueError):
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Wrong email or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._employees.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Wrong email or password")
        return self._verify(user, password)

    def ensure_profile(self, *, email: str, full_name: str, password: str) -> SessionUser:
        """Sign in to the existing profile for `email`, creating an employee profile if absent.

        An existing profile still needs its own password.
        """

        email = require_non_empty(email, "Email").lower()
        existing = self._employees.get_by_email(email)
        if existing:
            return self._verify(existing, password)

        require_min_length(password, "Password", 6)
        name = (full_name or "").strip() or email
        user_id = self._employees.create(
            full_name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
            hourly_wage=self._default_wage,
        )
        logger.info("Created employee profile %s for %s", user_id, email)
        return SessionUser(user_id=user_id, full_name=name, role=Role.EMPLOYEE)


class EmployeeService:
    """Use case: manage employees, wages and roles."""

    def __init__(self, employees: EmployeeRepository, worklogs: WorkLogRepository, deductions: DeductionRepository):
        self._employees = employees
        self._worklogs = worklogs
        self._deductions = deductions

    def get_profile(self, user_id: int) -> EmployeeProfile:
        profile = self._employees.get_by_id(int(user_id))
        if not profile:
            raise NotFoundError("Employee not found")
        return profile

    def list_employees(self, actor: Actor, *, include_hidden: bool = False) -> list[EmployeeProfile]:
        require_role(actor, Role.ADMIN)
        return list(self._employees.list_all(include_hidden=include_hidden))

    def update_wage(self, actor: Actor, *, user_id: int, hourly_wage) -> None:
        require_role(actor, Role.ADMIN)
        wage = require_number(hourly_wage, "Hourly wage", minimum=1)
        if wage != int(wage):
            raise ValidationError("Hourly wage must be a whole amount")

        self.get_profile(user_id)
        if not self._employees.update_wage(int(user_id), hourly_wage=int(wage)):
            raise ValidationError("Failed to update hourly wage")
        logger.info("Wage of %s set to %s by %s", user_id, int(wage), actor.user_id)

    def set_hidden(self, actor: Actor, *, user_id: int, is_hidden: bool) -> None:
        require_role(actor, Role.ADMIN)
        self.get_profile(user_id)
        if not self._employees.set_hidden(int(user_id), is_hidden=bool(is_hidden)):
            raise ValidationError("Failed to update employee visibility")

    def change_role(self, actor: Actor, *, user_id: int, role) -> None:
        require_role(actor, Role.SUPER)
        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError("Unknown role")
        if int(user_id) == actor.user_id:
            raise ValidationError("You cannot change your own role")

        profile = self.get_profile(user_id)
        if profile.role == new_role:
            return
        if not self._employees.set_role(int(user_id), role=new_role):
            raise ValidationError("Failed to change role")
        logger.info("Role of %s changed %s -> %s by %s", user_id, profile.role.value, new_role.value, actor.user_id)

    def delete_employee(self, actor: Actor, *, user_id: int) -> None:
        require_role(actor, Role.SUPER)
        if int(user_id) == actor.user_id:
            raise ValidationError("You cannot delete your own account")
        self.get_profile(user_id)

        removed_logs = self._worklogs.delete_for_user(int(user_id))
        removed_rules = self._deductions.delete_for_user(int(user_id))
        if not self._employees.delete_by_id(int(user_id)):
            raise ValidationError("Failed to delete employee")
        logger.info(
            "Deleted employee %s (%d work logs, %d deductions) by %s",
            user_id,
            removed_logs,
            removed_rules,
            actor.user_id,
        )

    def activity_statuses(self, actor: Actor, *, today: date) -> list[EmployeeActivity]:
        """Activity of visible employees: new (never approved), active (worked within 7 days) or inactive."""

        require_role(actor, Role.ADMIN)
        start, end = month_bounds(today)

        out = []
        for profile in self._employees.list_all(include_hidden=False, role=Role.EMPLOYEE):
            approved = self._worklogs.list_for_user(profile.user_id, status=ApprovalStatus.APPROVED)
            last_work_date: Optional[date] = max((e.work_date for e in approved), default=None)

            if last_work_date is None:
                status = ActivityStatus.NEW
            elif (today - last_work_date).days <= ACTIVE_WINDOW_DAYS:
                status = ActivityStatus.ACTIVE
            else:
                status = ActivityStatus.INACTIVE

            out.append(
                EmployeeActivity(
                    profile=profile,
                    status=status,
                    last_work_date=last_work_date,
                    total_work_days=len(approved),
                    monthly_work_days=sum(1 for e in approved if start <= e.work_date <= end),
                )
            )
        return out
