from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Optional

from ..common.datetime_utils import month_bounds, parse_time_of_day
from ..core.constants import DEFAULT_DAY_OFF_REASON, DEFAULT_HISTORY_LIMIT
from ..core.enums import ApprovalStatus, Role, WorkKind
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import Actor
from ..users.permissions import is_admin_or_above, require_role
from ..users.repository import EmployeeRepository
from .model import PendingWorkLogRow, WorkLogEntry
from .repository import WorkLogRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkLogInput:
    """Validated form data for creating or editing an entry."""

    work_date: date
    work_kind: WorkKind
    clock_in: Optional[time]
    clock_out: Optional[time]
    day_off_reason: Optional[str]


class WorkLogService:
    def __init__(self, worklogs: WorkLogRepository, employees: EmployeeRepository):
        self._worklogs = worklogs
        self._employees = employees

    @staticmethod
    def _parse_time(value: Any, field_name: str) -> Optional[time]:
        try:
            return parse_time_of_day(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} must be HH:MM")

    def _build_input(
        self,
        *,
        work_date: date,
        work_kind: Any,
        clock_in: Any,
        clock_out: Any,
        day_off_reason: Optional[str],
    ) -> WorkLogInput:
        try:
            kind = WorkKind(work_kind or WorkKind.REGULAR)
        except ValueError:
            raise ValidationError("Unknown work kind")

        if kind == WorkKind.DAY_OFF:
            return WorkLogInput(
                work_date=work_date,
                work_kind=kind,
                clock_in=None,
                clock_out=None,
                day_off_reason=(day_off_reason or "").strip() or DEFAULT_DAY_OFF_REASON,
            )

        t_in = self._parse_time(clock_in, "Clock-in")
        t_out = self._parse_time(clock_out, "Clock-out")
        if t_in is None or t_out is None:
            raise ValidationError("Clock-in and clock-out are required")
        return WorkLogInput(work_date=work_date, work_kind=kind, clock_in=t_in, clock_out=t_out, day_off_reason=None)

    def _get(self, log_id: int) -> WorkLogEntry:
        entry = self._worklogs.get_by_id(int(log_id))
        if not entry:
            raise NotFoundError("Work log not found")
        return entry

    def _ensure_free_date(self, user_id: int, work_date: date, *, ignore_log_id: Optional[int] = None) -> None:
        existing = self._worklogs.get_for_user_and_date(int(user_id), work_date)
        if existing and existing.log_id != ignore_log_id:
            label = "day-off" if existing.work_kind == WorkKind.DAY_OFF else "work"
            raise ValidationError(f"A {label} record already exists for {work_date.isoformat()}; one record per day")

    def register(
        self,
        actor: Actor,
        *,
        work_date: date,
        work_kind: Any = WorkKind.REGULAR,
        clock_in: Any = None,
        clock_out: Any = None,
        day_off_reason: Optional[str] = None,
    ) -> int:
        """Employee records their own day; it waits for approval."""

        data = self._build_input(
            work_date=work_date,
            work_kind=work_kind,
            clock_in=clock_in,
            clock_out=clock_out,
            day_off_reason=day_off_reason,
        )
        self._ensure_free_date(actor.user_id, data.work_date)

        log_id = self._worklogs.create(
            user_id=actor.user_id,
            work_date=data.work_date,
            clock_in=data.clock_in,
            clock_out=data.clock_out,
            work_kind=data.work_kind,
            status=ApprovalStatus.PENDING,
            day_off_reason=data.day_off_reason,
        )
        logger.info("Work log %s registered by %s for %s", log_id, actor.user_id, data.work_date)
        return log_id

    def admin_upsert(
        self,
        actor: Actor,
        *,
        user_id: int,
        work_date: date,
        work_kind: Any = WorkKind.REGULAR,
        clock_in: Any = None,
        clock_out: Any = None,
        day_off_reason: Optional[str] = None,
        status: Any = ApprovalStatus.APPROVED,
        log_id: Optional[int] = None,
    ) -> int:
        """Admin creates or edits an entry on behalf of an employee, with any status."""

        require_role(actor, Role.ADMIN)
        if not self._employees.get_by_id(int(user_id)):
            raise NotFoundError("Employee not found")
        try:
            new_status = ApprovalStatus(status)
        except ValueError:
            raise ValidationError("Unknown status")

        data = self._build_input(
            work_date=work_date,
            work_kind=work_kind,
            clock_in=clock_in,
            clock_out=clock_out,
            day_off_reason=day_off_reason,
        )

        if log_id is None:
            self._ensure_free_date(int(user_id), data.work_date)
            return self._worklogs.create(
                user_id=int(user_id),
                work_date=data.work_date,
                clock_in=data.clock_in,
                clock_out=data.clock_out,
                work_kind=data.work_kind,
                status=new_status,
                day_off_reason=data.day_off_reason,
            )

        entry = self._get(log_id)
        if entry.user_id != int(user_id):
            raise ValidationError("Work log belongs to another employee")
        self._ensure_free_date(entry.user_id, data.work_date, ignore_log_id=entry.log_id)
        ok = self._worklogs.update(
            log_id=entry.log_id,
            work_date=data.work_date,
            clock_in=data.clock_in,
            clock_out=data.clock_out,
            work_kind=data.work_kind,
            status=new_status,
            day_off_reason=data.day_off_reason,
            rejection_reason=entry.rejection_reason if new_status == ApprovalStatus.REJECTED else None,
        )
        if not ok:
            raise ValidationError("Failed to update work log")
        return entry.log_id

    def edit(
        self,
        actor: Actor,
        *,
        log_id: int,
        work_date: date,
        work_kind: Any = WorkKind.REGULAR,
        clock_in: Any = None,
        clock_out: Any = None,
        day_off_reason: Optional[str] = None,
    ) -> None:
        """Owner edits an entry; it goes back to pending review."""

        entry = self._get(log_id)
        if entry.user_id != actor.user_id:
            raise AuthorizationError("You can only edit your own records")

        data = self._build_input(
            work_date=work_date,
            work_kind=work_kind,
            clock_in=clock_in,
            clock_out=clock_out,
            day_off_reason=day_off_reason,
        )
        self._ensure_free_date(entry.user_id, data.work_date, ignore_log_id=entry.log_id)

        ok = self._worklogs.update(
            log_id=entry.log_id,
            work_date=data.work_date,
            clock_in=data.clock_in,
            clock_out=data.clock_out,
            work_kind=data.work_kind,
            status=ApprovalStatus.PENDING,
            day_off_reason=data.day_off_reason,
            rejection_reason=None,
        )
        if not ok:
            raise ValidationError("Failed to update work log")
        logger.info("Work log %s edited by %s; back to pending", entry.log_id, actor.user_id)

    def delete(self, actor: Actor, *, log_id: int) -> None:
        entry = self._get(log_id)
        if not is_admin_or_above(actor.role):
            if entry.user_id != actor.user_id:
                raise AuthorizationError("You can only delete your own records")
            if entry.status != ApprovalStatus.PENDING:
                raise ValidationError("Only pending records can be deleted")

        if not self._worklogs.delete(entry.log_id):
            raise ValidationError("Failed to delete work log")

    def approve(self, actor: Actor, *, log_id: int) -> None:
        require_role(actor, Role.ADMIN)
        entry = self._get(log_id)
        if entry.status != ApprovalStatus.PENDING:
            raise ValidationError("This record has already been decided")

        if not self._worklogs.decide(log_id=entry.log_id, status=ApprovalStatus.APPROVED):
            raise ValidationError("Failed to approve work log")
        logger.info("Work log %s approved by %s", entry.log_id, actor.user_id)

    def reject(self, actor: Actor, *, log_id: int, reason: str = "") -> None:
        require_role(actor, Role.ADMIN)
        entry = self._get(log_id)
        if entry.status != ApprovalStatus.PENDING:
            raise ValidationError("This record has already been decided")

        ok = self._worklogs.decide(
            log_id=entry.log_id,
            status=ApprovalStatus.REJECTED,
            rejection_reason=(reason or "").strip() or None,
        )
        if not ok:
            raise ValidationError("Failed to reject work log")
        logger.info("Work log %s rejected by %s", entry.log_id, actor.user_id)

    def list_history(
        self,
        actor: Actor,
        *,
        user_id: Optional[int] = None,
        status: Any = None,
        month: Optional[date] = None,
    ) -> list[WorkLogEntry]:
        target = actor.user_id if user_id is None else int(user_id)
        if target != actor.user_id:
            require_role(actor, Role.ADMIN)

        try:
            status_filter = ApprovalStatus(status) if status else None
        except ValueError:
            raise ValidationError("Unknown status")

        start = end = None
        if month is not None:
            start, end = month_bounds(month)
        return list(
            self._worklogs.list_for_user(
                target,
                start_date=start,
                end_date=end,
                status=status_filter,
                limit=DEFAULT_HISTORY_LIMIT,
            )
        )

    def list_pending(self, actor: Actor) -> list[PendingWorkLogRow]:
        require_role(actor, Role.ADMIN)
        return list(self._worklogs.list_pending())
