from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import ApprovalStatus, WorkKind
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class WorkLogEntry:
    """Domain entity: one attendance record for one employee on one date.

    Day-off entries carry no clock times; regular entries carry both.
    """

    log_id: int
    user_id: int
    work_date: date
    clock_in: Optional[time]
    clock_out: Optional[time]
    work_kind: WorkKind
    status: ApprovalStatus
    created_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    day_off_reason: Optional[str] = None

    def validate(self) -> "WorkLogEntry":
        if self.work_kind == WorkKind.DAY_OFF:
            if self.clock_in is not None or self.clock_out is not None:
                raise ValidationError("A day-off entry cannot have clock-in/out times")
        elif self.clock_in is None or self.clock_out is None:
            raise ValidationError("A regular entry needs both clock-in and clock-out")
        return self

    @property
    def is_approved(self) -> bool:
        return self.status == ApprovalStatus.APPROVED


@dataclass(frozen=True)
class PendingWorkLogRow:
    """Read-model for the admin approval queue (joined with the employee)."""

    entry: WorkLogEntry
    full_name: str
    email: str
