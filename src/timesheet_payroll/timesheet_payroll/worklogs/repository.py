from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, WorkKind
from .model import PendingWorkLogRow, WorkLogEntry


class WorkLogRepository(Protocol):
    def get_by_id(self, log_id: int) -> Optional[WorkLogEntry]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[WorkLogEntry]:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[ApprovalStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[WorkLogEntry]:
        """Newest first."""

        raise NotImplementedError

    def list_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        status: Optional[ApprovalStatus] = None,
    ) -> Sequence[WorkLogEntry]:
        raise NotImplementedError

    def list_pending(self, *, limit: int = 500) -> Sequence[PendingWorkLogRow]:
        """Admin queue rows (joined with the employee), oldest first."""

        raise NotImplementedError

    def count_by_status(self, status: ApprovalStatus) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: Optional[time],
        clock_out: Optional[time],
        work_kind: WorkKind,
        status: ApprovalStatus,
        day_off_reason: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        log_id: int,
        work_date: date,
        clock_in: Optional[time],
        clock_out: Optional[time],
        work_kind: WorkKind,
        status: ApprovalStatus,
        day_off_reason: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def decide(self, *, log_id: int, status: ApprovalStatus, rejection_reason: Optional[str] = None) -> bool:
        """Move a PENDING entry to `status`. Returns False if it was not pending."""

        raise NotImplementedError

    def delete(self, log_id: int) -> bool:
        raise NotImplementedError

    def delete_for_user(self, user_id: int) -> int:
        raise NotImplementedError
