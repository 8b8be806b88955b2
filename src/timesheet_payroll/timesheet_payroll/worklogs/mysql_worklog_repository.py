from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_time_of_day
from ..core.enums import ApprovalStatus, WorkKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as
from .model import PendingWorkLogRow, WorkLogEntry
from .repository import WorkLogRepository

_COLUMNS = """
    wl.log_id, wl.user_id, wl.work_date, wl.clock_in, wl.clock_out, wl.work_kind,
    wl.status, wl.rejection_reason, wl.day_off_reason, wl.created_at
"""


def _to_entry(r: Dict[str, Any]) -> WorkLogEntry:
    return WorkLogEntry(
        log_id=int(r["log_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        clock_in=parse_time_of_day(r.get("clock_in")),
        clock_out=parse_time_of_day(r.get("clock_out")),
        work_kind=WorkKind(r["work_kind"]),
        status=ApprovalStatus(r["status"]),
        created_at=r.get("created_at"),
        rejection_reason=r.get("rejection_reason"),
        day_off_reason=r.get("day_off_reason"),
    ).validate()


def _one_per_day(work_date: date) -> str:
    return f"A record already exists for {work_date.isoformat()}; one record per day"


class MySQLWorkLogRepository(WorkLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, log_id: int) -> Optional[WorkLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_logs wl WHERE wl.log_id=%s", (int(log_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[WorkLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_logs wl WHERE wl.user_id=%s AND wl.work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[ApprovalStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[WorkLogEntry]:
        clauses = ["wl.user_id=%s"]
        params: list[object] = [int(user_id)]

        if start_date is not None:
            clauses.append("wl.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("wl.work_date <= %s")
            params.append(end_date)
        if status is not None:
            clauses.append("wl.status=%s")
            params.append(status.value)

        sql = f"SELECT {_COLUMNS} FROM work_logs wl WHERE {' AND '.join(clauses)} ORDER BY wl.work_date DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_entry(r) for r in fetchall(cur)]

    def list_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        status: Optional[ApprovalStatus] = None,
    ) -> Sequence[WorkLogEntry]:
        clauses = ["wl.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if status is not None:
            clauses.append("wl.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_logs wl
                WHERE {' AND '.join(clauses)}
                ORDER BY wl.work_date ASC, wl.user_id ASC
                """,
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_pending(self, *, limit: int = 500) -> Sequence[PendingWorkLogRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, p.full_name, p.email
                FROM work_logs wl
                JOIN profiles p ON p.user_id = wl.user_id
                WHERE wl.status=%s
                ORDER BY wl.work_date ASC, wl.created_at ASC
                LIMIT %s
                """,
                (ApprovalStatus.PENDING.value, int(limit)),
            )
            return [
                PendingWorkLogRow(entry=_to_entry(r), full_name=r["full_name"], email=r["email"])
                for r in fetchall(cur)
            ]

    def count_by_status(self, status: ApprovalStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM work_logs WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

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
        with db_cursor(self._conn_factory) as (_, cur), unique_violation_as(_one_per_day(work_date)):
            cur.execute(
                """
                INSERT INTO work_logs(user_id, work_date, clock_in, clock_out, work_kind, status, day_off_reason)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), work_date, clock_in, clock_out, work_kind.value, status.value, day_off_reason),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur), unique_violation_as(_one_per_day(work_date)):
            cur.execute(
                """
                UPDATE work_logs
                SET work_date=%s, clock_in=%s, clock_out=%s, work_kind=%s, status=%s,
                    day_off_reason=%s, rejection_reason=%s
                WHERE log_id=%s
                """,
                (
                    work_date,
                    clock_in,
                    clock_out,
                    work_kind.value,
                    status.value,
                    day_off_reason,
                    rejection_reason,
                    int(log_id),
                ),
            )
            return cur.rowcount > 0

    def decide(self, *, log_id: int, status: ApprovalStatus, rejection_reason: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_logs
                SET status=%s, rejection_reason=%s
                WHERE log_id=%s AND status=%s
                """,
                (status.value, rejection_reason, int(log_id), ApprovalStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, log_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_logs WHERE log_id=%s", (int(log_id),))
            return cur.rowcount > 0

    def delete_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_logs WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
