from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import DeductionKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DeductionRule
from .repository import DeductionRepository


def _to_rule(r: Dict[str, Any]) -> DeductionRule:
    return DeductionRule(
        deduction_id=int(r["deduction_id"]),
        user_id=int(r["user_id"]),
        name=r["name"],
        amount=Decimal(str(r["amount"])),
        kind=DeductionKind(r["kind"]),
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
    )


class MySQLDeductionRepository(DeductionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, deduction_id: int) -> Optional[DeductionRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT deduction_id, user_id, name, amount, kind, is_active, created_at
                FROM salary_deductions
                WHERE deduction_id=%s
                """,
                (int(deduction_id),),
            )
            r = fetchone(cur)
            return _to_rule(r) if r else None

    def list_for_user(self, user_id: int, *, active_only: bool = False) -> Sequence[DeductionRule]:
        sql = """
            SELECT deduction_id, user_id, name, amount, kind, is_active, created_at
            FROM salary_deductions
            WHERE user_id=%s
        """
        if active_only:
            sql += " AND is_active=1"
        sql += " ORDER BY created_at ASC, deduction_id ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(user_id),))
            return [_to_rule(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        name: str,
        amount: Decimal,
        kind: DeductionKind,
        is_active: bool = True,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_deductions(user_id, name, amount, kind, is_active)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), name, amount, kind.value, int(bool(is_active))),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        deduction_id: int,
        name: str,
        amount: Decimal,
        kind: DeductionKind,
        is_active: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_deductions
                SET name=%s, amount=%s, kind=%s, is_active=%s
                WHERE deduction_id=%s
                """,
                (name, amount, kind.value, int(bool(is_active)), int(deduction_id)),
            )
            return cur.rowcount > 0

    def set_active(self, deduction_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE salary_deductions SET is_active=%s WHERE deduction_id=%s",
                (int(bool(is_active)), int(deduction_id)),
            )
            return cur.rowcount > 0

    def delete(self, deduction_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_deductions WHERE deduction_id=%s", (int(deduction_id),))
            return cur.rowcount > 0

    def delete_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_deductions WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
