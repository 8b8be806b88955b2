from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeProfile
from .repository import EmployeeRepository

_COLUMNS = "user_id, full_name, email, password_hash, role, hourly_wage, is_hidden, created_at"


def _to_profile(row: Dict[str, Any]) -> EmployeeProfile:
    return EmployeeProfile(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        email=row["email"],
        role=Role(row["role"]),
        hourly_wage=int(row["hourly_wage"]),
        is_hidden=bool(row.get("is_hidden", False)),
        created_at=row.get("created_at"),
        password_hash=row.get("password_hash") or "",
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_email(self, email: str) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def list_all(self, *, include_hidden: bool = False, role: Optional[Role] = None) -> Sequence[EmployeeProfile]:
        clauses = ["1=1"]
        params: list[object] = []
        if not include_hidden:
            clauses.append("is_hidden=0")
        if role is not None:
            clauses.append("role=%s")
            params.append(role.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM profiles WHERE {' AND '.join(clauses)} ORDER BY full_name ASC",
                tuple(params),
            )
            return [_to_profile(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        hourly_wage: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(full_name, email, password_hash, role, hourly_wage)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (full_name, email, password_hash, role.value, int(hourly_wage)),
            )
            return int(cur.lastrowid)

    def update_wage(self, user_id: int, *, hourly_wage: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET hourly_wage=%s WHERE user_id=%s", (int(hourly_wage), int(user_id)))
            return cur.rowcount > 0

    def set_hidden(self, user_id: int, *, is_hidden: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET is_hidden=%s WHERE user_id=%s", (int(bool(is_hidden)), int(user_id)))
            return cur.rowcount > 0

    def set_role(self, user_id: int, *, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET role=%s WHERE user_id=%s", (role.value, int(user_id)))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM profiles WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0
