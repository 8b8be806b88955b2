from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as
from .model import DiaryEntry
from .repository import DiaryRepository

_SELECT = """
    SELECT d.diary_id, d.admin_id, d.diary_date, d.title, d.content,
           d.created_at, d.updated_at, p.full_name AS author_name
    FROM admin_diary d
    LEFT JOIN profiles p ON p.user_id = d.admin_id
"""


def _to_entry(r: Dict[str, Any]) -> DiaryEntry:
    return DiaryEntry(
        diary_id=int(r["diary_id"]),
        admin_id=r.get("admin_id"),
        diary_date=r["diary_date"],
        title=r.get("title"),
        content=r["content"],
        created_at=r["created_at"],
        updated_at=r["updated_at"],
        author_name=r.get("author_name"),
    )


class MySQLDiaryRepository(DiaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, diary_id: int) -> Optional[DiaryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE d.diary_id=%s", (int(diary_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def get_by_date(self, diary_date: date) -> Optional[DiaryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE d.diary_date=%s", (diary_date,))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list_in_range(self, *, start_date: date, end_date: date) -> Sequence[DiaryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE d.diary_date BETWEEN %s AND %s ORDER BY d.diary_date DESC",
                (start_date, end_date),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def create(self, *, admin_id: int, diary_date: date, title: Optional[str], content: str) -> int:
        message = f"A diary entry already exists for {diary_date.isoformat()}"
        with db_cursor(self._conn_factory) as (_, cur), unique_violation_as(message):
            cur.execute(
                "INSERT INTO admin_diary(admin_id, diary_date, title, content) VALUES(%s,%s,%s,%s)",
                (int(admin_id), diary_date, title, content),
            )
            return int(cur.lastrowid)

    def update(self, *, diary_id: int, admin_id: int, title: Optional[str], content: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE admin_diary SET admin_id=%s, title=%s, content=%s WHERE diary_id=%s",
                (int(admin_id), title, content, int(diary_id)),
            )
            return cur.rowcount > 0

    def delete(self, diary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM admin_diary WHERE diary_id=%s", (int(diary_id),))
            return cur.rowcount > 0
