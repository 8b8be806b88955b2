from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Announcement
from .repository import AnnouncementRepository

_SELECT = """
    SELECT a.announcement_id, a.title, a.content, a.priority, a.is_active,
           a.author_id, a.created_at, p.full_name AS author_name
    FROM announcements a
    LEFT JOIN profiles p ON p.user_id = a.author_id
"""


def _to_announcement(r: Dict[str, Any]) -> Announcement:
    return Announcement(
        announcement_id=int(r["announcement_id"]),
        title=r["title"],
        content=r["content"],
        priority=int(r["priority"]),
        is_active=bool(r["is_active"]),
        author_id=r.get("author_id"),
        created_at=r["created_at"],
        author_name=r.get("author_name"),
    )


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.announcement_id=%s", (int(announcement_id),))
            r = fetchone(cur)
            return _to_announcement(r) if r else None

    def list_all(self) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY a.created_at DESC")
            return [_to_announcement(r) for r in fetchall(cur)]

    def list_active(self, *, limit: int) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.is_active=1 ORDER BY a.priority DESC, a.created_at DESC LIMIT %s",
                (int(limit),),
            )
            return [_to_announcement(r) for r in fetchall(cur)]

    def create(self, *, title: str, content: str, priority: int, author_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO announcements(title, content, priority, author_id) VALUES(%s,%s,%s,%s)",
                (title, content, int(priority), int(author_id)),
            )
            return int(cur.lastrowid)

    def update(self, *, announcement_id: int, title: str, content: str, priority: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE announcements SET title=%s, content=%s, priority=%s WHERE announcement_id=%s",
                (title, content, int(priority), int(announcement_id)),
            )
            return cur.rowcount > 0

    def set_active(self, announcement_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE announcements SET is_active=%s WHERE announcement_id=%s",
                (int(bool(is_active)), int(announcement_id)),
            )
            return cur.rowcount > 0

    def delete(self, announcement_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE announcement_id=%s", (int(announcement_id),))
            return cur.rowcount > 0

    def mark_read(self, *, announcement_id: int, user_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO announcement_reads(announcement_id, user_id)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE read_at=CURRENT_TIMESTAMP
                """,
                (int(announcement_id), int(user_id)),
            )
