from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Announcement]:
        raise NotImplementedError

    def list_active(self, *, limit: int) -> Sequence[Announcement]:
        """Active only, highest priority first, then newest."""

        raise NotImplementedError

    def create(self, *, title: str, content: str, priority: int, author_id: int) -> int:
        raise NotImplementedError

    def update(self, *, announcement_id: int, title: str, content: str, priority: int) -> bool:
        raise NotImplementedError

    def set_active(self, announcement_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def delete(self, announcement_id: int) -> bool:
        raise NotImplementedError

    def mark_read(self, *, announcement_id: int, user_id: int) -> None:
        raise NotImplementedError
