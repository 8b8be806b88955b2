from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DiaryEntry


class DiaryRepository(Protocol):
    def get_by_id(self, diary_id: int) -> Optional[DiaryEntry]:
        raise NotImplementedError

    def get_by_date(self, diary_date: date) -> Optional[DiaryEntry]:
        raise NotImplementedError

    def list_in_range(self, *, start_date: date, end_date: date) -> Sequence[DiaryEntry]:
        """Newest diary_date first."""

        raise NotImplementedError

    def create(self, *, admin_id: int, diary_date: date, title: Optional[str], content: str) -> int:
        raise NotImplementedError

    def update(self, *, diary_id: int, admin_id: int, title: Optional[str], content: str) -> bool:
        raise NotImplementedError

    def delete(self, diary_id: int) -> bool:
        raise NotImplementedError
