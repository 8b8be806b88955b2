from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class DiaryEntry:
    """One admin diary page; at most one per calendar day."""

    diary_id: int
    admin_id: Optional[int]
    diary_date: date
    title: Optional[str]
    content: str
    created_at: datetime
    updated_at: datetime
    author_name: Optional[str] = None

    @property
    def edited(self) -> bool:
        return self.updated_at != self.created_at
