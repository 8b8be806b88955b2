from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

PRIORITY_NORMAL = 1
PRIORITY_IMPORTANT = 2
PRIORITY_URGENT = 3


@dataclass(frozen=True)
class Announcement:
    announcement_id: int
    title: str
    content: str
    priority: int
    is_active: bool
    author_id: Optional[int]
    created_at: datetime
    author_name: Optional[str] = None
