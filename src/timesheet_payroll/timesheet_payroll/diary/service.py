from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import Actor
from ..users.permissions import require_role
from .model import DiaryEntry
from .repository import DiaryRepository

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200


class DiaryService:
    """Shared admin diary: one page per day, readable and editable by every admin."""

    def __init__(self, diary: DiaryRepository):
        self._diary = diary

    @staticmethod
    def _validate(title: Optional[str], content: str) -> tuple[Optional[str], str]:
        content = require_non_empty(content, "Content")
        title = (title or "").strip() or None
        if title and len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        return title, content

    def list_month(self, actor: Actor, *, month: date) -> list[DiaryEntry]:
        require_role(actor, Role.ADMIN)
        start, end = month_bounds(month)
        return list(self._diary.list_in_range(start_date=start, end_date=end))

    def get_for_date(self, actor: Actor, *, diary_date: date) -> Optional[DiaryEntry]:
        require_role(actor, Role.ADMIN)
        return self._diary.get_by_date(diary_date)

    def save(self, actor: Actor, *, diary_date: date, title: Optional[str], content: str) -> tuple[int, bool]:
        """Write the page for `diary_date`, creating it if the day has none.

        Returns (diary_id, created). The last writer becomes the entry's author.
        """

        require_role(actor, Role.ADMIN)
        title, content = self._validate(title, content)

        existing = self._diary.get_by_date(diary_date)
        if existing is None:
            diary_id = self._diary.create(admin_id=actor.user_id, diary_date=diary_date, title=title, content=content)
            logger.info("Diary entry %s for %s written by %s", diary_id, diary_date, actor.user_id)
            return diary_id, True

        if not self._diary.update(diary_id=existing.diary_id, admin_id=actor.user_id, title=title, content=content):
            raise ValidationError("Failed to update diary entry")
        return existing.diary_id, False

    def delete(self, actor: Actor, *, diary_id: int) -> None:
        require_role(actor, Role.ADMIN)
        entry = self._diary.get_by_id(int(diary_id))
        if not entry:
            raise NotFoundError("Diary entry not found")
        if not self._diary.delete(entry.diary_id):
            raise ValidationError("Failed to delete diary entry")
        logger.info("Diary entry %s (%s) deleted by %s", entry.diary_id, entry.diary_date, actor.user_id)
