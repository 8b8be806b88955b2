from __future__ import annotations

from typing import Any

from ..common.validators import require_non_empty
from ..core.constants import BANNER_ANNOUNCEMENT_LIMIT
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import Actor
from ..users.permissions import require_role
from .model import PRIORITY_NORMAL, PRIORITY_URGENT, Announcement
from .repository import AnnouncementRepository


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    @staticmethod
    def _validate(title: str, content: str, priority: Any) -> tuple[str, str, int]:
        title = require_non_empty(title, "Title")
        content = require_non_empty(content, "Content")
        try:
            priority = int(priority)
        except (TypeError, ValueError):
            raise ValidationError("Priority must be a number")
        if not PRIORITY_NORMAL <= priority <= PRIORITY_URGENT:
            raise ValidationError(f"Priority must be between {PRIORITY_NORMAL} and {PRIORITY_URGENT}")
        return title, content, priority

    def _get(self, announcement_id: int) -> Announcement:
        item = self._announcements.get_by_id(int(announcement_id))
        if not item:
            raise NotFoundError("Announcement not found")
        return item

    def list_banner(self) -> list[Announcement]:
        return list(self._announcements.list_active(limit=BANNER_ANNOUNCEMENT_LIMIT))

    def list_all(self, actor: Actor) -> list[Announcement]:
        require_role(actor, Role.ADMIN)
        return list(self._announcements.list_all())

    def create(self, actor: Actor, *, title: str, content: str, priority: Any = PRIORITY_NORMAL) -> int:
        require_role(actor, Role.ADMIN)
        title, content, priority = self._validate(title, content, priority)
        return self._announcements.create(title=title, content=content, priority=priority, author_id=actor.user_id)

    def update(self, actor: Actor, *, announcement_id: int, title: str, content: str, priority: Any) -> None:
        require_role(actor, Role.ADMIN)
        item = self._get(announcement_id)
        title, content, priority = self._validate(title, content, priority)
        if not self._announcements.update(
            announcement_id=item.announcement_id, title=title, content=content, priority=priority
        ):
            raise ValidationError("Failed to update announcement")

    def toggle(self, actor: Actor, *, announcement_id: int) -> bool:
        require_role(actor, Role.ADMIN)
        item = self._get(announcement_id)
        new_state = not item.is_active
        if not self._announcements.set_active(item.announcement_id, is_active=new_state):
            raise ValidationError("Failed to update announcement")
        return new_state

    def delete(self, actor: Actor, *, announcement_id: int) -> None:
        require_role(actor, Role.ADMIN)
        item = self._get(announcement_id)
        if not self._announcements.delete(item.announcement_id):
            raise ValidationError("Failed to delete announcement")

    def mark_read(self, actor: Actor, *, announcement_id: int) -> None:
        self._get(announcement_id)
        self._announcements.mark_read(announcement_id=int(announcement_id), user_id=actor.user_id)
