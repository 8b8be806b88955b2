from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import admin_required, current_actor, json_body, ok
from ..common.validators import optional_month, require_date
from ..container import Container
from .model import DiaryEntry


def _entry_json(entry: DiaryEntry) -> dict:
    return {
        "diary_id": entry.diary_id,
        "diary_date": entry.diary_date,
        "title": entry.title,
        "content": entry.content,
        "author_id": entry.admin_id,
        "author_name": entry.author_name,
        "created_at": entry.created_at,
        "updated_at": entry.updated_at,
        "edited": entry.edited,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/diary", methods=["GET"], endpoint="admin_diary")
    @admin_required
    def admin_diary():
        month = optional_month(request.args.get("month")) or now_local().date()
        entries = container.diary_service.list_month(current_actor(), month=month)
        return ok([_entry_json(e) for e in entries])

    @app.route("/api/admin/diary/day/<diary_date>", methods=["GET"], endpoint="admin_diary_day")
    @admin_required
    def admin_diary_day(diary_date: str):
        entry = container.diary_service.get_for_date(current_actor(), diary_date=require_date(diary_date, "Diary date"))
        return ok({"entry": _entry_json(entry) if entry else None})

    @app.route("/api/admin/diary/day/<diary_date>", methods=["PUT"], endpoint="admin_save_diary")
    @admin_required
    def admin_save_diary(diary_date: str):
        data = json_body()
        diary_id, created = container.diary_service.save(
            current_actor(),
            diary_date=require_date(diary_date, "Diary date"),
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
        )
        if created:
            return ok({"diary_id": diary_id}, message="Diary entry saved", status=201)
        return ok({"diary_id": diary_id}, message="Diary entry updated")

    @app.route("/api/admin/diary/<int:diary_id>", methods=["DELETE"], endpoint="admin_delete_diary")
    @admin_required
    def admin_delete_diary(diary_id: int):
        container.diary_service.delete(current_actor(), diary_id=diary_id)
        return ok(message="Diary entry deleted")
