from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/announcements", methods=["GET"], endpoint="announcement_banner")
    @login_required
    def announcement_banner():
        return ok(container.announcement_service.list_banner())

    @app.route("/api/announcements/<int:announcement_id>/read", methods=["POST"], endpoint="announcement_read")
    @login_required
    def announcement_read(announcement_id: int):
        container.announcement_service.mark_read(current_actor(), announcement_id=announcement_id)
        return ok()

    @app.route("/api/admin/announcements", methods=["GET"], endpoint="admin_announcements")
    @admin_required
    def admin_announcements():
        return ok(container.announcement_service.list_all(current_actor()))

    @app.route("/api/admin/announcements", methods=["POST"], endpoint="admin_create_announcement")
    @admin_required
    def admin_create_announcement():
        data = json_body()
        announcement_id = container.announcement_service.create(
            current_actor(),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            priority=data.get("priority", 1),
        )
        return ok({"announcement_id": announcement_id}, message="Announcement posted", status=201)

    @app.route("/api/admin/announcements/<int:announcement_id>", methods=["PUT"], endpoint="admin_update_announcement")
    @admin_required
    def admin_update_announcement(announcement_id: int):
        data = json_body()
        container.announcement_service.update(
            current_actor(),
            announcement_id=announcement_id,
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            priority=data.get("priority", 1),
        )
        return ok(message="Announcement updated")

    @app.route(
        "/api/admin/announcements/<int:announcement_id>/toggle",
        methods=["POST"],
        endpoint="admin_toggle_announcement",
    )
    @admin_required
    def admin_toggle_announcement(announcement_id: int):
        is_active = container.announcement_service.toggle(current_actor(), announcement_id=announcement_id)
        return ok({"is_active": is_active})

    @app.route("/api/admin/announcements/<int:announcement_id>", methods=["DELETE"], endpoint="admin_delete_announcement")
    @admin_required
    def admin_delete_announcement(announcement_id: int):
        container.announcement_service.delete(current_actor(), announcement_id=announcement_id)
        return ok(message="Announcement deleted")
