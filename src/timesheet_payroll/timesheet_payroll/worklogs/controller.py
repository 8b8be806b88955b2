from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, current_actor, fail, json_body, login_required, ok
from ..common.validators import optional_month, require_date, require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _form(data: dict) -> dict:
        return {
            "work_date": require_date(data.get("work_date"), "Work date"),
            "work_kind": data.get("work_kind") or "regular",
            "clock_in": data.get("clock_in"),
            "clock_out": data.get("clock_out"),
            "day_off_reason": data.get("day_off_reason"),
        }

    @app.route("/api/me/worklogs", methods=["GET"], endpoint="my_worklogs")
    @login_required
    def my_worklogs():
        entries = container.worklog_service.list_history(
            current_actor(),
            status=request.args.get("status"),
            month=optional_month(request.args.get("month")),
        )
        return ok(entries)

    @app.route("/api/me/worklogs", methods=["POST"], endpoint="register_worklog")
    @login_required
    def register_worklog():
        log_id = container.worklog_service.register(current_actor(), **_form(json_body()))
        return ok({"log_id": log_id}, message="Submitted for approval", status=201)

    @app.route("/api/me/worklogs/<int:log_id>", methods=["PUT"], endpoint="edit_worklog")
    @login_required
    def edit_worklog(log_id: int):
        container.worklog_service.edit(current_actor(), log_id=log_id, **_form(json_body()))
        return ok(message="Updated; waiting for approval again")

    @app.route("/api/me/worklogs/<int:log_id>", methods=["DELETE"], endpoint="delete_worklog")
    @login_required
    def delete_worklog(log_id: int):
        container.worklog_service.delete(current_actor(), log_id=log_id)
        return ok(message="Deleted")

    @app.route("/api/admin/worklogs/pending", methods=["GET"], endpoint="admin_pending_worklogs")
    @admin_required
    def admin_pending_worklogs():
        rows = container.worklog_service.list_pending(current_actor())
        return ok(rows)

    @app.route("/api/admin/employees/<int:user_id>/worklogs", methods=["GET"], endpoint="admin_employee_worklogs")
    @admin_required
    def admin_employee_worklogs(user_id: int):
        entries = container.worklog_service.list_history(
            current_actor(),
            user_id=user_id,
            status=request.args.get("status"),
            month=optional_month(request.args.get("month")),
        )
        return ok(entries)

    @app.route("/api/admin/worklogs", methods=["POST"], endpoint="admin_upsert_worklog")
    @admin_required
    def admin_upsert_worklog():
        data = json_body()
        if not data.get("user_id"):
            return fail("user_id is required", 400)

        log_id = container.worklog_service.admin_upsert(
            current_actor(),
            user_id=require_int(data["user_id"], "user_id"),
            status=data.get("status") or "approved",
            log_id=require_int(data["log_id"], "log_id") if data.get("log_id") else None,
            **_form(data),
        )
        return ok({"log_id": log_id}, message="Saved")

    @app.route("/api/admin/worklogs/<int:log_id>/approve", methods=["POST"], endpoint="admin_approve_worklog")
    @admin_required
    def admin_approve_worklog(log_id: int):
        container.worklog_service.approve(current_actor(), log_id=log_id)
        return ok(message="Approved")

    @app.route("/api/admin/worklogs/<int:log_id>/reject", methods=["POST"], endpoint="admin_reject_worklog")
    @admin_required
    def admin_reject_worklog(log_id: int):
        container.worklog_service.reject(current_actor(), log_id=log_id, reason=str(json_body().get("reason", "")))
        return ok(message="Rejected")

    @app.route("/api/admin/worklogs/<int:log_id>", methods=["DELETE"], endpoint="admin_delete_worklog")
    @admin_required
    def admin_delete_worklog(log_id: int):
        container.worklog_service.delete(current_actor(), log_id=log_id)
        return ok(message="Deleted")
