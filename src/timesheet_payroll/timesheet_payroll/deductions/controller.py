from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/deductions/presets", methods=["GET"], endpoint="deduction_presets")
    @login_required
    def deduction_presets():
        return ok(container.deduction_service.presets())

    @app.route("/api/admin/employees/<int:user_id>/deductions", methods=["GET"], endpoint="admin_list_deductions")
    @admin_required
    def admin_list_deductions(user_id: int):
        return ok(container.deduction_service.list_for_employee(current_actor(), user_id=user_id))

    @app.route("/api/admin/employees/<int:user_id>/deductions", methods=["POST"], endpoint="admin_create_deduction")
    @admin_required
    def admin_create_deduction(user_id: int):
        data = json_body()
        deduction_id = container.deduction_service.create(
            current_actor(),
            user_id=user_id,
            name=str(data.get("name", "")),
            amount=data.get("amount"),
            kind=data.get("kind"),
            is_active=bool(data.get("is_active", True)),
        )
        return ok({"deduction_id": deduction_id}, message="Deduction added", status=201)

    @app.route("/api/admin/deductions/<int:deduction_id>", methods=["PUT"], endpoint="admin_update_deduction")
    @admin_required
    def admin_update_deduction(deduction_id: int):
        data = json_body()
        container.deduction_service.update(
            current_actor(),
            deduction_id=deduction_id,
            name=str(data.get("name", "")),
            amount=data.get("amount"),
            kind=data.get("kind"),
            is_active=bool(data.get("is_active", True)),
        )
        return ok(message="Deduction updated")

    @app.route("/api/admin/deductions/<int:deduction_id>/toggle", methods=["POST"], endpoint="admin_toggle_deduction")
    @admin_required
    def admin_toggle_deduction(deduction_id: int):
        is_active = container.deduction_service.toggle(current_actor(), deduction_id=deduction_id)
        return ok({"is_active": is_active})

    @app.route("/api/admin/deductions/<int:deduction_id>", methods=["DELETE"], endpoint="admin_delete_deduction")
    @admin_required
    def admin_delete_deduction(deduction_id: int):
        container.deduction_service.delete(current_actor(), deduction_id=deduction_id)
        return ok(message="Deduction deleted")
