from __future__ import annotations

from flask import Flask, redirect, request, session

from ..common.datetime_utils import now_local
from ..common.http import (
    admin_required,
    current_actor,
    fail,
    json_body,
    login_required,
    ok,
    super_required,
)
from ..container import Container
from ..core.enums import Role
from .permissions import landing_page_for, role_display_name
from .service import SessionUser


def register(app: Flask, container: Container) -> None:
    def _start_session(s_user: SessionUser, *, remember: bool) -> None:
        session.clear()
        session.permanent = remember
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

    def _session_payload() -> dict:
        role = Role(session["role"])
        return {
            "user_id": session["user_id"],
            "name": session.get("name"),
            "role": role.value,
            "role_name": role_display_name(role),
            "landing_page": landing_page_for(role),
        }

    @app.route("/", methods=["GET"], endpoint="landing")
    def landing():
        role = session.get("role")
        return redirect(landing_page_for(Role(role) if role else None))

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        email = str(data.get("email", ""))
        password = str(data.get("password", ""))
        if not email or not password:
            return fail("Email and password are required", 400)

        s_user = container.auth_service.authenticate(email, password)
        _start_session(s_user, remember=bool(data.get("remember_me")))
        return ok(_session_payload(), message="Signed in")

    @app.route("/register", methods=["POST"], endpoint="register")
    def register_profile():
        data = json_body()
        s_user = container.auth_service.ensure_profile(
            email=str(data.get("email", "")),
            full_name=str(data.get("full_name", "")),
            password=str(data.get("password", "")),
        )
        _start_session(s_user, remember=False)
        return ok(_session_payload(), message="Signed in", status=201)

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Signed out")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        profile = container.employee_service.get_profile(int(session["user_id"]))
        return ok({**_session_payload(), "profile": profile})

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        include_hidden = request.args.get("include_hidden") in {"1", "true", "yes"}
        employees = container.employee_service.list_employees(current_actor(), include_hidden=include_hidden)
        return ok(employees)

    @app.route("/api/admin/employees/<int:user_id>/wage", methods=["PUT"], endpoint="admin_update_wage")
    @admin_required
    def admin_update_wage(user_id: int):
        container.employee_service.update_wage(
            current_actor(), user_id=user_id, hourly_wage=json_body().get("hourly_wage")
        )
        return ok(message="Hourly wage updated")

    @app.route("/api/admin/employees/<int:user_id>/hidden", methods=["PUT"], endpoint="admin_set_hidden")
    @admin_required
    def admin_set_hidden(user_id: int):
        is_hidden = bool(json_body().get("is_hidden"))
        container.employee_service.set_hidden(current_actor(), user_id=user_id, is_hidden=is_hidden)
        return ok({"is_hidden": is_hidden})

    @app.route("/api/admin/employees/status", methods=["GET"], endpoint="admin_employee_status")
    @admin_required
    def admin_employee_status():
        rows = container.employee_service.activity_statuses(current_actor(), today=now_local().date())
        return ok(rows)

    @app.route("/api/super/employees/<int:user_id>/role", methods=["PUT"], endpoint="super_change_role")
    @super_required
    def super_change_role(user_id: int):
        container.employee_service.change_role(current_actor(), user_id=user_id, role=json_body().get("role"))
        return ok(message="Role updated")

    @app.route("/api/super/employees/<int:user_id>", methods=["DELETE"], endpoint="super_delete_employee")
    @super_required
    def super_delete_employee(user_id: int):
        container.employee_service.delete_employee(current_actor(), user_id=user_id)
        return ok(message="Employee deleted")
