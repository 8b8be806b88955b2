from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import admin_required, current_actor, login_required, ok
from ..common.validators import optional_month, require_date
from ..container import Container
from .model import PayrollSlip
from .service import DayDetail, write_slip_csv


def register(app: Flask, container: Container) -> None:
    def _reference() -> date:
        return optional_month(request.args.get("month")) or now_local().date()

    def _slip_json(slip: PayrollSlip) -> dict:
        return {
            "user_id": slip.user_id,
            "full_name": slip.full_name,
            "email": slip.email,
            "period_start": slip.period_start,
            "period_end": slip.period_end,
            "work_days": slip.work_days,
            "lines": slip.lines,
            "payroll": slip.result.to_dict(),
        }

    def _day_json(detail: DayDetail) -> dict:
        return {
            "work_date": detail.work_date,
            "entry": detail.entry,
            "hours": detail.hours,
            "night_shift": detail.night_shift,
            "payroll": detail.result.to_dict(),
        }

    def _write_slip_csv(slip: PayrollSlip):
        csv_bytes = write_slip_csv(slip).encode("utf-8-sig")
        filename = f"payslip_{slip.user_id}_{slip.period_start.strftime('%Y%m')}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _slip(user_id: Optional[int]) -> PayrollSlip:
        return container.payroll_service.payroll_slip(current_actor(), reference=_reference(), user_id=user_id)

    @app.route("/api/me/summary", methods=["GET"], endpoint="my_summary")
    @login_required
    def my_summary():
        summary = container.payroll_service.monthly_summary(current_actor(), reference=_reference())
        return ok(summary.to_dict())

    @app.route("/api/me/stats", methods=["GET"], endpoint="my_stats")
    @login_required
    def my_stats():
        return ok(container.payroll_service.employee_monthly_stats(current_actor(), reference=_reference()))

    @app.route("/api/me/day/<work_date>", methods=["GET"], endpoint="my_day")
    @login_required
    def my_day(work_date: str):
        detail = container.payroll_service.day_detail(current_actor(), work_date=require_date(work_date, "Work date"))
        return ok(_day_json(detail))

    @app.route("/api/me/slip", methods=["GET"], endpoint="my_slip")
    @login_required
    def my_slip():
        return ok(_slip_json(_slip(None)))

    @app.route("/api/me/slip.csv", methods=["GET"], endpoint="my_slip_csv")
    @login_required
    def my_slip_csv():
        return _write_slip_csv(_slip(None))

    @app.route("/api/admin/employees/<int:user_id>/summary", methods=["GET"], endpoint="admin_employee_summary")
    @admin_required
    def admin_employee_summary(user_id: int):
        summary = container.payroll_service.monthly_summary(current_actor(), reference=_reference(), user_id=user_id)
        return ok(summary.to_dict())

    @app.route("/api/admin/employees/<int:user_id>/slip", methods=["GET"], endpoint="admin_employee_slip")
    @admin_required
    def admin_employee_slip(user_id: int):
        return ok(_slip_json(_slip(user_id)))

    @app.route("/api/admin/employees/<int:user_id>/slip.csv", methods=["GET"], endpoint="admin_employee_slip_csv")
    @admin_required
    def admin_employee_slip_csv(user_id: int):
        return _write_slip_csv(_slip(user_id))

    @app.route("/api/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        stats = container.payroll_service.dashboard_stats(current_actor(), reference=_reference())
        return ok(stats)
