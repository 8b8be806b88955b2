from datetime import date
from decimal import Decimal

import pytest

from src.timesheet_payroll.timesheet_payroll.core.enums import DeductionKind
from src.timesheet_payroll.timesheet_payroll.core.exceptions import AuthorizationError
from src.timesheet_payroll.timesheet_payroll.payroll.service import PayrollService, write_slip_csv


@pytest.fixture
def service(worklogs, employees, deductions):
    return PayrollService(worklogs, employees, deductions)


def test_pending_and_rejected_entries_are_excluded(service, worklogs, employee, as_actor, march):
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 4), clock_in="09:00", clock_out="17:00")
    worklogs.add(
        user_id=employee.user_id, work_date=date(2024, 3, 5), clock_in="09:00", clock_out="17:00", status="pending"
    )
    worklogs.add(
        user_id=employee.user_id, work_date=date(2024, 3, 6), clock_in="09:00", clock_out="17:00", status="rejected"
    )

    summary = service.monthly_summary(as_actor(employee), reference=march)

    assert summary.result.total_hours == 8.0
    assert summary.result.gross_pay == 80000
    assert summary.work_days == 1


def test_month_bounds_are_inclusive(service, worklogs, employee, as_actor, march):
    for d in (date(2024, 2, 29), date(2024, 3, 1), date(2024, 3, 31), date(2024, 4, 1)):
        worklogs.add(user_id=employee.user_id, work_date=d, clock_in="09:00", clock_out="10:00")

    summary = service.monthly_summary(as_actor(employee), reference=march)

    assert (summary.period_start, summary.period_end) == (date(2024, 3, 1), date(2024, 3, 31))
    assert summary.result.total_hours == 2.0


def test_summary_uses_current_wage_and_active_rules(service, worklogs, employees, deductions, employee, as_actor, march):
    employees.update_wage(employee.user_id, hourly_wage=12000)
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 4), clock_in="09:00", clock_out="17:00")
    deductions.create(user_id=employee.user_id, name="Meal", amount=Decimal("5000"), kind=DeductionKind.FIXED)
    deductions.create(
        user_id=employee.user_id, name="Old", amount=Decimal("10"), kind=DeductionKind.PERCENTAGE, is_active=False
    )

    result = service.monthly_summary(as_actor(employee), reference=march).result

    assert result.gross_pay == 96000
    assert result.other_deductions == 5000


def test_employee_cannot_view_someone_else(service, employees, employee, as_actor, march):
    other = employees.add(full_name="Oli Other", email="oli@example.com")

    with pytest.raises(AuthorizationError):
        service.monthly_summary(as_actor(employee), reference=march, user_id=other.user_id)


def test_admin_can_view_any_employee(service, worklogs, employee, admin, as_actor, march):
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 4), clock_in="09:00", clock_out="17:00")

    summary = service.monthly_summary(as_actor(admin), reference=march, user_id=employee.user_id)

    assert summary.user_id == employee.user_id
    assert summary.result.net_pay == 77360


def test_day_detail_for_overnight_shift(service, worklogs, deductions, employee, as_actor):
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 8), clock_in="22:00", clock_out="06:00")
    deductions.create(user_id=employee.user_id, name="Meal", amount=Decimal("30000"), kind=DeductionKind.FIXED)

    detail = service.day_detail(as_actor(employee), work_date=date(2024, 3, 8))

    assert detail.night_shift
    assert detail.hours == "8.00"
    assert detail.result.gross_pay == 80000
    assert detail.result.other_deductions == 1000


def test_day_detail_pending_entry_has_no_pay(service, worklogs, deductions, employee, as_actor):
    worklogs.add(
        user_id=employee.user_id, work_date=date(2024, 3, 8), clock_in="09:00", clock_out="18:00", status="pending"
    )
    deductions.create(user_id=employee.user_id, name="Meal", amount=Decimal("30000"), kind=DeductionKind.FIXED)

    detail = service.day_detail(as_actor(employee), work_date=date(2024, 3, 8))

    assert detail.entry is not None
    assert detail.hours == "9.00"
    assert detail.result.gross_pay == 0
    assert detail.result.net_pay == 0


def test_day_detail_without_entry(service, employee, as_actor):
    detail = service.day_detail(as_actor(employee), work_date=date(2024, 3, 9))

    assert detail.entry is None
    assert detail.result.net_pay == 0


def test_payroll_slip_lines_and_csv(service, worklogs, deductions, employee, as_actor, march):
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 5), clock_in="22:00", clock_out="06:00")
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 4), clock_in="09:00", clock_out="13:30")
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 6), work_kind="day_off")
    deductions.create(user_id=employee.user_id, name="Pension", amount=Decimal("4.5"), kind=DeductionKind.PERCENTAGE)

    slip = service.payroll_slip(as_actor(employee), reference=march)

    assert [line.work_date.day for line in slip.lines] == [4, 5, 6]
    assert [line.day_pay for line in slip.lines] == [45000, 80000, 0]
    assert slip.lines[1].night_shift
    assert slip.work_days == 2
    assert slip.result.gross_pay == 125000
    assert [d.name for d in slip.result.deduction_lines] == ["Income tax", "Local tax", "Pension"]

    text = write_slip_csv(slip)
    assert text.splitlines()[0] == "work_date,work_kind,clock_in,clock_out,hours,night_shift,day_pay"
    assert "2024-03-05,regular,22:00,06:00,8.00,yes,80000" in text
    assert "Pension,4.5%,5625" in text
    assert f"Net pay,,{slip.result.net_pay}" in text


def test_employee_monthly_stats(service, worklogs, employee, as_actor, march):
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 4), clock_in="09:00", clock_out="17:00")
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 5), work_kind="day_off")

    stats = service.employee_monthly_stats(as_actor(employee), reference=march)

    assert stats == {"user_id": employee.user_id, "total_hours": 8.0, "work_days": 1}


def test_dashboard_stats_skip_hidden_employees(service, worklogs, employees, employee, admin, as_actor, march):
    hidden = employees.add(full_name="Hal Hidden", email="hal@example.com", is_hidden=True)
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 4), clock_in="09:00", clock_out="17:00")
    worklogs.add(user_id=hidden.user_id, work_date=date(2024, 3, 4), clock_in="09:00", clock_out="17:00")
    worklogs.add(
        user_id=employee.user_id, work_date=date(2024, 3, 5), clock_in="09:00", clock_out="17:00", status="pending"
    )

    stats = service.dashboard_stats(as_actor(admin), reference=march)

    # super, admin and employee are visible
    assert stats.employee_count == 3
    assert stats.pending_count == 1
    assert stats.total_hours == 8.0
    assert stats.total_gross_pay == 80000


def test_dashboard_requires_admin(service, employee, as_actor, march):
    with pytest.raises(AuthorizationError):
        service.dashboard_stats(as_actor(employee), reference=march)
