from datetime import date
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from src.timesheet_payroll.timesheet_payroll.core.enums import ActivityStatus, DeductionKind, Role
from src.timesheet_payroll.timesheet_payroll.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.timesheet_payroll.timesheet_payroll.users.service import AuthService, EmployeeService


@pytest.fixture
def auth(employees):
    return AuthService(employees)


@pytest.fixture
def service(employees, worklogs, deductions):
    return EmployeeService(employees, worklogs, deductions)


def test_authenticate_ok(auth, employees):
    employees.add(full_name="Eve", email="eve@example.com", password_hash=generate_password_hash("secret1"))

    s_user = auth.authenticate(" Eve@Example.com ", "secret1")

    assert s_user.full_name == "Eve"
    assert s_user.as_actor().role == Role.EMPLOYEE


@pytest.mark.parametrize("email, password", [("eve@example.com", "wrong"), ("nobody@example.com", "secret1")])
def test_authenticate_fails(auth, employees, email, password):
    employees.add(full_name="Eve", email="eve@example.com", password_hash=generate_password_hash("secret1"))

    with pytest.raises(AuthenticationError):
        auth.authenticate(email, password)


def test_authenticate_with_placeholder_hash(auth, employees):
    employees.add(full_name="Eve", email="eve@example.com", password_hash="not-a-hash")

    with pytest.raises(AuthenticationError):
        auth.authenticate("eve@example.com", "anything")


def test_first_login_creates_employee_at_default_wage(auth, employees):
    s_user = auth.ensure_profile(email="New@Example.com", full_name="", password="secret1")

    profile = employees.get_by_id(s_user.user_id)
    assert profile.email == "new@example.com"
    assert profile.full_name == "new@example.com"
    assert profile.role == Role.EMPLOYEE
    assert profile.hourly_wage == 10000
    assert auth.ensure_profile(email="new@example.com", full_name="x", password="secret1").user_id == s_user.user_id


@pytest.mark.parametrize("password", ["", "not-the-password"])
def test_existing_email_needs_its_own_password(auth, employees, password):
    employees.add(
        full_name="Sam Super", email="super@example.com", role=Role.SUPER, password_hash=generate_password_hash("super123")
    )

    with pytest.raises(AuthenticationError):
        auth.ensure_profile(email="Super@Example.com", full_name="", password=password)
    assert len(employees.list_all()) == 1


def test_short_password_is_rejected(auth):
    with pytest.raises(ValidationError):
        auth.ensure_profile(email="new@example.com", full_name="New", password="123")


def test_update_wage(service, employees, employee, admin, as_actor):
    service.update_wage(as_actor(admin), user_id=employee.user_id, hourly_wage="12500")

    assert employees.get_by_id(employee.user_id).hourly_wage == 12500


@pytest.mark.parametrize("wage", [0, -5, "abc", 10.5])
def test_invalid_wage(service, employee, admin, as_actor, wage):
    with pytest.raises(ValidationError):
        service.update_wage(as_actor(admin), user_id=employee.user_id, hourly_wage=wage)


def test_employee_cannot_change_wage(service, employee, as_actor):
    with pytest.raises(AuthorizationError):
        service.update_wage(as_actor(employee), user_id=employee.user_id, hourly_wage=99999)


def test_hidden_employees_are_listed_only_on_request(service, employee, admin, as_actor):
    service.set_hidden(as_actor(admin), user_id=employee.user_id, is_hidden=True)

    assert employee.user_id not in [p.user_id for p in service.list_employees(as_actor(admin))]
    assert employee.user_id in [p.user_id for p in service.list_employees(as_actor(admin), include_hidden=True)]


def test_change_role_is_super_only(service, employees, employee, admin, super_user, as_actor):
    with pytest.raises(AuthorizationError):
        service.change_role(as_actor(admin), user_id=employee.user_id, role="admin")

    service.change_role(as_actor(super_user), user_id=employee.user_id, role="admin")
    assert employees.get_by_id(employee.user_id).role == Role.ADMIN

    with pytest.raises(ValidationError):
        service.change_role(as_actor(super_user), user_id=super_user.user_id, role="employee")
    with pytest.raises(ValidationError):
        service.change_role(as_actor(super_user), user_id=employee.user_id, role="owner")


def test_delete_employee_removes_logs_and_rules(
    service, employees, worklogs, deductions, employee, super_user, as_actor
):
    worklogs.add(user_id=employee.user_id, work_date=date(2024, 3, 4), clock_in="09:00", clock_out="18:00")
    deductions.create(user_id=employee.user_id, name="Meal", amount=Decimal("5000"), kind=DeductionKind.FIXED)

    service.delete_employee(as_actor(super_user), user_id=employee.user_id)

    assert employees.get_by_id(employee.user_id) is None
    assert worklogs.list_for_user(employee.user_id) == []
    assert deductions.list_for_user(employee.user_id) == []
    with pytest.raises(NotFoundError):
        service.get_profile(employee.user_id)


def test_super_cannot_delete_self(service, super_user, as_actor):
    with pytest.raises(ValidationError):
        service.delete_employee(as_actor(super_user), user_id=super_user.user_id)


def test_activity_statuses(service, employees, worklogs, employee, admin, as_actor, fixed_now):
    today = fixed_now.date()
    recent = employees.add(full_name="Ria Recent", email="ria@example.com")
    stale = employees.add(full_name="Sid Stale", email="sid@example.com")
    worklogs.add(user_id=recent.user_id, work_date=date(2024, 3, 12), clock_in="09:00", clock_out="18:00")
    worklogs.add(user_id=stale.user_id, work_date=date(2024, 3, 5), clock_in="09:00", clock_out="18:00")
    worklogs.add(user_id=stale.user_id, work_date=date(2024, 2, 20), clock_in="09:00", clock_out="18:00")
    worklogs.add(
        user_id=employee.user_id, work_date=date(2024, 3, 14), clock_in="09:00", clock_out="18:00", status="pending"
    )

    rows = {a.profile.full_name: a for a in service.activity_statuses(as_actor(admin), today=today)}

    assert rows["Eve Employee"].status == ActivityStatus.NEW
    assert rows["Ria Recent"].status == ActivityStatus.ACTIVE
    assert rows["Sid Stale"].status == ActivityStatus.INACTIVE
    assert (rows["Sid Stale"].total_work_days, rows["Sid Stale"].monthly_work_days) == (2, 1)
    assert "Ada Admin" not in rows
