from __future__ import annotations

import dataclasses
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.timesheet_payroll.timesheet_payroll.announcements.model import Announcement
from src.timesheet_payroll.timesheet_payroll.common.datetime_utils import parse_time_of_day
from src.timesheet_payroll.timesheet_payroll.container import wire_services
from src.timesheet_payroll.timesheet_payroll.core.enums import ApprovalStatus, Role, WorkKind
from src.timesheet_payroll.timesheet_payroll.deductions.model import DeductionRule
from src.timesheet_payroll.timesheet_payroll.diary.model import DiaryEntry
from src.timesheet_payroll.timesheet_payroll.users.model import Actor, EmployeeProfile
from src.timesheet_payroll.timesheet_payroll.worklogs.model import PendingWorkLogRow, WorkLogEntry


class InMemoryEmployees:
    def __init__(self):
        self._by_id: dict[int, EmployeeProfile] = {}
        self._id = 0

    def add(self, *, full_name, email, role=Role.EMPLOYEE, hourly_wage=10000, is_hidden=False, password_hash=""):
        user_id = self.create(
            full_name=full_name, email=email, password_hash=password_hash, role=role, hourly_wage=hourly_wage
        )
        if is_hidden:
            self.set_hidden(user_id, is_hidden=True)
        return self._by_id[user_id]

    def get_by_id(self, user_id):
        return self._by_id.get(int(user_id))

    def get_by_email(self, email):
        return next((p for p in self._by_id.values() if p.email == email), None)

    def list_all(self, *, include_hidden=False, role=None):
        items = [p for p in self._by_id.values() if include_hidden or not p.is_hidden]
        if role is not None:
            items = [p for p in items if p.role == role]
        return sorted(items, key=lambda p: p.full_name)

    def create(self, *, full_name, email, password_hash, role, hourly_wage):
        self._id += 1
        self._by_id[self._id] = EmployeeProfile(
            user_id=self._id,
            full_name=full_name,
            email=email,
            role=Role(role),
            hourly_wage=int(hourly_wage),
            password_hash=password_hash,
            created_at=datetime(2024, 1, 1, 9, 0),
        )
        return self._id

    def _replace(self, user_id, **changes):
        p = self._by_id.get(int(user_id))
        if not p:
            return False
        self._by_id[p.user_id] = dataclasses.replace(p, **changes)
        return True

    def update_wage(self, user_id, *, hourly_wage):
        return self._replace(user_id, hourly_wage=int(hourly_wage))

    def set_hidden(self, user_id, *, is_hidden):
        return self._replace(user_id, is_hidden=bool(is_hidden))

    def set_role(self, user_id, *, role):
        return self._replace(user_id, role=Role(role))

    def delete_by_id(self, user_id):
        return self._by_id.pop(int(user_id), None) is not None


class InMemoryWorkLogs:
    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self._employees = employees
        self._by_id: dict[int, WorkLogEntry] = {}
        self._id = 0

    def add(self, *, user_id, work_date, clock_in=None, clock_out=None, work_kind="regular", status="approved"):
        log_id = self.create(
            user_id=user_id,
            work_date=work_date,
            clock_in=parse_time_of_day(clock_in),
            clock_out=parse_time_of_day(clock_out),
            work_kind=WorkKind(work_kind),
            status=ApprovalStatus(status),
        )
        return self._by_id[log_id]

    def get_by_id(self, log_id):
        return self._by_id.get(int(log_id))

    def get_for_user_and_date(self, user_id, work_date):
        return next((e for e in self._by_id.values() if e.user_id == int(user_id) and e.work_date == work_date), None)

    def list_for_user(self, user_id, *, start_date=None, end_date=None, status=None, limit=None):
        items = [
            e
            for e in self._by_id.values()
            if e.user_id == int(user_id)
            and (start_date is None or e.work_date >= start_date)
            and (end_date is None or e.work_date <= end_date)
            and (status is None or e.status == status)
        ]
        items.sort(key=lambda e: e.work_date, reverse=True)
        return items[:limit] if limit is not None else items

    def list_in_range(self, *, start_date, end_date, status=None):
        items = [
            e
            for e in self._by_id.values()
            if start_date <= e.work_date <= end_date and (status is None or e.status == status)
        ]
        return sorted(items, key=lambda e: (e.work_date, e.user_id))

    def list_pending(self, *, limit=500):
        rows = []
        for e in sorted(self._by_id.values(), key=lambda e: e.work_date):
            if e.status != ApprovalStatus.PENDING:
                continue
            p = self._employees.get_by_id(e.user_id) if self._employees else None
            rows.append(PendingWorkLogRow(entry=e, full_name=p.full_name if p else "", email=p.email if p else ""))
        return rows[:limit]

    def count_by_status(self, status):
        return sum(1 for e in self._by_id.values() if e.status == status)

    def create(self, *, user_id, work_date, clock_in, clock_out, work_kind, status, day_off_reason=None):
        self._id += 1
        self._by_id[self._id] = WorkLogEntry(
            log_id=self._id,
            user_id=int(user_id),
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_out,
            work_kind=work_kind,
            status=status,
            day_off_reason=day_off_reason,
        ).validate()
        return self._id

    def update(
        self, *, log_id, work_date, clock_in, clock_out, work_kind, status, day_off_reason=None, rejection_reason=None
    ):
        e = self._by_id.get(int(log_id))
        if not e:
            return False
        self._by_id[e.log_id] = dataclasses.replace(
            e,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_out,
            work_kind=work_kind,
            status=status,
            day_off_reason=day_off_reason,
            rejection_reason=rejection_reason,
        )
        return True

    def decide(self, *, log_id, status, rejection_reason=None):
        e = self._by_id.get(int(log_id))
        if not e or e.status != ApprovalStatus.PENDING:
            return False
        self._by_id[e.log_id] = dataclasses.replace(e, status=status, rejection_reason=rejection_reason)
        return True

    def delete(self, log_id):
        return self._by_id.pop(int(log_id), None) is not None

    def delete_for_user(self, user_id):
        ids = [i for i, e in self._by_id.items() if e.user_id == int(user_id)]
        for i in ids:
            del self._by_id[i]
        return len(ids)


class InMemoryDeductions:
    def __init__(self):
        self._by_id: dict[int, DeductionRule] = {}
        self._id = 0

    def get_by_id(self, deduction_id):
        return self._by_id.get(int(deduction_id))

    def list_for_user(self, user_id, *, active_only=False):
        return [r for r in self._by_id.values() if r.user_id == int(user_id) and (r.is_active or not active_only)]

    def create(self, *, user_id, name, amount, kind, is_active=True):
        self._id += 1
        self._by_id[self._id] = DeductionRule(
            deduction_id=self._id, user_id=int(user_id), name=name, amount=amount, kind=kind, is_active=is_active
        )
        return self._id

    def update(self, *, deduction_id, name, amount, kind, is_active):
        r = self._by_id.get(int(deduction_id))
        if not r:
            return False
        self._by_id[r.deduction_id] = dataclasses.replace(r, name=name, amount=amount, kind=kind, is_active=is_active)
        return True

    def set_active(self, deduction_id, *, is_active):
        r = self._by_id.get(int(deduction_id))
        if not r:
            return False
        self._by_id[r.deduction_id] = dataclasses.replace(r, is_active=is_active)
        return True

    def delete(self, deduction_id):
        return self._by_id.pop(int(deduction_id), None) is not None

    def delete_for_user(self, user_id):
        ids = [i for i, r in self._by_id.items() if r.user_id == int(user_id)]
        for i in ids:
            del self._by_id[i]
        return len(ids)


class InMemoryAnnouncements:
    def __init__(self):
        self._by_id: dict[int, Announcement] = {}
        self._id = 0
        self.reads: set[tuple[int, int]] = set()

    def get_by_id(self, announcement_id):
        return self._by_id.get(int(announcement_id))

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda a: a.created_at, reverse=True)

    def list_active(self, *, limit):
        items = [a for a in self._by_id.values() if a.is_active]
        items.sort(key=lambda a: (a.priority, a.created_at), reverse=True)
        return items[:limit]

    def create(self, *, title, content, priority, author_id):
        self._id += 1
        self._by_id[self._id] = Announcement(
            announcement_id=self._id,
            title=title,
            content=content,
            priority=int(priority),
            is_active=True,
            author_id=author_id,
            created_at=datetime(2024, 1, 1, 9, 0) + timedelta(minutes=self._id),
        )
        return self._id

    def update(self, *, announcement_id, title, content, priority):
        a = self._by_id.get(int(announcement_id))
        if not a:
            return False
        self._by_id[a.announcement_id] = dataclasses.replace(a, title=title, content=content, priority=int(priority))
        return True

    def set_active(self, announcement_id, *, is_active):
        a = self._by_id.get(int(announcement_id))
        if not a:
            return False
        self._by_id[a.announcement_id] = dataclasses.replace(a, is_active=bool(is_active))
        return True

    def delete(self, announcement_id):
        return self._by_id.pop(int(announcement_id), None) is not None

    def mark_read(self, *, announcement_id, user_id):
        self.reads.add((int(announcement_id), int(user_id)))


class InMemoryDiary:
    def __init__(self):
        self._by_id: dict[int, DiaryEntry] = {}
        self._id = 0

    def get_by_id(self, diary_id):
        return self._by_id.get(int(diary_id))

    def get_by_date(self, diary_date):
        return next((e for e in self._by_id.values() if e.diary_date == diary_date), None)

    def list_in_range(self, *, start_date, end_date):
        items = [e for e in self._by_id.values() if start_date <= e.diary_date <= end_date]
        return sorted(items, key=lambda e: e.diary_date, reverse=True)

    def create(self, *, admin_id, diary_date, title, content):
        self._id += 1
        stamp = datetime(2024, 1, 1, 9, 0) + timedelta(minutes=self._id)
        self._by_id[self._id] = DiaryEntry(
            diary_id=self._id,
            admin_id=admin_id,
            diary_date=diary_date,
            title=title,
            content=content,
            created_at=stamp,
            updated_at=stamp,
        )
        return self._id

    def update(self, *, diary_id, admin_id, title, content):
        e = self._by_id.get(int(diary_id))
        if not e:
            return False
        self._by_id[e.diary_id] = dataclasses.replace(
            e, admin_id=admin_id, title=title, content=content, updated_at=e.updated_at + timedelta(hours=1)
        )
        return True

    def delete(self, diary_id):
        return self._by_id.pop(int(diary_id), None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 10, 0, 0)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def worklogs(employees) -> InMemoryWorkLogs:
    return InMemoryWorkLogs(employees)


@pytest.fixture
def deductions() -> InMemoryDeductions:
    return InMemoryDeductions()


@pytest.fixture
def announcements() -> InMemoryAnnouncements:
    return InMemoryAnnouncements()


@pytest.fixture
def diary() -> InMemoryDiary:
    return InMemoryDiary()


@pytest.fixture
def super_user(employees) -> EmployeeProfile:
    return employees.add(full_name="Sam Super", email="super@example.com", role=Role.SUPER)


@pytest.fixture
def admin(employees, super_user) -> EmployeeProfile:
    return employees.add(full_name="Ada Admin", email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def employee(employees, admin) -> EmployeeProfile:
    return employees.add(full_name="Eve Employee", email="eve@example.com")


def actor_of(profile: EmployeeProfile) -> Actor:
    return Actor(user_id=profile.user_id, role=profile.role)


@pytest.fixture
def as_actor():
    return actor_of


@pytest.fixture
def container(employees, worklogs, deductions, announcements, diary):
    return wire_services(
        employees_repo=employees,
        worklogs_repo=worklogs,
        deductions_repo=deductions,
        announcements_repo=announcements,
        diary_repo=diary,
    )


@pytest.fixture
def march() -> date:
    return date(2024, 3, 15)
