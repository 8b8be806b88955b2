from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_time, month_bounds
from ..core.enums import ApprovalStatus, NetPayPolicy, Role, WorkKind
from ..core.exceptions import AuthorizationError, NotFoundError
from ..deductions.repository import DeductionRepository
from ..users.model import Actor, EmployeeProfile
from ..users.permissions import is_admin_or_above, require_role
from ..users.repository import EmployeeRepository
from ..worklogs.model import WorkLogEntry
from ..worklogs.repository import WorkLogRepository
from .calculator.base import PayrollCalculator
from .calculator.daily_calculator import DailyPayrollCalculator
from .calculator.monthly_calculator import MonthlyPayrollCalculator
from .hours import compute_minutes, format_hours, is_night_shift
from .model import PayrollResult, PayrollSlip, SlipLine


@dataclass(frozen=True)
class MonthlySummary:
    user_id: int
    period_start: date
    period_end: date
    work_days: int
    result: PayrollResult

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "work_days": self.work_days,
            "payroll": self.result.to_dict(),
        }


@dataclass(frozen=True)
class DayDetail:
    work_date: date
    entry: Optional[WorkLogEntry]
    hours: str
    night_shift: bool
    result: PayrollResult


@dataclass(frozen=True)
class DashboardStats:
    employee_count: int
    pending_count: int
    total_hours: float
    total_gross_pay: int


def _counts_as_work_day(entry: WorkLogEntry) -> bool:
    return entry.is_approved and entry.work_kind == WorkKind.REGULAR


class PayrollService:
    """Pay views over approved work logs.

    Nothing is stored: every call re-reads the entries, the employee's
    current wage and active rules, and recomputes.
    """

    def __init__(
        self,
        worklogs: WorkLogRepository,
        employees: EmployeeRepository,
        deductions: DeductionRepository,
        *,
        net_pay_policy: NetPayPolicy = NetPayPolicy.PRESERVE,
        calculator: Optional[PayrollCalculator] = None,
        day_calculator: Optional[PayrollCalculator] = None,
    ):
        self._worklogs = worklogs
        self._employees = employees
        self._deductions = deductions
        self._calculator = calculator or MonthlyPayrollCalculator(net_pay_policy=net_pay_policy)
        self._day_calculator = day_calculator or DailyPayrollCalculator(net_pay_policy=net_pay_policy)

    def _profile_for(self, actor: Actor, user_id: Optional[int]) -> EmployeeProfile:
        target = actor.user_id if user_id is None else int(user_id)
        if target != actor.user_id and not is_admin_or_above(actor.role):
            raise AuthorizationError("You can only view your own pay")

        profile = self._employees.get_by_id(target)
        if not profile:
            raise NotFoundError("Employee not found")
        return profile

    def _approved_in_month(self, user_id: int, reference: date) -> tuple[date, date, list[WorkLogEntry]]:
        start, end = month_bounds(reference)
        entries = self._worklogs.list_for_user(
            user_id,
            start_date=start,
            end_date=end,
            status=ApprovalStatus.APPROVED,
        )
        return start, end, sorted(entries, key=lambda e: e.work_date)

    def monthly_summary(self, actor: Actor, *, reference: date, user_id: Optional[int] = None) -> MonthlySummary:
        profile = self._profile_for(actor, user_id)
        start, end, entries = self._approved_in_month(profile.user_id, reference)
        rules = self._deductions.list_for_user(profile.user_id, active_only=True)

        return MonthlySummary(
            user_id=profile.user_id,
            period_start=start,
            period_end=end,
            work_days=sum(1 for e in entries if _counts_as_work_day(e)),
            result=self._calculator.compute(entries, profile.hourly_wage, rules),
        )

    def day_detail(self, actor: Actor, *, work_date: date, user_id: Optional[int] = None) -> DayDetail:
        profile = self._profile_for(actor, user_id)
        entry = self._worklogs.get_for_user_and_date(profile.user_id, work_date)
        if entry is None:
            return DayDetail(
                work_date=work_date,
                entry=None,
                hours=format_hours(None, None),
                night_shift=False,
                result=self._day_calculator.compute_for_minutes(0, profile.hourly_wage, ()),
            )

        minutes = compute_minutes(entry.clock_in, entry.clock_out, entry.work_kind) if entry.is_approved else 0
        # a day that earns nothing carries no deductions either
        rules = self._deductions.list_for_user(profile.user_id, active_only=True) if minutes else ()
        return DayDetail(
            work_date=work_date,
            entry=entry,
            hours=format_hours(entry.clock_in, entry.clock_out, entry.work_kind),
            night_shift=is_night_shift(entry.clock_in, entry.clock_out),
            result=self._day_calculator.compute_for_minutes(minutes, profile.hourly_wage, rules),
        )

    def payroll_slip(self, actor: Actor, *, reference: date, user_id: Optional[int] = None) -> PayrollSlip:
        profile = self._profile_for(actor, user_id)
        start, end, entries = self._approved_in_month(profile.user_id, reference)
        rules = self._deductions.list_for_user(profile.user_id, active_only=True)

        lines = []
        for e in entries:
            day = self._calculator.compute_for_minutes(
                compute_minutes(e.clock_in, e.clock_out, e.work_kind), profile.hourly_wage, ()
            )
            lines.append(
                SlipLine(
                    work_date=e.work_date,
                    work_kind=e.work_kind,
                    status=e.status,
                    clock_in=e.clock_in,
                    clock_out=e.clock_out,
                    hours=day.total_hours,
                    night_shift=is_night_shift(e.clock_in, e.clock_out),
                    day_pay=day.gross_pay,
                )
            )

        return PayrollSlip(
            user_id=profile.user_id,
            full_name=profile.full_name,
            email=profile.email,
            period_start=start,
            period_end=end,
            work_days=sum(1 for e in entries if _counts_as_work_day(e)),
            lines=tuple(lines),
            result=self._calculator.compute(entries, profile.hourly_wage, rules),
        )

    def employee_monthly_stats(self, actor: Actor, *, reference: date, user_id: Optional[int] = None) -> dict:
        profile = self._profile_for(actor, user_id)
        _, _, entries = self._approved_in_month(profile.user_id, reference)
        minutes = self._calculator.worked_minutes(entries)
        return {
            "user_id": profile.user_id,
            "total_hours": minutes / 60,
            "work_days": sum(1 for e in entries if _counts_as_work_day(e)),
        }

    def dashboard_stats(self, actor: Actor, *, reference: date) -> DashboardStats:
        require_role(actor, Role.ADMIN)
        start, end = month_bounds(reference)
        visible = {p.user_id: p for p in self._employees.list_all(include_hidden=False)}

        minutes_by_user: dict[int, int] = {}
        for e in self._worklogs.list_in_range(start_date=start, end_date=end, status=ApprovalStatus.APPROVED):
            if e.user_id not in visible:
                continue
            minutes_by_user[e.user_id] = minutes_by_user.get(e.user_id, 0) + compute_minutes(
                e.clock_in, e.clock_out, e.work_kind
            )

        total_gross = 0
        for user_id, minutes in minutes_by_user.items():
            total_gross += self._calculator.compute_for_minutes(minutes, visible[user_id].hourly_wage, ()).gross_pay

        return DashboardStats(
            employee_count=len(visible),
            pending_count=self._worklogs.count_by_status(ApprovalStatus.PENDING),
            total_hours=sum(minutes_by_user.values()) / 60,
            total_gross_pay=total_gross,
        )


SLIP_CSV_FIELDS = [
    "work_date",
    "work_kind",
    "clock_in",
    "clock_out",
    "hours",
    "night_shift",
    "day_pay",
]


def write_slip_csv(slip: PayrollSlip) -> str:
    """Render a slip as CSV: one row per entry, then the deduction lines and totals."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=SLIP_CSV_FIELDS)
    writer.writeheader()
    for line in slip.lines:
        writer.writerow(
            {
                "work_date": line.work_date.isoformat(),
                "work_kind": line.work_kind.value,
                "clock_in": format_time(line.clock_in) or "-",
                "clock_out": format_time(line.clock_out) or "-",
                "hours": f"{line.hours:.2f}",
                "night_shift": "yes" if line.night_shift else "no",
                "day_pay": line.day_pay,
            }
        )

    result = slip.result
    rows = csv.writer(out)
    rows.writerow([])
    rows.writerow(["item", "rate", "amount"])
    rows.writerow(["Gross pay", "", result.gross_pay])
    for d in result.deduction_lines:
        rows.writerow([d.name, f"{d.rate}%" if d.rate is not None else "", d.amount])
    rows.writerow(["Total deductions", "", result.total_deductions])
    rows.writerow(["Net pay", "", result.net_pay])
    return out.getvalue()
