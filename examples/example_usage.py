"""Example: price a month of work logs with the payroll engine (no Flask, no database).

Services and controllers are thin layers; the pay arithmetic is a pure function.
"""

from datetime import date, time
from decimal import Decimal

from src.timesheet_payroll.timesheet_payroll.core.enums import ApprovalStatus, DeductionKind, WorkKind
from src.timesheet_payroll.timesheet_payroll.deductions.model import DeductionRule
from src.timesheet_payroll.timesheet_payroll.payroll.engine import compute_hours, compute_payroll
from src.timesheet_payroll.timesheet_payroll.worklogs.model import WorkLogEntry


def main():
    entries = [
        WorkLogEntry(1, 1, date(2024, 3, 4), time(9, 0), time(18, 0), WorkKind.REGULAR, ApprovalStatus.APPROVED),
        WorkLogEntry(2, 1, date(2024, 3, 5), time(22, 0), time(6, 0), WorkKind.REGULAR, ApprovalStatus.APPROVED),
        WorkLogEntry(3, 1, date(2024, 3, 6), None, None, WorkKind.DAY_OFF, ApprovalStatus.APPROVED),
        WorkLogEntry(4, 1, date(2024, 3, 7), time(9, 0), time(12, 0), WorkKind.REGULAR, ApprovalStatus.PENDING),
    ]
    rules = [
        DeductionRule(1, 1, "Meal", Decimal("5000"), DeductionKind.FIXED),
        DeductionRule(2, 1, "National pension", Decimal("4.5"), DeductionKind.PERCENTAGE),
    ]

    for e in entries:
        print(e.work_date, e.status.value, compute_hours(e.clock_in, e.clock_out, e.work_kind))

    result = compute_payroll(entries, 10000, rules)
    for line in result.deduction_lines:
        print(f"{line.name:<20} {line.amount:>10}")
    print(f"{'Gross':<20} {result.gross_pay:>10}")
    print(f"{'Net':<20} {result.net_pay:>10}")


if __name__ == "__main__":
    main()
