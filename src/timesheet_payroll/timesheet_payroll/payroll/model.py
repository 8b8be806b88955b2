from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, time
from typing import Optional

from ..core.enums import ApprovalStatus, WorkKind


@dataclass(frozen=True)
class DeductionLine:
    """One computed deduction on a pay result (statutory tax or configured rule)."""

    name: str
    kind: str
    amount: int
    rate: Optional[str] = None


@dataclass(frozen=True)
class PayrollResult:
    """Pay for one employee over one period. Derived on request, never stored."""

    total_minutes: int
    total_hours: float
    hourly_wage: int
    gross_pay: int
    income_tax: int
    local_tax: int
    other_deductions: int
    total_deductions: int
    net_pay: int
    deduction_lines: tuple[DeductionLine, ...] = field(default_factory=tuple)
    over_deducted: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["deduction_lines"] = [asdict(line) for line in self.deduction_lines]
        return data


@dataclass(frozen=True)
class SlipLine:
    work_date: date
    work_kind: WorkKind
    status: ApprovalStatus
    clock_in: Optional[time]
    clock_out: Optional[time]
    hours: float
    night_shift: bool
    day_pay: int


@dataclass(frozen=True)
class PayrollSlip:
    user_id: int
    full_name: str
    email: str
    period_start: date
    period_end: date
    work_days: int
    lines: tuple[SlipLine, ...]
    result: PayrollResult
