from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Iterable, Sequence

from ...core.constants import INCOME_TAX_RATE, LOCAL_TAX_RATE
from ...core.enums import ApprovalStatus, DeductionKind, NetPayPolicy
from ...deductions.model import DeductionRule
from ..hours import compute_minutes
from ..model import DeductionLine, PayrollResult

logger = logging.getLogger(__name__)


def floor_currency(value: Decimal) -> int:
    """Round down to the whole currency unit."""
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def as_decimal(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def format_rate(value: Decimal) -> str:
    return f"{value.normalize():f}"


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    Subclasses decide how a FIXED deduction maps onto the period they price;
    everything else (statutory taxes, percentage rules, rounding, the
    negative net pay policy) is shared.
    """

    def __init__(self, *, net_pay_policy: NetPayPolicy = NetPayPolicy.PRESERVE):
        self._policy = NetPayPolicy(net_pay_policy)

    @abstractmethod
    def fixed_contribution(self, rule: DeductionRule) -> int:
        raise NotImplementedError

    def percentage_contribution(self, gross_pay: int, rule: DeductionRule) -> int:
        return floor_currency(Decimal(gross_pay) * as_decimal(rule.amount) / 100)

    def worked_minutes(self, entries: Iterable[Any]) -> int:
        """Minutes over approved entries only; pending/rejected never count toward pay."""
        return sum(
            compute_minutes(e.clock_in, e.clock_out, e.work_kind)
            for e in entries
            if ApprovalStatus(e.status) == ApprovalStatus.APPROVED
        )

    def compute(self, entries: Iterable[Any], hourly_wage: int, rules: Sequence[DeductionRule]) -> PayrollResult:
        return self.compute_for_minutes(self.worked_minutes(entries), hourly_wage, rules)

    def compute_for_minutes(self, total_minutes: int, hourly_wage: int, rules: Sequence[DeductionRule]) -> PayrollResult:
        gross_pay = floor_currency(Decimal(int(total_minutes)) * as_decimal(hourly_wage) / 60)

        income_tax = floor_currency(Decimal(gross_pay) * INCOME_TAX_RATE)
        local_tax = floor_currency(Decimal(gross_pay) * LOCAL_TAX_RATE)
        lines = [
            DeductionLine(name="Income tax", kind="statutory", amount=income_tax, rate=format_rate(INCOME_TAX_RATE * 100)),
            DeductionLine(name="Local tax", kind="statutory", amount=local_tax, rate=format_rate(LOCAL_TAX_RATE * 100)),
        ]

        other = 0
        for rule in rules:
            if not rule.is_active:
                continue
            kind = DeductionKind(rule.kind)
            if kind == DeductionKind.FIXED:
                amount = self.fixed_contribution(rule)
                rate = None
            else:
                amount = self.percentage_contribution(gross_pay, rule)
                rate = format_rate(as_decimal(rule.amount))
            other += amount
            lines.append(DeductionLine(name=rule.name, kind=kind.value, amount=amount, rate=rate))

        total_deductions = income_tax + local_tax + other
        net_pay = gross_pay - total_deductions
        over_deducted = net_pay < 0
        if over_deducted:
            logger.warning(
                "Deductions %s exceed gross pay %s (policy=%s)", total_deductions, gross_pay, self._policy.value
            )
            if self._policy == NetPayPolicy.CLAMP:
                net_pay = 0

        return PayrollResult(
            total_minutes=int(total_minutes),
            total_hours=int(total_minutes) / 60,
            hourly_wage=int(hourly_wage),
            gross_pay=gross_pay,
            income_tax=income_tax,
            local_tax=local_tax,
            other_deductions=other,
            total_deductions=total_deductions,
            net_pay=net_pay,
            deduction_lines=tuple(lines),
            over_deducted=over_deducted,
        )
