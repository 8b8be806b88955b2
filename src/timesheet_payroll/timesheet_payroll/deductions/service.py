from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from ..common.validators import require_non_empty, require_number
from ..core.enums import DeductionKind, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import Actor
from ..users.permissions import require_role
from ..users.repository import EmployeeRepository
from .model import PRESET_DEDUCTIONS, DeductionPreset, DeductionRule
from .repository import DeductionRepository

logger = logging.getLogger(__name__)


class DeductionService:
    """Admin management of per-employee deduction rules."""

    def __init__(self, deductions: DeductionRepository, employees: EmployeeRepository):
        self._deductions = deductions
        self._employees = employees

    @staticmethod
    def _validate(name: str, amount: Any, kind: Any) -> tuple[str, Decimal, DeductionKind]:
        name = require_non_empty(name, "Deduction name")
        try:
            kind = DeductionKind(kind)
        except ValueError:
            raise ValidationError("Deduction kind must be fixed or percentage")

        maximum = 100 if kind == DeductionKind.PERCENTAGE else None
        require_number(amount, "Amount", minimum=0, maximum=maximum)
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise ValidationError("Amount must be a number")
        return name, value, kind

    def _get(self, deduction_id: int) -> DeductionRule:
        rule = self._deductions.get_by_id(int(deduction_id))
        if not rule:
            raise NotFoundError("Deduction not found")
        return rule

    def presets(self) -> tuple[DeductionPreset, ...]:
        return PRESET_DEDUCTIONS

    def list_for_employee(self, actor: Actor, *, user_id: int) -> list[DeductionRule]:
        require_role(actor, Role.ADMIN)
        return list(self._deductions.list_for_user(int(user_id)))

    def list_active_for_employee(self, user_id: int) -> list[DeductionRule]:
        return list(self._deductions.list_for_user(int(user_id), active_only=True))

    def create(self, actor: Actor, *, user_id: int, name: str, amount: Any, kind: Any, is_active: bool = True) -> int:
        require_role(actor, Role.ADMIN)
        if not self._employees.get_by_id(int(user_id)):
            raise NotFoundError("Employee not found")

        name, amount, kind = self._validate(name, amount, kind)
        deduction_id = self._deductions.create(
            user_id=int(user_id),
            name=name,
            amount=amount,
            kind=kind,
            is_active=bool(is_active),
        )
        logger.info("Deduction %s (%s %s %s) added for %s", deduction_id, name, amount, kind.value, user_id)
        return deduction_id

    def update(self, actor: Actor, *, deduction_id: int, name: str, amount: Any, kind: Any, is_active: bool) -> None:
        require_role(actor, Role.ADMIN)
        rule = self._get(deduction_id)
        name, amount, kind = self._validate(name, amount, kind)
        ok = self._deductions.update(
            deduction_id=rule.deduction_id,
            name=name,
            amount=amount,
            kind=kind,
            is_active=bool(is_active),
        )
        if not ok:
            raise ValidationError("Failed to update deduction")

    def toggle(self, actor: Actor, *, deduction_id: int) -> bool:
        require_role(actor, Role.ADMIN)
        rule = self._get(deduction_id)
        new_state = not rule.is_active
        if not self._deductions.set_active(rule.deduction_id, is_active=new_state):
            raise ValidationError("Failed to update deduction")
        return new_state

    def delete(self, actor: Actor, *, deduction_id: int) -> None:
        require_role(actor, Role.ADMIN)
        rule = self._get(deduction_id)
        if not self._deductions.delete(rule.deduction_id):
            raise ValidationError("Failed to delete deduction")
