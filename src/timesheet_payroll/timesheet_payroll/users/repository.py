from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import EmployeeProfile


class EmployeeRepository(Protocol):
    """Repository interface for employee profiles.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def list_all(self, *, include_hidden: bool = False, role: Optional[Role] = None) -> Sequence[EmployeeProfile]:
        raise NotImplementedError

    def create(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        hourly_wage: int,
    ) -> int:
        raise NotImplementedError

    def update_wage(self, user_id: int, *, hourly_wage: int) -> bool:
        raise NotImplementedError

    def set_hidden(self, user_id: int, *, is_hidden: bool) -> bool:
        raise NotImplementedError

    def set_role(self, user_id: int, *, role: Role) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
