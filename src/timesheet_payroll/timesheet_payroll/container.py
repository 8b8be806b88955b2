from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .core.constants import DEFAULT_HOURLY_WAGE
from .core.enums import NetPayPolicy
from .database.connection import DBConfig, DatabaseConnection
from .deductions.mysql_deduction_repository import MySQLDeductionRepository
from .deductions.repository import DeductionRepository
from .deductions.service import DeductionService
from .diary.mysql_diary_repository import MySQLDiaryRepository
from .diary.repository import DiaryRepository
from .diary.service import DiaryService
from .payroll.service import PayrollService
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository
from .users.service import AuthService, EmployeeService
from .worklogs.mysql_worklog_repository import MySQLWorkLogRepository
from .worklogs.repository import WorkLogRepository
from .worklogs.service import WorkLogService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    worklogs_repo: WorkLogRepository
    deductions_repo: DeductionRepository
    announcements_repo: AnnouncementRepository
    diary_repo: DiaryRepository

    auth_service: AuthService
    employee_service: EmployeeService
    worklog_service: WorkLogService
    deduction_service: DeductionService
    payroll_service: PayrollService
    announcement_service: AnnouncementService
    diary_service: DiaryService


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    worklogs_repo: WorkLogRepository,
    deductions_repo: DeductionRepository,
    announcements_repo: AnnouncementRepository,
    diary_repo: DiaryRepository,
    conn: Optional[DatabaseConnection] = None,
    default_hourly_wage: int = DEFAULT_HOURLY_WAGE,
    net_pay_policy: Any = NetPayPolicy.PRESERVE,
) -> Container:
    """Build every service on top of the given repositories (MySQL or in-memory)."""

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        worklogs_repo=worklogs_repo,
        deductions_repo=deductions_repo,
        announcements_repo=announcements_repo,
        diary_repo=diary_repo,
        auth_service=AuthService(employees_repo, default_hourly_wage=default_hourly_wage),
        employee_service=EmployeeService(employees_repo, worklogs_repo, deductions_repo),
        worklog_service=WorkLogService(worklogs_repo, employees_repo),
        deduction_service=DeductionService(deductions_repo, employees_repo),
        payroll_service=PayrollService(
            worklogs_repo,
            employees_repo,
            deductions_repo,
            net_pay_policy=NetPayPolicy(net_pay_policy),
        ),
        announcement_service=AnnouncementService(announcements_repo),
        diary_service=DiaryService(diary_repo),
    )


def build_container(
    *,
    db_config: dict,
    default_hourly_wage: int = DEFAULT_HOURLY_WAGE,
    net_pay_policy: Any = NetPayPolicy.PRESERVE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        worklogs_repo=MySQLWorkLogRepository(conn),
        deductions_repo=MySQLDeductionRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        diary_repo=MySQLDiaryRepository(conn),
        default_hourly_wage=default_hourly_wage,
        net_pay_policy=net_pay_policy,
    )
