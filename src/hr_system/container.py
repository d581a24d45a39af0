from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .core.constants import DEFAULT_TAX_BRACKETS, LEAVE_DAYS_PER_YEAR, SGK_RATE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.brackets import parse_brackets
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    leaves_repo: LeaveRepository
    payroll_repo: PayrollRepository

    leave_service: LeaveService
    payroll_service: PayrollService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    employees_repo: EmployeeRepository,
    leaves_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories using the rule settings."""
    calculator = StandardPayrollCalculator(
        parse_brackets(getattr(settings, "TAX_BRACKETS", DEFAULT_TAX_BRACKETS)),
        sgk_rate=Decimal(str(getattr(settings, "SGK_RATE", SGK_RATE))),
    )
    leave_service = LeaveService(
        leaves_repo,
        employees_repo,
        days_per_year=int(getattr(settings, "LEAVE_DAYS_PER_YEAR", LEAVE_DAYS_PER_YEAR)),
    )
    payroll_service = PayrollService(payroll_repo, employees_repo, calculator=calculator)

    return Container(
        employees_repo=employees_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        leave_service=leave_service,
        payroll_service=payroll_service,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        settings=settings,
        conn=conn,
    )
