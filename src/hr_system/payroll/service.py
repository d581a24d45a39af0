from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import NetSalary, PayrollRecord
from .policy import validate_and_create, validate_band
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Use cases: monthly payroll records (HR admin)."""

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payroll = payroll
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only HR admins manage payroll")

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def preview(self, *, gross_salary: Decimal) -> NetSalary:
        return self._calculator.compute_net_salary(gross_salary)

    def create_record(
        self,
        *,
        current_role: Role,
        employee_id: int,
        year: int,
        month: int,
        gross_salary: Decimal,
    ) -> PayrollRecord:
        self._require_admin(current_role)

        employee = self._get_employee(employee_id)
        if not employee.is_active:
            raise ValidationError("Employee is not active")

        existing = self._payroll.list_for_period(employee_id=employee.employee_id, year=int(year), month=int(month))
        record = validate_and_create(
            employee,
            year,
            month,
            gross_salary,
            existing,
            self._calculator,
            now=self._clock(),
        )
        saved = self._payroll.create(record)
        logger.info(
            "Payroll #%s created for employee %s %s-%02d (gross=%s net=%s)",
            saved.record_id,
            saved.employee_id,
            saved.year,
            saved.month,
            saved.gross_salary,
            saved.net_salary,
        )
        return saved

    def replace_record(self, *, current_role: Role, record_id: int, gross_salary: Decimal) -> PayrollRecord:
        """Corrective replacement: the old row goes away and a recomputed one takes its period."""
        self._require_admin(current_role)

        old = self.get_record(current_role=current_role, record_id=record_id)
        employee = self._get_employee(old.employee_id)

        pay = self._calculator.compute_net_salary(gross_salary)
        validate_band(employee, Decimal(gross_salary))

        record = replace(
            old,
            record_id=None,
            gross_salary=pay.gross,
            sgk=pay.sgk,
            tax=pay.tax,
            net_salary=pay.net,
            created_at=self._clock(),
        )
        saved = self._payroll.replace(old.record_id, record)
        logger.info(
            "Payroll #%s replaced by #%s for employee %s %s-%02d (gross %s -> %s)",
            old.record_id,
            saved.record_id,
            saved.employee_id,
            saved.year,
            saved.month,
            old.gross_salary,
            saved.gross_salary,
        )
        return saved

    def get_record(self, *, current_role: Role, record_id: int) -> PayrollRecord:
        self._require_admin(current_role)
        record = self._payroll.get(int(record_id))
        if not record:
            raise NotFoundError("Payroll record not found")
        return record

    def list_for_employee(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        employee_id: int,
        year: Optional[int] = None,
    ) -> Sequence[PayrollRecord]:
        if current_role != Role.ADMIN and int(employee_id) != int(current_user_id):
            raise AuthorizationError("You may only view your own payroll")
        self._get_employee(employee_id)
        return self._payroll.list_for_employee(int(employee_id), year=year)
