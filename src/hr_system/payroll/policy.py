from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import DuplicatePeriodError, InvalidPeriodError, OutOfBandError
from ..employees.model import Employee
from .calculator.base import PayrollCalculator
from .model import PayrollRecord


def validate_period(employee: Employee, year: int, month: int) -> None:
    if not 1 <= int(month) <= 12:
        raise InvalidPeriodError(f"Month {month} is not between 1 and 12")
    if int(year) < employee.start_year:
        raise InvalidPeriodError(f"Year {year} is before the hire year {employee.start_year}")


def validate_band(employee: Employee, gross_salary: Decimal) -> None:
    position = employee.position
    if not position.accepts(gross_salary):
        raise OutOfBandError(
            f"Gross salary {gross_salary} is outside the {position.position_name} band "
            f"[{position.min_salary}, {position.max_salary}]"
        )


def validate_and_create(
    employee: Employee,
    year: int,
    month: int,
    gross_salary: Decimal,
    existing_records_for_period: Iterable[PayrollRecord],
    calculator: PayrollCalculator,
    *,
    now: Optional[datetime] = None,
) -> PayrollRecord:
    """Build the unsaved record for (employee, year, month)."""
    validate_period(employee, year, month)

    for r in existing_records_for_period:
        if r.period == (employee.employee_id, int(year), int(month)):
            raise DuplicatePeriodError(
                f"Payroll for employee {employee.employee_id} in {int(year)}-{int(month):02d} already exists"
            )

    pay = calculator.compute_net_salary(gross_salary)
    # band is checked on the amount as entered, before cent rounding
    validate_band(employee, Decimal(gross_salary))

    return PayrollRecord(
        record_id=None,
        employee_id=employee.employee_id,
        year=int(year),
        month=int(month),
        gross_salary=pay.gross,
        sgk=pay.sgk,
        tax=pay.tax,
        net_salary=pay.net,
        created_at=now or now_local(),
    )
