"""Leave entitlement and business-day arithmetic.

Pure functions over employee and request snapshots; no repository access.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Union

from ..common.datetime_utils import to_local_date
from ..core.constants import LEAVE_DAYS_PER_YEAR
from ..core.enums import LeaveStage
from ..core.exceptions import InvalidPeriodError, InvalidRangeError
from ..employees.model import Employee
from .model import LeaveBalance, LeaveRequest


def compute_entitlement(start_year: int, as_of_year: int, *, days_per_year: int = LEAVE_DAYS_PER_YEAR) -> int:
    """Days earned from the hire year up to ``as_of_year``.

    Whole years only: no proration of the first year and no cap.
    """
    if as_of_year < start_year:
        raise InvalidPeriodError(f"Year {as_of_year} is before the hire year {start_year}")
    return (as_of_year - start_year) * days_per_year


def compute_business_days(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """Inclusive count of Monday-Friday days between ``start`` and ``end``."""
    start_date = to_local_date(start)
    end_date = to_local_date(end)
    if end_date < start_date:
        raise InvalidRangeError("End date must not be before start date")

    total = (end_date - start_date).days + 1
    weeks, extra = divmod(total, 7)
    days = weeks * 5
    first = start_date.weekday()
    for offset in range(extra):
        if (first + offset) % 7 < 5:
            days += 1
    return days


def compute_balance(
    employee: Employee,
    requests: Iterable[LeaveRequest],
    year: int,
    *,
    days_per_year: int = LEAVE_DAYS_PER_YEAR,
) -> LeaveBalance:
    """Balance for ``year``; only requests starting in that year are consumed."""
    approved = 0
    pending = 0
    for r in requests:
        if r.employee_id != employee.employee_id or r.start_date.year != year:
            continue
        if r.stage == LeaveStage.APPROVED:
            approved += r.business_days
        elif r.is_live:
            pending += r.business_days

    return LeaveBalance(
        employee_id=employee.employee_id,
        year=year,
        entitled_days=compute_entitlement(employee.start_year, year, days_per_year=days_per_year),
        approved_days=approved,
        pending_days=pending,
    )
