from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import LEAVE_DAYS_PER_YEAR
from ..core.enums import LeaveStage
from ..core.exceptions import InsufficientBalanceError, InvalidRangeError, OverlapError
from ..employees.model import Employee
from .accrual import compute_balance, compute_business_days
from .model import LeaveRequest


def submit_request(
    employee: Employee,
    start_date: date,
    end_date: date,
    existing_requests: Iterable[LeaveRequest],
    *,
    as_of_year: Optional[int] = None,
    reason: str = "",
    now: Optional[datetime] = None,
    days_per_year: int = LEAVE_DAYS_PER_YEAR,
) -> LeaveRequest:
    """Validate a new leave range and build the unsaved SUBMITTED request.

    The balance is the one of ``as_of_year``, by default the year of ``now``.
    """
    now = now or now_local()
    business_days = compute_business_days(start_date, end_date)
    if business_days == 0:
        raise InvalidRangeError("Leave range contains no working days")

    existing = [r for r in existing_requests if r.employee_id == employee.employee_id]
    for r in existing:
        if r.is_live and r.overlaps(start_date, end_date):
            raise OverlapError(
                f"Overlaps request #{r.request_id} ({r.start_date.isoformat()} - {r.end_date.isoformat()})"
            )

    year = as_of_year if as_of_year is not None else now.year
    balance = compute_balance(employee, existing, year, days_per_year=days_per_year)
    if business_days > balance.available_days:
        raise InsufficientBalanceError(
            f"Requested {business_days} days, only {max(balance.available_days, 0)} available in {year}"
        )

    return LeaveRequest(
        request_id=None,
        employee_id=employee.employee_id,
        start_date=start_date,
        end_date=end_date,
        business_days=business_days,
        stage=LeaveStage.SUBMITTED,
        created_at=now,
        reason=reason,
    )
