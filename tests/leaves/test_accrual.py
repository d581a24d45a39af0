from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import make_employee

from hr_system.core.enums import LeaveStage
from hr_system.core.exceptions import InvalidPeriodError, InvalidRangeError
from hr_system.leaves.accrual import compute_balance, compute_business_days, compute_entitlement
from hr_system.leaves.model import LeaveRequest


def _request(rid, start, end, days, stage, employee_id=1):
    return LeaveRequest(
        request_id=rid,
        employee_id=employee_id,
        start_date=start,
        end_date=end,
        business_days=days,
        stage=stage,
        created_at=datetime(2024, 1, 1, 9, 0),
    )


def test_entitlement_is_fourteen_days_per_full_year():
    assert compute_entitlement(2020, 2024) == 56
    assert compute_entitlement(2024, 2024) == 0


def test_entitlement_is_monotonic_in_reference_year():
    values = [compute_entitlement(2015, year) for year in range(2015, 2030)]
    assert values == sorted(values)
    assert all(v == (year - 2015) * 14 for v, year in zip(values, range(2015, 2030)))


def test_entitlement_before_hire_year_fails():
    with pytest.raises(InvalidPeriodError):
        compute_entitlement(2024, 2023)


def test_single_weekday_counts_one():
    assert compute_business_days(date(2024, 1, 3), date(2024, 1, 3)) == 1  # Wednesday


@pytest.mark.parametrize("day", [date(2024, 1, 6), date(2024, 1, 7)])
def test_single_weekend_day_counts_zero(day):
    assert compute_business_days(day, day) == 0


def test_any_full_week_counts_five():
    start = date(2024, 1, 1)
    for offset in range(7):
        first = start + timedelta(days=offset)
        assert compute_business_days(first, first + timedelta(days=6)) == 5


def test_range_spanning_weekends():
    # Fri 2024-01-05 .. Tue 2024-01-16 -> Fri, Mon-Fri, Mon, Tue
    assert compute_business_days(date(2024, 1, 5), date(2024, 1, 16)) == 8


def test_end_before_start_fails():
    with pytest.raises(InvalidRangeError):
        compute_business_days(date(2024, 1, 10), date(2024, 1, 9))


def test_aware_datetimes_use_istanbul_calendar():
    # 22:30 UTC on Friday is already Saturday 01:30 in Istanbul
    friday_night_utc = datetime(2024, 1, 5, 22, 30, tzinfo=timezone.utc)
    assert compute_business_days(friday_night_utc, friday_night_utc) == 0


def test_balance_counts_only_live_requests_in_year():
    employee = make_employee(1, start_year=2020)
    requests = [
        _request(1, date(2024, 1, 8), date(2024, 1, 12), 5, LeaveStage.APPROVED),
        _request(2, date(2024, 2, 5), date(2024, 2, 6), 2, LeaveStage.MANAGER_APPROVED),
        _request(3, date(2024, 3, 4), date(2024, 3, 8), 5, LeaveStage.REJECTED),
        _request(4, date(2023, 6, 5), date(2023, 6, 9), 5, LeaveStage.APPROVED),
        _request(5, date(2024, 4, 1), date(2024, 4, 2), 2, LeaveStage.APPROVED, employee_id=7),
    ]

    balance = compute_balance(employee, requests, 2024)

    assert balance.entitled_days == 56
    assert balance.approved_days == 5
    assert balance.pending_days == 2
    assert balance.remaining_days == 51
    assert balance.available_days == 49
