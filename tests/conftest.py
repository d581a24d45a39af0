from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from hr_system.core.enums import EmployeeStatus, LeaveStage, Role
from hr_system.core.exceptions import DuplicatePeriodError, NotFoundError, OverlapError
from hr_system.employees.model import Employee, Position
from hr_system.leaves.model import LeaveRequest
from hr_system.payroll.model import PayrollRecord

ISTANBUL = ZoneInfo("Europe/Istanbul")


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> None:
        self._by_id[employee.employee_id] = employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))


class InMemoryLeaves:
    def __init__(self):
        self._next_id = 1
        self._by_id: dict[int, LeaveRequest] = {}

    def create(self, request: LeaveRequest) -> LeaveRequest:
        for r in self._by_id.values():
            if r.employee_id == request.employee_id and r.is_live and r.overlaps(request.start_date, request.end_date):
                raise OverlapError(f"Overlaps request #{r.request_id}")
        saved = replace(request, request_id=self._next_id)
        self._by_id[saved.request_id] = saved
        self._next_id += 1
        return saved

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self._by_id.get(int(request_id))

    def list_for_employee(self, employee_id, *, year=None, include_rejected=True, limit=200):
        items = [
            r
            for r in self._by_id.values()
            if r.employee_id == int(employee_id)
            and (year is None or r.start_date.year == int(year))
            and (include_rejected or r.is_live)
        ]
        items.sort(key=lambda r: r.start_date, reverse=True)
        return items[:limit]

    def list_by_stage(self, stage, *, limit=200):
        items = [r for r in self._by_id.values() if r.stage == stage]
        items.sort(key=lambda r: r.created_at)
        return items[:limit]

    def update_stage(self, request: LeaveRequest, *, expected_stage: LeaveStage) -> bool:
        current = self._by_id.get(int(request.request_id))
        if not current or current.stage != expected_stage:
            return False
        self._by_id[current.request_id] = request
        return True


class InMemoryPayroll:
    def __init__(self):
        self._next_id = 1
        self._by_id: dict[int, PayrollRecord] = {}

    def _check_period(self, record: PayrollRecord, *, ignore_id=None) -> None:
        for r in self._by_id.values():
            if r.record_id != ignore_id and r.period == record.period:
                raise DuplicatePeriodError("Period already has a payroll record")

    def create(self, record: PayrollRecord) -> PayrollRecord:
        self._check_period(record)
        saved = replace(record, record_id=self._next_id)
        self._by_id[saved.record_id] = saved
        self._next_id += 1
        return saved

    def get(self, record_id: int) -> Optional[PayrollRecord]:
        return self._by_id.get(int(record_id))

    def list_for_period(self, *, employee_id, year, month):
        return [r for r in self._by_id.values() if r.period == (int(employee_id), int(year), int(month))]

    def list_for_employee(self, employee_id, *, year=None, limit=200):
        items = [
            r for r in self._by_id.values() if r.employee_id == int(employee_id) and (year is None or r.year == year)
        ]
        items.sort(key=lambda r: (r.year, r.month), reverse=True)
        return items[:limit]

    def replace(self, old_record_id: int, record: PayrollRecord) -> PayrollRecord:
        if int(old_record_id) not in self._by_id:
            raise NotFoundError("Payroll record not found")
        self._check_period(record, ignore_id=int(old_record_id))
        del self._by_id[int(old_record_id)]
        return self.create(record)


def make_employee(
    employee_id: int = 1,
    *,
    start_year: int = 2020,
    min_salary: str = "5000",
    max_salary: str = "20000",
    status: EmployeeStatus = EmployeeStatus.ACTIVE,
) -> Employee:
    return Employee(
        employee_id=employee_id,
        full_name=f"Employee {employee_id}",
        start_year=start_year,
        position=Position(
            position_id=1,
            position_name="Specialist",
            min_salary=Decimal(min_salary),
            max_salary=Decimal(max_salary),
        ),
        status=status,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 9, 0, 0, tzinfo=ISTANBUL)


@pytest.fixture
def employees() -> InMemoryEmployees:
    # 1: staff member, 2: manager, 3: director, 4: general manager, 9: HR admin
    return InMemoryEmployees(
        [
            make_employee(1, start_year=2020),
            make_employee(2, start_year=2015),
            make_employee(3, start_year=2012),
            make_employee(4, start_year=2010),
            make_employee(9, start_year=2018),
        ]
    )


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def payroll_repo() -> InMemoryPayroll:
    return InMemoryPayroll()


APPROVERS = {Role.MANAGER: 2, Role.DIRECTOR: 3, Role.GENERAL_MANAGER: 4}
