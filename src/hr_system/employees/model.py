from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Position:
    position_id: int
    position_name: str
    min_salary: Decimal
    max_salary: Decimal

    def accepts(self, gross_salary: Decimal) -> bool:
        """Band check, both ends inclusive."""
        return self.min_salary <= gross_salary <= self.max_salary


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Read-only snapshot; records are owned by the surrounding CRUD system.
    """

    employee_id: int
    full_name: str
    start_year: int
    position: Position
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
