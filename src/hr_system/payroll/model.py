from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class NetSalary:
    gross: Decimal
    sgk: Decimal
    tax: Decimal
    net: Decimal

    def to_dict(self) -> dict:
        return {
            "gross_salary": str(self.gross),
            "sgk": str(self.sgk),
            "tax": str(self.tax),
            "net_salary": str(self.net),
        }


@dataclass(frozen=True)
class PayrollRecord:
    """One employee's payroll for one (year, month). Never updated in place."""

    record_id: Optional[int]
    employee_id: int
    year: int
    month: int
    gross_salary: Decimal
    sgk: Decimal
    tax: Decimal
    net_salary: Decimal
    created_at: datetime

    @property
    def period(self) -> tuple[int, int, int]:
        return (self.employee_id, self.year, self.month)

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "employee_id": self.employee_id,
            "year": self.year,
            "month": self.month,
            "gross_salary": str(self.gross_salary),
            "sgk": str(self.sgk),
            "tax": str(self.tax),
            "net_salary": str(self.net_salary),
            "created_at": self.created_at.isoformat(),
        }
