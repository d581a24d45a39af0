from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import NetSalary


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute_net_salary(self, gross_salary: Decimal) -> NetSalary:
        raise NotImplementedError
