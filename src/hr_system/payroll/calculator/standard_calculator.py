from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ...core.constants import DEFAULT_TAX_BRACKETS, SGK_RATE
from ...core.exceptions import NegativeSalaryError
from ..brackets import TaxBracket, parse_brackets, validate_brackets
from ..model import NetSalary
from .base import PayrollCalculator

CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: SGK at a flat rate, income tax over marginal brackets, both on gross."""

    def __init__(self, brackets: Optional[Iterable[TaxBracket]] = None, *, sgk_rate: Decimal = SGK_RATE):
        self._brackets = validate_brackets(brackets) if brackets is not None else parse_brackets(DEFAULT_TAX_BRACKETS)
        self._sgk_rate = Decimal(sgk_rate)

    @property
    def brackets(self) -> tuple[TaxBracket, ...]:
        return self._brackets

    def progressive_tax(self, base: Decimal) -> Decimal:
        tax = Decimal(0)
        for i, bracket in enumerate(self._brackets):
            if base <= bracket.lower_bound:
                break
            top = base
            if i + 1 < len(self._brackets):
                top = min(base, self._brackets[i + 1].lower_bound)
            tax += (top - bracket.lower_bound) * bracket.rate
        return _money(tax)

    def compute_net_salary(self, gross_salary: Decimal) -> NetSalary:
        gross = Decimal(gross_salary)
        if gross <= 0:
            raise NegativeSalaryError("Gross salary must be positive")

        sgk = _money(gross * self._sgk_rate)
        tax = self.progressive_tax(gross)
        return NetSalary(gross=_money(gross), sgk=sgk, tax=tax, net=_money(gross) - sgk - tax)
