from decimal import Decimal

import pytest

from hr_system.core.exceptions import NegativeSalaryError
from hr_system.payroll.brackets import parse_brackets
from hr_system.payroll.calculator.standard_calculator import StandardPayrollCalculator


@pytest.fixture
def calc() -> StandardPayrollCalculator:
    return StandardPayrollCalculator(parse_brackets("0:0.15,5000:0.20,10000:0.27"))


def test_net_salary_applies_marginal_brackets(calc):
    pay = calc.compute_net_salary(Decimal("10000"))

    assert pay.sgk == Decimal("1400.00")
    assert pay.tax == Decimal("1750.00")
    assert pay.net == Decimal("6850.00")


def test_income_above_top_bound_uses_top_rate(calc):
    # 5000*0.15 + 5000*0.20 + 2000*0.27
    assert calc.compute_net_salary(Decimal("12000")).tax == Decimal("2290.00")


def test_income_inside_first_bracket(calc):
    pay = calc.compute_net_salary(Decimal("3000"))
    assert pay.tax == Decimal("450.00")
    assert pay.net == Decimal("3000") - Decimal("420.00") - Decimal("450.00")


def test_amounts_are_rounded_to_cents(calc):
    pay = calc.compute_net_salary(Decimal("1234.567"))
    assert pay.gross == Decimal("1234.57")
    assert pay.sgk == Decimal("172.84")
    assert pay.tax == Decimal("185.19")
    assert pay.net == pay.gross - pay.sgk - pay.tax


@pytest.mark.parametrize("gross", [Decimal("0"), Decimal("-1")])
def test_non_positive_gross_fails(calc, gross):
    with pytest.raises(NegativeSalaryError):
        calc.compute_net_salary(gross)


def test_default_table_has_four_rates():
    calc = StandardPayrollCalculator()
    assert [b.rate for b in calc.brackets] == [Decimal("0.15"), Decimal("0.20"), Decimal("0.27"), Decimal("0.35")]


def test_custom_sgk_rate():
    calc = StandardPayrollCalculator(parse_brackets("0:0"), sgk_rate=Decimal("0.15"))
    pay = calc.compute_net_salary(Decimal("1000"))
    assert pay.sgk == Decimal("150.00")
    assert pay.tax == Decimal("0.00")
