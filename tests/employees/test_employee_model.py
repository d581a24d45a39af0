from decimal import Decimal

from conftest import make_employee

from hr_system.core.enums import EmployeeStatus


def test_band_accepts_both_ends():
    position = make_employee(min_salary="5000", max_salary="20000").position
    assert position.accepts(Decimal("5000"))
    assert position.accepts(Decimal("20000"))
    assert not position.accepts(Decimal("20000.01"))
    assert not position.accepts(Decimal("4999.99"))


def test_active_flag():
    assert make_employee().is_active
    assert not make_employee(status=EmployeeStatus.INACTIVE).is_active
