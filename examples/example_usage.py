"""Example: drive the services directly, without Flask.

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
from decimal import Decimal

from config import get_settings_module

from hr_system.container import build_container
from hr_system.core.enums import Role


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    print(container.payroll_service.preview(gross_salary=Decimal("45000")))
    print(
        container.leave_service.get_balance(
            current_user_id=1,
            current_role=Role.ADMIN,
            employee_id=1,
        )
    )


if __name__ == "__main__":
    main()
