from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Read access to employees and their position salary band.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError
