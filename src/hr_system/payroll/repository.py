from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from .model import PayrollRecord


class PayrollRepository(Protocol):
    def create(self, record: PayrollRecord) -> PayrollRecord:
        """Insert and return the record with its id; ``DuplicatePeriodError`` on a taken period."""

        raise NotImplementedError

    def get(self, record_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_for_period(self, *, employee_id: int, year: int, month: int) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        year: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def replace(self, old_record_id: int, record: PayrollRecord) -> PayrollRecord:
        """Remove ``old_record_id`` and insert ``record`` in one transaction."""

        raise NotImplementedError
