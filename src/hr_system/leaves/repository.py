from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStage
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(self, request: LeaveRequest) -> LeaveRequest:
        """Persist a new request and return it with its id.

        Must re-check overlaps inside the insert transaction and raise
        ``OverlapError`` on conflict.
        """

        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        year: Optional[int] = None,
        include_rejected: bool = True,
        limit: Optional[int] = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        """Newest first. ``limit=None`` returns every matching row."""

        raise NotImplementedError

    def list_by_stage(self, stage: LeaveStage, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def update_stage(self, request: LeaveRequest, *, expected_stage: LeaveStage) -> bool:
        """Store the decision fields if the row is still in ``expected_stage``."""

        raise NotImplementedError
