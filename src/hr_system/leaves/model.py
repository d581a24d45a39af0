from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStage


@dataclass(frozen=True)
class LeaveRequest:
    request_id: Optional[int]
    employee_id: int
    start_date: date
    end_date: date
    business_days: int
    stage: LeaveStage
    created_at: datetime
    reason: str = ""
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    decision_note: Optional[str] = None

    @property
    def is_live(self) -> bool:
        """Still counts against the balance and blocks overlapping ranges."""
        return self.stage != LeaveStage.REJECTED

    def overlaps(self, start_date: date, end_date: date) -> bool:
        # inclusive on both ends
        return self.start_date <= end_date and start_date <= self.end_date

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "employee_id": self.employee_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "business_days": self.business_days,
            "stage": self.stage.value,
            "reason": self.reason,
            "created_at": self.created_at.isoformat(),
            "decided_by": self.decided_by,
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
            "decision_note": self.decision_note,
        }


@dataclass(frozen=True)
class LeaveBalance:
    employee_id: int
    year: int
    entitled_days: int
    approved_days: int
    pending_days: int

    @property
    def remaining_days(self) -> int:
        return self.entitled_days - self.approved_days

    @property
    def available_days(self) -> int:
        """What a new request may still draw on once pending requests are counted."""
        return self.remaining_days - self.pending_days

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "year": self.year,
            "entitled_days": self.entitled_days,
            "approved_days": self.approved_days,
            "pending_days": self.pending_days,
            "remaining_days": self.remaining_days,
            "available_days": self.available_days,
        }
