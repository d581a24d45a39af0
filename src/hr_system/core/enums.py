from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried in the session and used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"
    MANAGER = "manager"
    DIRECTOR = "director"
    GENERAL_MANAGER = "general_manager"


class EmployeeStatus(str, Enum):
    """The Aktif flag of the surrounding CRUD system."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class LeaveStage(str, Enum):
    """Stages of the leave approval chain."""

    SUBMITTED = "SUBMITTED"
    MANAGER_APPROVED = "MANAGER_APPROVED"
    DIRECTOR_APPROVED = "DIRECTOR_APPROVED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self in {LeaveStage.APPROVED, LeaveStage.REJECTED}
