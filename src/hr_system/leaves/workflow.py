"""Approval chain for leave requests.

SUBMITTED --manager--> MANAGER_APPROVED --director--> DIRECTOR_APPROVED
--general manager--> APPROVED. The approver expected at a stage may reject
instead; APPROVED and REJECTED are terminal.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..core.enums import LeaveStage, Role
from ..core.exceptions import UnauthorizedRoleError, WrongStageError
from .model import LeaveRequest

APPROVER_CHAIN = (Role.MANAGER, Role.DIRECTOR, Role.GENERAL_MANAGER)

_TRANSITIONS: dict[LeaveStage, tuple[Role, LeaveStage]] = {
    LeaveStage.SUBMITTED: (Role.MANAGER, LeaveStage.MANAGER_APPROVED),
    LeaveStage.MANAGER_APPROVED: (Role.DIRECTOR, LeaveStage.DIRECTOR_APPROVED),
    LeaveStage.DIRECTOR_APPROVED: (Role.GENERAL_MANAGER, LeaveStage.APPROVED),
}


def required_role(stage: LeaveStage) -> Optional[Role]:
    """Role that acts next on a request in ``stage``; None when terminal."""
    step = _TRANSITIONS.get(stage)
    return step[0] if step else None


def awaiting_stage(role: Role) -> Optional[LeaveStage]:
    """Stage whose requests wait on ``role``; None for non-approvers."""
    for stage, (expected, _) in _TRANSITIONS.items():
        if expected == role:
            return stage
    return None


def advance_approval(
    request: LeaveRequest,
    approver_role: Role,
    *,
    approver_id: Optional[int] = None,
    now: Optional[datetime] = None,
    reject: bool = False,
    note: Optional[str] = None,
) -> LeaveRequest:
    """Return ``request`` moved one step along the chain (or rejected)."""
    if request.stage.is_terminal:
        raise WrongStageError(f"Request is already {request.stage.value}")

    expected, next_stage = _TRANSITIONS[request.stage]
    if approver_role != expected:
        if approver_role in APPROVER_CHAIN and APPROVER_CHAIN.index(approver_role) < APPROVER_CHAIN.index(expected):
            raise WrongStageError(f"Request is already past the {approver_role.value} step")
        raise UnauthorizedRoleError(f"Request is waiting for {expected.value} approval")

    return replace(
        request,
        stage=LeaveStage.REJECTED if reject else next_stage,
        decided_by=approver_id,
        decided_at=now,
        decision_note=note,
    )
