"""
Status Transition Table

Allowed lifecycle moves for a token configuration and the reviewer approval
tally shown while a configuration is pending review.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

import structlog

from tokenforge.config import get_settings
from tokenforge.schemas.token import TokenStatus

logger = structlog.get_logger()

StatusLike = Union[TokenStatus, str]

TRANSITIONS: Dict[TokenStatus, List[TokenStatus]] = {
    TokenStatus.DRAFT: [TokenStatus.PENDING_REVIEW],
    TokenStatus.PENDING_REVIEW: [TokenStatus.APPROVED, TokenStatus.DRAFT],
    TokenStatus.APPROVED: [TokenStatus.PAUSED],
    TokenStatus.PAUSED: [TokenStatus.APPROVED],
}

# Label and description of the action that moves a token *into* each status
STATUS_ACTIONS: Dict[TokenStatus, Dict[str, str]] = {
    TokenStatus.DRAFT: {
        "label": "Return to Draft",
        "description": "Send this token configuration back for further editing",
    },
    TokenStatus.PENDING_REVIEW: {
        "label": "Submit for Review",
        "description": "Submit this token configuration for review and approval",
    },
    TokenStatus.APPROVED: {
        "label": "Approve",
        "description": "Approve this token configuration for deployment",
    },
    TokenStatus.PAUSED: {
        "label": "Pause",
        "description": "Pause this token's operations",
    },
}

RESUME_ACTION = {
    "label": "Resume",
    "description": "Resume this token's operations",
}


class IllegalStatusTransitionError(ValueError):
    """Raised when a requested move is not an edge of the transition table"""

    def __init__(self, current: StatusLike, target: StatusLike, reason: Optional[str] = None):
        self.current = current
        self.target = target
        message = reason or (
            f"Cannot move a token from {_label(current)} to {_label(target)}"
        )
        super().__init__(message)


class ApprovalQuorumNotMetError(IllegalStatusTransitionError):
    """Raised on approval below quorum when the quorum is enforced"""

    def __init__(self, count: int, required: int):
        self.count = count
        self.required = required
        super().__init__(
            TokenStatus.PENDING_REVIEW,
            TokenStatus.APPROVED,
            reason=f"Approval requires {required} distinct approvals, has {count}",
        )


@dataclass(frozen=True)
class ApprovalProgress:
    count: int
    required: int

    @property
    def met(self) -> bool:
        return self.count >= self.required

    @property
    def label(self) -> str:
        return f"{self.count}/{self.required}"


def _label(status: StatusLike) -> str:
    return status.value if isinstance(status, TokenStatus) else str(status)


def _status(value: StatusLike) -> TokenStatus:
    return TokenStatus(value)


def next_states(status: StatusLike) -> List[TokenStatus]:
    """Statuses reachable in one move from ``status``, in table order"""
    return list(TRANSITIONS[_status(status)])


def can_transition(current: StatusLike, target: StatusLike) -> bool:
    try:
        return _status(target) in TRANSITIONS[_status(current)]
    except ValueError:
        return False


def action_for(current: StatusLike, target: StatusLike) -> Dict[str, str]:
    """Button label and description for moving from ``current`` to ``target``"""
    if _status(current) is TokenStatus.PAUSED and _status(target) is TokenStatus.APPROVED:
        return dict(RESUME_ACTION)
    return dict(STATUS_ACTIONS[_status(target)])


def approval_progress(approvals: Optional[Iterable[str]], required: Optional[int] = None) -> ApprovalProgress:
    if required is None:
        required = get_settings().required_approvals
    return ApprovalProgress(count=len(set(approvals or [])), required=required)


def transition(
    current: StatusLike,
    target: StatusLike,
    approvals: Optional[Iterable[str]] = None,
    *,
    enforce_quorum: Optional[bool] = None,
    required: Optional[int] = None,
) -> TokenStatus:
    """Apply one move of the table and return the new status.

    Unlisted moves raise IllegalStatusTransitionError; the status is never
    coerced to a neighbouring state. The approval quorum only gates
    PENDING_REVIEW -> APPROVED when enforcement is switched on.
    """
    if not can_transition(current, target):
        logger.warning("Rejected status transition", current=_label(current), target=_label(target))
        raise IllegalStatusTransitionError(current, target)

    source, destination = _status(current), _status(target)
    if source is TokenStatus.PENDING_REVIEW and destination is TokenStatus.APPROVED:
        if enforce_quorum is None:
            enforce_quorum = get_settings().enforce_approval_quorum
        progress = approval_progress(approvals, required)
        if enforce_quorum and not progress.met:
            logger.warning("Approval quorum not met", approvals=progress.label)
            raise ApprovalQuorumNotMetError(progress.count, progress.required)

    logger.info("Token status changed", current=source.value, target=destination.value)
    return destination


def record_approval(approvals: Optional[Iterable[str]], approver_id: str) -> List[str]:
    """Add an approver to the set; repeat approvals by the same identity are no-ops"""
    approver = (approver_id or "").strip()
    if not approver:
        raise ValueError("Approver identity is required")
    updated = list(dict.fromkeys(approvals or []))
    if approver not in updated:
        updated.append(approver)
        logger.info("Approval recorded", approver=approver, count=len(updated))
    return updated
