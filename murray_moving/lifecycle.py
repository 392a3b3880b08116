"""
Job status lifecycle.

    lead → estimate → booked → active → completed → paid

Every status except `paid` may also step back one stage (e.g. a booked move
that needs re-quoting goes back to `estimate`). This module only answers
questions about the graph; persisting a status change is the caller's job.
"""

import enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel


class JobStatus(str, enum.Enum):
    LEAD = "lead"
    ESTIMATE = "estimate"
    BOOKED = "booked"
    ACTIVE = "active"
    COMPLETED = "completed"
    PAID = "paid"


INITIAL_STATUS = JobStatus.LEAD

# One table feeds both validation and the "next status" menu.
# Forward edges are the normal progression; revert edges undo one step.
_FORWARD = {
    JobStatus.LEAD: frozenset({JobStatus.ESTIMATE, JobStatus.BOOKED}),
    JobStatus.ESTIMATE: frozenset({JobStatus.BOOKED}),
    JobStatus.BOOKED: frozenset({JobStatus.ACTIVE}),
    JobStatus.ACTIVE: frozenset({JobStatus.COMPLETED}),
    JobStatus.COMPLETED: frozenset({JobStatus.PAID}),
    JobStatus.PAID: frozenset(),
}

_REVERT = {
    JobStatus.LEAD: frozenset(),
    JobStatus.ESTIMATE: frozenset({JobStatus.LEAD}),
    JobStatus.BOOKED: frozenset({JobStatus.ESTIMATE}),
    JobStatus.ACTIVE: frozenset({JobStatus.BOOKED}),
    JobStatus.COMPLETED: frozenset({JobStatus.ACTIVE}),
    JobStatus.PAID: frozenset(),
}

_DISPLAY_NAMES = {
    JobStatus.LEAD: "Lead",
    JobStatus.ESTIMATE: "Estimate Sent",
    JobStatus.BOOKED: "Booked",
    JobStatus.ACTIVE: "In Progress",
    JobStatus.COMPLETED: "Completed",
    JobStatus.PAID: "Paid",
}

# Tailwind badge classes used by the admin UI
_COLOR_CLASSES = {
    JobStatus.LEAD: "bg-gray-100 text-gray-800",
    JobStatus.ESTIMATE: "bg-blue-100 text-blue-800",
    JobStatus.BOOKED: "bg-green-100 text-green-800",
    JobStatus.ACTIVE: "bg-yellow-100 text-yellow-800",
    JobStatus.COMPLETED: "bg-purple-100 text-purple-800",
    JobStatus.PAID: "bg-emerald-100 text-emerald-800",
}
_DEFAULT_COLOR = _COLOR_CLASSES[JobStatus.LEAD]


def parse_status(value) -> Optional[JobStatus]:
    """JobStatus for a status or its string value, None if unknown."""
    if isinstance(value, JobStatus):
        return value
    try:
        return JobStatus(str(value).strip().lower())
    except ValueError:
        return None


def next_valid_statuses(current) -> FrozenSet[JobStatus]:
    status = parse_status(current)
    if status is None:
        return frozenset()
    return _FORWARD[status] | _REVERT[status]


def forward_statuses(current) -> FrozenSet[JobStatus]:
    """Forward-only moves: what an "advance job" button should offer."""
    status = parse_status(current)
    if status is None:
        return frozenset()
    return _FORWARD[status]


def can_transition_to(current, target) -> bool:
    target_status = parse_status(target)
    if target_status is None:
        return False
    return target_status in next_valid_statuses(current)


def is_terminal(status) -> bool:
    parsed = parse_status(status)
    return parsed is not None and not (_FORWARD[parsed] or _REVERT[parsed])


def display_name(status) -> str:
    parsed = parse_status(status)
    if parsed is None:
        return str(status)
    return _DISPLAY_NAMES[parsed]


def color_class(status) -> str:
    parsed = parse_status(status)
    return _COLOR_CLASSES.get(parsed, _DEFAULT_COLOR)


def sorted_statuses(statuses) -> List[JobStatus]:
    """Order statuses by their position in the lifecycle."""
    order = list(JobStatus)
    return sorted(statuses, key=order.index)


class TransitionCheck(BaseModel):
    current_status: str
    requested_status: str
    allowed: bool
    next_statuses: List[JobStatus]


def check_transition(current, requested) -> TransitionCheck:
    """
    Answer a status-change request. A rejection is a normal result;
    the caller shows `next_statuses` instead of persisting.
    """
    return TransitionCheck(
        current_status=str(getattr(current, "value", current)),
        requested_status=str(getattr(requested, "value", requested)),
        allowed=can_transition_to(current, requested),
        next_statuses=sorted_statuses(next_valid_statuses(current)),
    )
