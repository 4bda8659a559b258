"""
Closed vocabularies of the marketplace.

Every enum inherits from ``(str, Enum)`` so members compare equal to the
plain strings stored in the database and serialise naturally to JSON.
Raw request strings are parsed here once; the services only ever see
enum members.
"""
from enum import Enum

from marketplace.errors import InvalidCategory, InvalidInput


class JobCategory(str, Enum):
    CONSTRUCTION = "construction"
    DELIVERY = "delivery"
    CLEANING = "cleaning"
    GARDENING = "gardening"
    MOVING = "moving"
    HANDYMAN = "handyman"
    TUTORING = "tutoring"
    PET_CARE = "pet_care"
    EVENT_HELP = "event_help"
    OTHER = "other"


class JobStatus(str, Enum):
    """Job lifecycle: active -> filled | closed. Both targets are terminal."""

    ACTIVE = "active"
    FILLED = "filled"
    CLOSED = "closed"


class ApplicationStatus(str, Enum):
    """Application lifecycle: pending -> accepted | rejected."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Decision(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def resulting_status(self) -> ApplicationStatus:
        if self is Decision.ACCEPT:
            return ApplicationStatus.ACCEPTED
        return ApplicationStatus.REJECTED


class JobSort(str, Enum):
    NEWEST = "newest"
    BUDGET_HIGH = "budget_high"
    BUDGET_LOW = "budget_low"


VALID_JOB_TRANSITIONS = {
    JobStatus.ACTIVE: {JobStatus.FILLED, JobStatus.CLOSED},
    JobStatus.FILLED: set(),
    JobStatus.CLOSED: set(),
}

VALID_APPLICATION_TRANSITIONS = {
    ApplicationStatus.PENDING: {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED},
    ApplicationStatus.ACCEPTED: set(),
    ApplicationStatus.REJECTED: set(),
}


def _transitions_for(target):
    return VALID_JOB_TRANSITIONS if isinstance(target, JobStatus) else VALID_APPLICATION_TRANSITIONS


def can_transition(current, target) -> bool:
    return target in _transitions_for(target).get(current, set())


def transition_sources(target) -> list[str]:
    """Stored status values a record may hold when moving to ``target``."""
    return [status.value for status, targets in _transitions_for(target).items() if target in targets]


def parse_category(value: str | None) -> JobCategory:
    """Strict parse used on writes."""
    try:
        return JobCategory((value or "").strip().lower())
    except ValueError:
        raise InvalidCategory(
            f"Unknown category {value!r}. Must be one of: "
            + ", ".join(c.value for c in JobCategory)
        ) from None


def coerce_category(value: str | None) -> JobCategory | None:
    """Lenient parse used by filters: unknown values mean "no filter"."""
    if not value:
        return None
    try:
        return JobCategory(value.strip().lower())
    except ValueError:
        return None


def coerce_sort(value: str | None) -> JobSort:
    if not value:
        return JobSort.NEWEST
    try:
        return JobSort(value.strip().lower())
    except ValueError:
        return JobSort.NEWEST


def parse_decision(value: str | None) -> Decision:
    try:
        return Decision((value or "").strip().lower())
    except ValueError:
        raise InvalidInput("Decision must be 'accept' or 'reject'") from None
