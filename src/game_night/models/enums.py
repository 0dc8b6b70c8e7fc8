"""String enums stored in text columns."""

from enum import StrEnum


class ExperienceLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SessionStatus(StrEnum):
    OPEN = "open"
    FULL = "full"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_SESSION_STATUSES = frozenset({SessionStatus.COMPLETED.value, SessionStatus.CANCELLED.value})


class ParticipantStatus(StrEnum):
    PENDING_APPROVAL = "pending_approval"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    CANCELLED_BY_USER = "cancelled_by_user"


class PostType(StrEnum):
    GENERAL = "general"
    STRATEGY = "strategy"
    MEETUP_REPORT = "meetup_report"
    QUESTION = "question"


class ConnectionStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    BLOCKED = "blocked"
