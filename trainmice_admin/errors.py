from enum import Enum, auto
from typing import Optional


class ConfirmationError(Enum):
    INVALID_TOTAL_SLOTS = auto()
    INVALID_REGISTERED_PARTICIPANTS = auto()
    PARTICIPANTS_EXCEED_SLOTS = auto()
    MISSING_AVAILABILITY = auto()
    UNSELECTABLE_AVAILABILITY = auto()
    REQUEST_FAILED = auto()


class AvailabilityError(Enum):
    MISSING_DATES = auto()
    END_BEFORE_START = auto()
    REQUEST_FAILED = auto()


class NotificationError(Enum):
    MISSING_CONTENT = auto()
    NO_CONFLICTS = auto()
    NO_CLIENT_IDS = auto()
    REQUEST_FAILED = auto()


class EventCreationError(Enum):
    MISSING_TRAINER = auto()
    WRONG_DATE_COUNT = auto()
    MISSING_COURSE_TYPE = auto()
    MISSING_COURSE_MODE = auto()
    REQUEST_FAILED = auto()


class OptionalFeatureError(Enum):
    UNAVAILABLE = auto()


class ApiRequestError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class UnauthorizedError(ApiRequestError):
    pass
