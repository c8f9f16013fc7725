SHORT_WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Statuses an admin may pick when confirming a booking or creating an event.
# Trainer self-service only accepts AVAILABLE.
ADMIN_SELECTABLE_AVAILABILITY_STATUSES = ("AVAILABLE", "TENTATIVE")

HOURS_PER_COURSE_DAY = 8

DEFAULT_CONFIRMATION_MESSAGE = "Booking confirmed successfully and event created"

NO_DATE_GROUP_KEY = "no-date"
UNKNOWN_GROUP_KEY = "unknown"
UNKNOWN_TRAINER_NAME = "Unknown Trainer"
UNKNOWN_EVENT_TITLE = "Unknown Event"

# how far ahead trainer slots are offered when confirming bookings or creating events
DEFAULT_AVAILABILITY_LOOKAHEAD_MONTHS = 12
