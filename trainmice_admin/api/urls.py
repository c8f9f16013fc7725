ADMIN_BOOKINGS_URL = "/admin/bookings"
BOOKING_REQUESTS_URL = "/bookings"
SEND_CLIENT_EMAIL_URL = "/admin/bookings/send-email"


def conflicting_bookings_url(booking_id: str) -> str:
    return f"/admin/bookings/{booking_id}/conflicting"


def confirm_booking_url(booking_id: str) -> str:
    return f"/admin/bookings/{booking_id}/confirm"


def cancel_booking_url(booking_id: str) -> str:
    return f"/admin/bookings/{booking_id}/cancel"


EVENTS_URL = "/events"
EVENT_REGISTRATIONS_URL = "/admin/events/registrations"
AUTO_COMPLETE_PAST_EVENTS_URL = "/admin/events/auto-complete-past"


def approve_registration_url(registration_id: str) -> str:
    return f"/admin/events/registrations/{registration_id}/approve"


def cancel_registration_url(registration_id: str) -> str:
    return f"/admin/events/registrations/{registration_id}/cancel"


def event_status_url(event_id: str) -> str:
    return f"/admin/events/{event_id}/status"


def admin_course_url(course_id: str) -> str:
    return f"/admin/courses/{course_id}"


def create_event_from_course_url(course_id: str) -> str:
    return f"/admin/courses/{course_id}/create-event"


def trainer_availability_url(trainer_id: str) -> str:
    return f"/availability/trainer/{trainer_id}"


def trainer_blocked_days_url(trainer_id: str) -> str:
    return f"/availability/trainer/{trainer_id}/blocked-days"


def create_trainer_availability_url(trainer_id: str) -> str:
    return f"/admin/trainers/{trainer_id}/availability/create"
