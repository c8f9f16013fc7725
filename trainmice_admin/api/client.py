import datetime
from typing import Any, Callable, Optional, TypeVar, Union

import aiohttp
import pydantic
from aiohttp import ClientSession

from trainmice_admin.api.token import TokenStore
from trainmice_admin.api.urls import (
    ADMIN_BOOKINGS_URL,
    AUTO_COMPLETE_PAST_EVENTS_URL,
    BOOKING_REQUESTS_URL,
    EVENT_REGISTRATIONS_URL,
    EVENTS_URL,
    SEND_CLIENT_EMAIL_URL,
    admin_course_url,
    approve_registration_url,
    cancel_booking_url,
    cancel_registration_url,
    confirm_booking_url,
    conflicting_bookings_url,
    create_event_from_course_url,
    create_trainer_availability_url,
    event_status_url,
    trainer_availability_url,
    trainer_blocked_days_url,
)
from trainmice_admin.errors import (
    ApiRequestError,
    OptionalFeatureError,
    UnauthorizedError,
)
from trainmice_admin.http_client import create_client_session
from trainmice_admin.schemas.availability import (
    AvailabilitySlot,
    AvailabilityStatus,
    CreateAvailabilityPayload,
)
from trainmice_admin.schemas.booking import (
    BookingConfirmation,
    BookingRequest,
    ClientEmailPayload,
    ClientEmailResult,
    ConfirmBookingPayload,
)
from trainmice_admin.schemas.course import Course
from trainmice_admin.schemas.event import Event, EventCreationPayload, EventRegistration
from trainmice_admin.schemas.responses import (
    AutoCompleteResult,
    BookingUpdate,
    EventUpdate,
    RegistrationUpdate,
)
from trainmice_admin.utils.logging_utils import log

_bookings_adapter = pydantic.TypeAdapter(list[BookingRequest])
_registrations_adapter = pydantic.TypeAdapter(list[EventRegistration])
_events_adapter = pydantic.TypeAdapter(list[Event])
_slots_adapter = pydantic.TypeAdapter(list[AvailabilitySlot])
_blocked_days_adapter = pydantic.TypeAdapter(list[int])

T = TypeVar("T")


def extract_error_message(body: Any, reason: Optional[str]) -> str:
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and len(errors) > 0:
            return ", ".join(
                f"{e.get('param') or e.get('path')}: "
                f"{e.get('msg') or e.get('message') or 'Invalid value'}"
                for e in errors
                if isinstance(e, dict)
            )
        if body.get("error"):
            return str(body["error"])
        if body.get("message"):
            return str(body["message"])
    return f"Request failed: {reason or 'Unknown error'}"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime.date):
        return value.isoformat()
    return str(value)


def clean_params(params: Optional[dict[str, Any]]) -> dict[str, str]:
    if params is None:
        return {}
    return {k: _query_value(v) for k, v in params.items() if v is not None}


def response_field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ApiRequestError("Invalid response from server")
    return data.get(key)


def validate_response(parse: Callable[[Any], T], data: Any) -> T:
    try:
        return parse(data)
    except pydantic.ValidationError as e:
        log.error(f"Invalid response from server: {e}")
        raise ApiRequestError("Invalid response from server") from e


def dump_payload(payload: pydantic.BaseModel) -> dict[str, Any]:
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


class ApiClient:
    """
    Single HTTP façade for the TrainMICE backend

    Every response is validated into the schemas package before it is returned,
    so callers never see raw snake/camel case mixtures.
    """

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        session: Optional[ClientSession] = None,
    ):
        self.base_url = base_url[:-1] if base_url.endswith("/") else base_url
        self.token_store = token_store
        self._session = session
        self._logout_listeners: list[Callable[[], None]] = []

    def on_logout(self, listener: Callable[[], None]) -> None:
        self._logout_listeners.append(listener)

    def _url(self, endpoint: str) -> str:
        return self.base_url + (endpoint if endpoint.startswith("/") else f"/{endpoint}")

    def _session_or_create(self) -> ClientSession:
        if self._session is None:
            self._session = create_client_session()
        return self._session

    def _handle_unauthorized(self) -> None:
        log.warning("Backend rejected the stored token, logging out")
        self.token_store.clear()
        for listener in self._logout_listeners:
            listener()

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        token = self.token_store.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        url = self._url(endpoint)
        log.debug(f"{method} {url}")
        try:
            async with self._session_or_create().request(
                method,
                url,
                params=clean_params(params),
                json=json,
                headers=headers,
            ) as res:
                if not res.ok:
                    try:
                        body = await res.json(content_type=None)
                    except ValueError:
                        body = None
                    message = extract_error_message(body, res.reason)
                    if res.status == 401:
                        self._handle_unauthorized()
                        raise UnauthorizedError(message, res.status)
                    raise ApiRequestError(message, res.status)
                if "application/json" in res.headers.get("Content-Type", ""):
                    return await res.json()
                return {}
        except aiohttp.ClientError as e:
            log.error(f"{method} {url} failed: {e}")
            raise ApiRequestError(f"Request failed: {e}") from e

    async def get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Optional[Any] = None) -> Any:
        return await self.request("POST", endpoint, json=data)

    async def put(self, endpoint: str, data: Optional[Any] = None) -> Any:
        return await self.request("PUT", endpoint, json=data)

    async def delete(self, endpoint: str) -> Any:
        return await self.request("DELETE", endpoint)

    # bookings

    async def get_bookings(
        self, status: Optional[str] = None, request_type: Optional[str] = None
    ) -> list[BookingRequest]:
        data = await self.get(
            ADMIN_BOOKINGS_URL, {"status": status, "requestType": request_type}
        )
        records = response_field(data, "bookings") or []
        return validate_response(_bookings_adapter.validate_python, records)

    async def get_booking_requests(self) -> list[BookingRequest]:
        data = await self.get(BOOKING_REQUESTS_URL)
        records = response_field(data, "bookingRequests") or []
        return validate_response(_bookings_adapter.validate_python, records)

    async def get_conflicting_bookings(self, booking_id: str) -> list[BookingRequest]:
        data = await self.get(conflicting_bookings_url(booking_id))
        records = response_field(data, "conflictingBookings") or []
        return validate_response(_bookings_adapter.validate_python, records)

    async def confirm_booking(
        self, booking_id: str, payload: ConfirmBookingPayload
    ) -> BookingConfirmation:
        data = await self.put(confirm_booking_url(booking_id), dump_payload(payload))
        return validate_response(BookingConfirmation.model_validate, data)

    async def cancel_booking(self, booking_id: str) -> BookingUpdate:
        data = await self.put(cancel_booking_url(booking_id))
        return validate_response(BookingUpdate.model_validate, data)

    async def send_email_to_clients(
        self, client_ids: list[str], title: str, message: str
    ) -> ClientEmailResult:
        payload = ClientEmailPayload(client_ids=client_ids, title=title, message=message)
        data = await self.post(SEND_CLIENT_EMAIL_URL, dump_payload(payload))
        return validate_response(ClientEmailResult.model_validate, data)

    # events and registrations

    async def get_event_registrations(
        self,
        course_id: Optional[str] = None,
        trainer_id: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> list[EventRegistration]:
        data = await self.get(
            EVENT_REGISTRATIONS_URL,
            {"courseId": course_id, "trainerId": trainer_id, "eventId": event_id},
        )
        records = response_field(data, "registrations") or []
        return validate_response(_registrations_adapter.validate_python, records)

    async def approve_event_registration(
        self, registration_id: str, number_of_participants: int
    ) -> RegistrationUpdate:
        data = await self.put(
            approve_registration_url(registration_id),
            {"numberOfParticipants": number_of_participants},
        )
        return validate_response(RegistrationUpdate.model_validate, data)

    async def cancel_event_registration(self, registration_id: str) -> RegistrationUpdate:
        data = await self.put(cancel_registration_url(registration_id))
        return validate_response(RegistrationUpdate.model_validate, data)

    async def get_events(
        self,
        trainer_id: Optional[str] = None,
        course_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[Event]:
        data = await self.get(
            EVENTS_URL,
            {"trainerId": trainer_id, "courseId": course_id, "status": status},
        )
        records = response_field(data, "events") or []
        return validate_response(_events_adapter.validate_python, records)

    async def update_event_status(self, event_id: str, status: str) -> EventUpdate:
        data = await self.put(event_status_url(event_id), {"status": status})
        return validate_response(EventUpdate.model_validate, data)

    async def auto_complete_past_events(self) -> AutoCompleteResult:
        data = await self.post(AUTO_COMPLETE_PAST_EVENTS_URL)
        return validate_response(AutoCompleteResult.model_validate, data)

    # courses

    async def get_admin_course(self, course_id: str) -> Course:
        data = await self.get(admin_course_url(course_id))
        return validate_response(
            Course.model_validate, response_field(data, "course")
        )

    async def create_event_from_course(
        self, course_id: str, payload: EventCreationPayload
    ) -> EventUpdate:
        data = await self.post(
            create_event_from_course_url(course_id),
            payload.model_dump(mode="json", by_alias=True),
        )
        return validate_response(EventUpdate.model_validate, data)

    # trainer availability

    async def get_trainer_availability(
        self,
        trainer_id: str,
        start_date: Optional[datetime.date] = None,
        end_date: Optional[datetime.date] = None,
    ) -> list[AvailabilitySlot]:
        data = await self.get(
            trainer_availability_url(trainer_id),
            {"startDate": start_date, "endDate": end_date},
        )
        records = (
            data if isinstance(data, list) else response_field(data, "availability")
        )
        return validate_response(_slots_adapter.validate_python, records or [])

    async def get_trainer_blocked_days(
        self, trainer_id: str
    ) -> Union[list[int], OptionalFeatureError]:
        try:
            data = await self.get(trainer_blocked_days_url(trainer_id))
            days = response_field(data, "blockedDays") or []
            return validate_response(_blocked_days_adapter.validate_python, days)
        except ApiRequestError as e:
            log.warning(f"Could not fetch blocked days for trainer '{trainer_id}': {e}")
            return OptionalFeatureError.UNAVAILABLE

    async def create_trainer_availability(
        self,
        trainer_id: str,
        dates: list[datetime.date],
        status: AvailabilityStatus,
    ) -> list[AvailabilitySlot]:
        payload = CreateAvailabilityPayload(dates=dates, status=status)
        data = await self.post(
            create_trainer_availability_url(trainer_id), dump_payload(payload)
        )
        records = response_field(data, "availability") or []
        return validate_response(_slots_adapter.validate_python, records)
