import datetime
from typing import Optional

from trainmice_admin.api.client import ApiClient
from trainmice_admin.errors import ApiRequestError
from trainmice_admin.notify.toast import ToastBus
from trainmice_admin.schemas.event import Event, EventStatus
from trainmice_admin.utils.logging_utils import log


def past_active_events(
    events: list[Event], today: Optional[datetime.date] = None
) -> list[Event]:
    today = today or datetime.date.today()
    return [
        e
        for e in events
        if e.status == EventStatus.ACTIVE.value
        and e.last_date is not None
        and e.last_date < today
    ]


def filter_events(
    events: list[Event],
    search: str = "",
    status: Optional[str] = None,
    month: Optional[int] = None,
) -> list[Event]:
    term = search.lower()
    filtered = []
    for event in events:
        if term and not any(
            v is not None and term in v.lower()
            for v in (
                event.title,
                event.course.title if event.course else None,
                event.trainer.full_name if event.trainer else None,
            )
        ):
            continue
        if status is not None and event.status != status.upper():
            continue
        if month is not None and (
            event.event_date is None or event.event_date.month != month
        ):
            continue
        filtered.append(event)
    return filtered


class EventsBoard:
    def __init__(self, client: ApiClient, toasts: ToastBus):
        self.client = client
        self.toasts = toasts
        self.events: list[Event] = []

    async def refresh(
        self,
        trainer_id: Optional[str] = None,
        course_id: Optional[str] = None,
        today: Optional[datetime.date] = None,
    ) -> bool:
        try:
            events = await self.client.get_events(
                trainer_id=trainer_id, course_id=course_id
            )
        except ApiRequestError as e:
            log.error("Error fetching events")
            self.toasts.error(e.message or "Error fetching events")
            return False
        past = past_active_events(events, today)
        if len(past) > 0:
            try:
                await self.client.auto_complete_past_events()
            except ApiRequestError as e:
                # keep the fetched events, the batch can run again on next refresh
                log.error(f"Error auto-completing past events: {e}")
            else:
                past_ids = {e.id for e in past}
                events = [
                    e.model_copy(update={"status": EventStatus.COMPLETED.value})
                    if e.id in past_ids
                    else e
                    for e in events
                ]
                self.toasts.success(f"Auto-completed {len(past)} past event(s)")
        self.events = events
        return True

    async def update_status(self, event_id: str, status: EventStatus) -> bool:
        try:
            update = await self.client.update_event_status(event_id, status.value)
        except ApiRequestError as e:
            log.error(f"Error updating status of event '{event_id}'")
            self.toasts.error(e.message or "Failed to update event status")
            return False
        self.events = [
            e.model_copy(update={"status": status.value}) if e.id == event_id else e
            for e in self.events
        ]
        self.toasts.success(update.message or "Event status updated successfully")
        return True
