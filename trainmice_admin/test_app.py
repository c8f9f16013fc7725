import pytest

from trainmice_admin.app import AdminApp
from trainmice_admin.notify.toast import ToastLevel
from trainmice_admin.settings import Settings


@pytest.mark.asyncio
async def test_app_wires_settings_into_workflows(toasts, recorder):
    settings = Settings(
        API_URL="http://backend.test/api/",
        API_TOKEN="secret",
        AVAILABILITY_LOOKAHEAD_MONTHS=6,
    )
    async with AdminApp(settings=settings, toasts=toasts) as app:
        assert app.client.base_url == "http://backend.test/api"
        assert app.client.token_store.get() == "secret"
        assert app.bookings_desk().availability_lookahead_months == 6
        calendar = app.trainer_calendar("t1", 2025, 3)
        assert (calendar.trainer_id, calendar.year, calendar.month) == ("t1", 2025, 3)


@pytest.mark.asyncio
async def test_logout_raises_toast(toasts, recorder):
    settings = Settings(API_URL="http://backend.test/api", API_TOKEN="secret")
    async with AdminApp(settings=settings, toasts=toasts) as app:
        app.client._handle_unauthorized()
        assert app.client.token_store.get() is None
    assert recorder.messages(ToastLevel.WARNING) == [
        "Session expired, please log in again"
    ]
