import pytest

from trainmice_admin.notify.toast import Toast, ToastBus, ToastLevel


class RecordingSink:
    def __init__(self):
        self.toasts: list[Toast] = []

    def __call__(self, toast: Toast) -> None:
        self.toasts.append(toast)

    def messages(self, level: ToastLevel) -> list[str]:
        return [t.message for t in self.toasts if t.level == level]

    @property
    def errors(self) -> list[str]:
        return self.messages(ToastLevel.ERROR)

    @property
    def successes(self) -> list[str]:
        return self.messages(ToastLevel.SUCCESS)


@pytest.fixture
def recorder() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def toasts(recorder: RecordingSink) -> ToastBus:
    return ToastBus([recorder])
