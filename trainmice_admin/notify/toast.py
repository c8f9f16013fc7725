import logging
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel

from trainmice_admin.utils.logging_utils import log


class ToastLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Toast(BaseModel):
    level: ToastLevel
    message: str


ToastSink = Callable[[Toast], None]

LOG_LEVELS = {
    ToastLevel.SUCCESS: logging.INFO,
    ToastLevel.INFO: logging.INFO,
    ToastLevel.WARNING: logging.WARNING,
    ToastLevel.ERROR: logging.ERROR,
}


def log_sink(toast: Toast) -> None:
    log.log(LOG_LEVELS[toast.level], toast.message)


class ToastBus:
    """
    Dispatches user-facing toasts to every subscribed sink

    One bus is owned by the root application object and handed to each
    workflow, so tests can subscribe a recorder instead of a real sink.
    """

    def __init__(self, sinks: Optional[list[ToastSink]] = None):
        self._sinks: list[ToastSink] = list(sinks or [])

    def subscribe(self, sink: ToastSink) -> Callable[[], None]:
        self._sinks.append(sink)

        def unsubscribe():
            if sink in self._sinks:
                self._sinks.remove(sink)

        return unsubscribe

    def show(self, message: str, level: ToastLevel = ToastLevel.INFO) -> None:
        toast = Toast(level=level, message=message)
        for sink in self._sinks:
            sink(toast)

    def success(self, message: str) -> None:
        self.show(message, ToastLevel.SUCCESS)

    def error(self, message: str) -> None:
        self.show(message, ToastLevel.ERROR)

    def warning(self, message: str) -> None:
        self.show(message, ToastLevel.WARNING)

    def info(self, message: str) -> None:
        self.show(message, ToastLevel.INFO)

