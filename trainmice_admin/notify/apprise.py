import apprise
from apprise import NotifyType

from trainmice_admin.notify.toast import Toast, ToastLevel, ToastSink

NOTIFY_TYPES = {
    ToastLevel.SUCCESS: NotifyType.SUCCESS,
    ToastLevel.INFO: NotifyType.INFO,
    ToastLevel.WARNING: NotifyType.WARNING,
    ToastLevel.ERROR: NotifyType.FAILURE,
}


def apprise_sink(config_file: str) -> ToastSink:
    aprs = apprise.Apprise()
    config = apprise.AppriseConfig()
    config.add(config_file)
    aprs.add(config)

    def sink(toast: Toast) -> None:
        aprs.notify(
            notify_type=NOTIFY_TYPES[toast.level],
            title=f"TrainMICE admin {toast.level.value}",
            body=toast.message,
        )

    return sink
