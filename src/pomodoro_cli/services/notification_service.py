"""Desktop notifications via notify-send."""

import subprocess

from pomodoro_cli.utils.logger import get_logger

NOTIFY_SEND = "notify-send"
APP_TITLE = "Pomodoro"


class NotificationService:
    """Fire-and-forget desktop notifications."""

    def __init__(self, title: str = APP_TITLE):
        self.title = title

    def notify(self, message: str, urgent: bool = False) -> None:
        """Send *message*; ``urgent`` uses the critical urgency level."""
        urgency = "critical" if urgent else "normal"
        try:
            subprocess.Popen(
                [NOTIFY_SEND, "-u", urgency, self.title, message],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            get_logger(__name__).warning("notification failed: %s", e)
            return
        get_logger(__name__).info("notified (%s): %s", urgency, message)
