"""Startup probe for the external programs a session needs."""

import shutil

from .audio_service import PAPLAY
from .notification_service import NOTIFY_SEND
from .presentation_service import COWSAY, FIGLET

# Program name -> what it is used for.
REQUIRED_PROGRAMS = {
    COWSAY: "speech bubbles",
    FIGLET: "big countdown digits",
    NOTIFY_SEND: "desktop notifications",
    PAPLAY: "the end-of-pomodoro sound",
}


def find_missing_programs() -> list[str]:
    """Return the required programs that are not on PATH."""
    return [name for name in REQUIRED_PROGRAMS if shutil.which(name) is None]


def check_dependencies() -> tuple[bool, str]:
    """Check that every required program is installed."""
    missing = find_missing_programs()
    if not missing:
        return True, ""
    details = ", ".join(f"{name} ({REQUIRED_PROGRAMS[name]})" for name in missing)
    return False, f"Required programs not found: {details}"
