"""Audio cue played when a pomodoro ends."""

import subprocess

from pomodoro_cli.utils.logger import get_logger

PAPLAY = "paplay"
DEFAULT_SOUND = "/usr/share/sounds/freedesktop/stereo/complete.oga"


class AudioService:
    """Plays the notification sound without waiting for it to finish."""

    def __init__(self, sound_file: str = DEFAULT_SOUND):
        self.sound_file = sound_file

    def play_cue(self) -> None:
        try:
            subprocess.Popen(
                [PAPLAY, self.sound_file],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            get_logger(__name__).warning("audio cue failed: %s", e)
