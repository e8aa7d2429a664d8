"""Session configuration for Pomodoro CLI."""

from pydantic import BaseModel, Field

DEFAULT_MINUTES = 25
TOTAL_INTERVALS = 4

# Whimsy is a flag count; levels wrap around this modulus.
WHIMSY_LEVELS = 4


class SessionConfig(BaseModel):
    """Settings for one run of the timer.

    Only ``minutes`` and ``whimsy`` come from the command line; everything
    else is a fixed property of a session.
    """

    minutes: int = Field(default=DEFAULT_MINUTES, ge=1)
    whimsy: int = Field(default=0, ge=0)
    total_intervals: int = Field(default=TOTAL_INTERVALS, ge=1)
    first_break_timeout: float = Field(default=180.0, gt=0)
    second_break_timeout: float = Field(default=60.0, gt=0)
    suspend_pause: float = Field(default=2.0, ge=0)
    celebration_pause: float = Field(default=1.0, ge=0)

    @property
    def duration_seconds(self) -> int:
        return self.minutes * 60

    @property
    def whimsy_level(self) -> int:
        return self.whimsy % WHIMSY_LEVELS
