"""Decorative text art: cowsay speech bubbles, figlet digits, lolcat colours.

Each renderer shells out to its program and falls back to the plain text when
the program fails, so a broken art tool never ends a session.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass

from pomodoro_cli.utils.logger import get_logger

COWSAY = "cowsay"
FIGLET = "figlet"
LOLCAT = "lolcat"


@dataclass(frozen=True)
class CowVariant:
    """One way of drawing the cow.

    ``tier`` is the lowest whimsy level at which the variant may be picked.
    """

    name: str
    args: tuple[str, ...] = ()
    tier: int = 0


COW_VARIANTS: tuple[CowVariant, ...] = (
    CowVariant("default"),
    CowVariant("tired", ("-t",), tier=1),
    CowVariant("wired", ("-w",), tier=1),
    CowVariant("youthful", ("-y",), tier=1),
    CowVariant("greedy", ("-g",), tier=1),
    CowVariant("paranoid", ("-p",), tier=2),
    CowVariant("stoned", ("-s",), tier=2),
    CowVariant("dead", ("-d",), tier=2),
    CowVariant("borg", ("-b",), tier=2),
    CowVariant("tux", ("-f", "tux"), tier=3),
    CowVariant("sheep", ("-f", "sheep"), tier=3),
    CowVariant("dragon", ("-f", "dragon"), tier=3),
)


def variants_for_level(level: int) -> tuple[CowVariant, ...]:
    """Variants available at whimsy *level*."""
    return tuple(variant for variant in COW_VARIANTS if variant.tier <= level)


class PresentationService:
    """Renders messages through the external art programs."""

    def __init__(self, rainbow: bool | None = None):
        if rainbow is None:
            rainbow = shutil.which(LOLCAT) is not None
        self.rainbow_available = rainbow

    def _run(self, command: list[str], text: str) -> str | None:
        try:
            result = subprocess.run(
                command,
                input=text,
                capture_output=True,
                text=True,
                check=True,
                # Out of our process group so Ctrl-C does not kill a render.
                start_new_session=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            get_logger(__name__).warning("%s failed: %s", command[0], e)
            return None
        return result.stdout.rstrip("\n")

    def speech_bubble(
        self,
        message: str,
        width: int,
        variant: CowVariant = COW_VARIANTS[0],
        preformatted: bool = False,
    ) -> str:
        """Put *message* in a cow's speech bubble wrapped at *width* columns.

        ``preformatted`` keeps the message's own line breaks, which big-digit
        art needs.
        """
        command = [COWSAY, *variant.args]
        if preformatted:
            command.append("-n")
        else:
            command.extend(["-W", str(max(width, 10))])
        return self._run(command, message) or message

    def big_digits(self, text: str, width: int = 80) -> str:
        """Render *text* in large figlet characters."""
        return self._run([FIGLET, "-w", str(max(width, 20))], text) or text

    def colorize(self, text: str) -> str:
        """Rainbow-colour *text*, or return it unchanged without lolcat."""
        if not self.rainbow_available:
            return text
        return self._run([LOLCAT, "--force"], text) or text
