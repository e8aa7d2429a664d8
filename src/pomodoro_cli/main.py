"""Main entry point for Pomodoro CLI."""

import os
import signal

import typer
from pydantic import ValidationError

from pomodoro_cli import __version__
from pomodoro_cli.config import DEFAULT_MINUTES, SessionConfig
from pomodoro_cli.models.pomodoro import (
    PomodoroDisplay,
    Session,
    SessionOrchestrator,
    SessionTerminated,
    SignalChannel,
    TerminalController,
)
from pomodoro_cli.services.audio_service import AudioService
from pomodoro_cli.services.dependency_service import check_dependencies
from pomodoro_cli.services.notification_service import NotificationService
from pomodoro_cli.services.presentation_service import PresentationService
from pomodoro_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_MISSING_DEPENDENCY,
)
from pomodoro_cli.utils.logger import get_logger
from pomodoro_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomodoro",
    help="Run a session of pomodoros in a full-screen terminal timer.",
    add_completion=False,
)

console = get_console()
err_console = get_console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pomodoro-cli {__version__}")
        raise typer.Exit()


def run_session(
    config: SessionConfig, session: Session, terminal: TerminalController
) -> Session:
    """Run every pomodoro of *session* on *terminal*.

    Summary lines are recorded on *session* as they happen, so they survive
    a run that is cut short.

    Raises:
        SessionTerminated: when the user ends the session with a signal.
            Terminal modes and signal handlers are already restored.
    """
    display = PomodoroDisplay(
        terminal, PresentationService(), whimsy_level=config.whimsy_level
    )
    channel = SignalChannel(
        key_fd=terminal.fd,
        suspend_pause=config.suspend_pause,
        on_suspend=display.show_suspend_prompt,
    )
    orchestrator = SessionOrchestrator(
        config,
        session,
        channel,
        terminal,
        display,
        NotificationService(),
        AudioService(),
    )
    with channel, terminal.full_screen():
        return orchestrator.run()


def print_summary(session: Session) -> None:
    if session.summary_log:
        console.print(session.summary(), markup=False, soft_wrap=True)


def terminate_with(signum: int) -> None:
    """End the process by *signum* so the parent sees a signal exit status."""
    signal.signal(signum, signal.SIG_DFL)
    os.kill(os.getpid(), signum)


@app.command()
def start(
    minutes: int = typer.Argument(
        DEFAULT_MINUTES, min=1, help="Length of each pomodoro in minutes"
    ),
    whimsy: int = typer.Option(
        0,
        "--whimsy",
        "-w",
        count=True,
        help="More cows. Repeat to raise the level (wraps around).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Run four pomodoros with breaks in between.

    Ctrl-C abandons the running pomodoro and restarts it; pressed between
    pomodoros it ends the session. A summary is printed on exit.
    """
    try:
        config = SessionConfig(minutes=minutes, whimsy=whimsy)
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] invalid settings: {e}")
        raise typer.Exit(ERROR_INVALID_ARGS) from e

    ok, message = check_dependencies()
    if not ok:
        err_console.print(f"[red]Error:[/red] {message}")
        raise typer.Exit(ERROR_MISSING_DEPENDENCY)

    try:
        terminal = TerminalController.open_tty()
    except OSError as e:
        err_console.print(f"[red]Error:[/red] cannot open the terminal: {e}")
        raise typer.Exit(ERROR_GENERAL) from e

    session = Session.from_config(config)
    logger = get_logger(__name__)
    logger.info("session started: %d minute pomodoros", config.minutes)
    try:
        run_session(config, session, terminal)
    except SessionTerminated as e:
        logger.info("session ended by %s", e)
        print_summary(session)
        terminate_with(e.signum)
        return
    finally:
        terminal.close()

    print_summary(session)
    logger.info("session finished")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
