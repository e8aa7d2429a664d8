"""
Exit codes for Pomodoro CLI.

Semantic exit codes so that shells and scripts wrapping the timer can tell
what happened. Termination by a signal is not listed here: the process
re-delivers the signal to itself and the shell sees the signal-derived status.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# A required external program (cowsay, figlet, ...) is not installed
ERROR_MISSING_DEPENDENCY = 127
