"""Timer mode names and default snapshot values shared with the UI layer."""

from __future__ import annotations

MODE_WORK = "work"
MODE_SHORT_BREAK = "shortBreak"
MODE_LONG_BREAK = "longBreak"

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_TIME_LEFT_SECONDS = DEFAULT_WORK_SECONDS
DEFAULT_SESSIONS_COMPLETED = 0

# Longest the register waits for its lock before treating it as broken.
DEFAULT_LOCK_TIMEOUT_SECONDS = 1.0
