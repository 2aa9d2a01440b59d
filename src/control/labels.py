"""Localized labels and formatting for the one-line status output."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pomodoro.constants import MODE_LONG_BREAK, MODE_SHORT_BREAK, MODE_WORK

DEFAULT_LANGUAGE = "en"

_LABELS: dict[str, dict[str, str]] = {
    "en": {
        MODE_WORK: "Focus",
        MODE_SHORT_BREAK: "Short Break",
        MODE_LONG_BREAK: "Long Break",
        "running": "Running",
        "paused": "Paused",
        "mode": "Mode",
        "sessions": "Sessions",
    },
    "tr": {
        MODE_WORK: "Odaklan",
        MODE_SHORT_BREAK: "Kısa Mola",
        MODE_LONG_BREAK: "Uzun Mola",
        "running": "Çalışıyor",
        "paused": "Duraklatıldı",
        "mode": "Mod",
        "sessions": "Oturum",
    },
}


def resolve_language(environ: Optional[Mapping[str, str]] = None) -> str:
    """Pick a label set from POMODORO_LANG, then LANG (e.g. `tr_TR.UTF-8`)."""
    env = environ if environ is not None else os.environ
    for key in ("POMODORO_LANG", "LANG"):
        raw = env.get(key, "").strip().lower()
        code = raw.split(".")[0].split("_")[0]
        if code in _LABELS:
            return code
    return DEFAULT_LANGUAGE


def mode_label(mode: str, language: str = DEFAULT_LANGUAGE) -> str:
    labels = _LABELS.get(language, _LABELS[DEFAULT_LANGUAGE])
    return labels.get(mode, mode)


def format_clock(seconds: int) -> str:
    minutes, rest = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{rest:02d}"


def format_status_line(
    *,
    mode: str,
    time_left_seconds: int,
    is_active: bool,
    sessions_completed: int,
    language: str = DEFAULT_LANGUAGE,
) -> str:
    labels = _LABELS.get(language, _LABELS[DEFAULT_LANGUAGE])
    activity = labels["running"] if is_active else labels["paused"]
    return (
        f"{labels['mode']}: {mode_label(mode, language)} | {activity} | "
        f"{format_clock(time_left_seconds)} | {labels['sessions']}: {sessions_completed}"
    )
