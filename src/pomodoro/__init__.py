from .register import (
    DEFAULT_SNAPSHOT,
    StateRegister,
    TimerMode,
    TimerSnapshot,
    snapshot_from_payload,
)

__all__ = [
    "DEFAULT_SNAPSHOT",
    "StateRegister",
    "TimerMode",
    "TimerSnapshot",
    "snapshot_from_payload",
]
