"""Configuration model for the idle watcher and its desktop oracle."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import IdleConfigurationError

DEFAULT_POLL_INTERVAL_SECONDS = 10.0
DEFAULT_IDLE_THRESHOLD_SECONDS = 300
DEFAULT_QUERY_TIMEOUT_SECONDS = 2.0


@dataclass(frozen=True)
class IdleConfig:
    """Validated idle-detection settings derived from app settings."""
    enabled: bool = False
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    threshold_seconds: int = DEFAULT_IDLE_THRESHOLD_SECONDS
    query_timeout_seconds: float = DEFAULT_QUERY_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.poll_interval_seconds <= 0:
            raise IdleConfigurationError(
                "IDLE_POLL_INTERVAL_SECONDS must be greater than zero, "
                f"got: {self.poll_interval_seconds}"
            )
        if self.threshold_seconds < 1:
            raise IdleConfigurationError(
                f"IDLE_THRESHOLD_SECONDS must be >= 1, got: {self.threshold_seconds}"
            )
        if self.query_timeout_seconds <= 0:
            raise IdleConfigurationError(
                "IDLE_QUERY_TIMEOUT_SECONDS must be greater than zero, "
                f"got: {self.query_timeout_seconds}"
            )

    @classmethod
    def from_settings(cls, settings) -> "IdleConfig":
        return cls(
            enabled=bool(settings.enabled),
            poll_interval_seconds=float(settings.poll_interval_seconds),
            threshold_seconds=int(settings.threshold_seconds),
            query_timeout_seconds=float(settings.query_timeout_seconds),
        )
