"""Data models for audit logging."""

from dataclasses import dataclass, field
from typing import Any

__all__ = ["LogEvent"]


@dataclass
class LogEvent:
    """Structured log event.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp.
    run_id : str
        Run identifier.
    level : str
        Log level ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type (e.g., "stage_started").
    data : dict[str, Any]
        Event-specific payload.
    stage : str | None
        Stage identifier.
    unit : str | None
        Compilation unit origin if the event is unit-specific.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any] = field(default_factory=dict)
    stage: str | None = None
    unit: str | None = None
