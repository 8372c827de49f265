"""Structured audit logger for export runs.

Events are appended to a JSONL file, one object per line, and flushed after
every write so that an aborted export still leaves a readable log. The
consolidation core never logs; only the runner and the CLI talk to this
logger.
"""

import json
import time
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from pathlib import Path
from typing import Any

from slotsnap.audit.helpers import get_package_version
from slotsnap.audit.models import LogEvent
from slotsnap.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """Append-only JSONL event log.

    Several runs may share one file; every event carries its ``run_id``.

    Attributes
    ----------
    run_id : str
        Identifier written on every event.
    log_path : Path
        JSONL file the events are appended to.
    current_stage : str | None
        Stage attached to events that do not name one.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Open ``log_path`` for appending, creating parent directories."""
        self.run_id = run_id
        self.log_path = log_path
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close the log file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file. Safe to call more than once."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        *,
        level: str = "INFO",
        stage: str | None = None,
        unit: str | None = None,
    ) -> None:
        """Append one event.

        Parameters
        ----------
        event_type : str
            Event name, e.g. ``"unit_processed"``.
        data : dict[str, Any] | None, optional
            JSON-serializable payload.
        level : str, optional
            One of ``DEBUG``, ``INFO``, ``WARN``, ``ERROR``.
        stage : str | None, optional
            Stage name; defaults to :attr:`current_stage`.
        unit : str | None, optional
            Origin of the compilation unit the event is about.
        """
        record = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            stage=stage if stage is not None else self.current_stage,
            unit=unit,
        )
        self._file.write(json.dumps(asdict(record), ensure_ascii=False, separators=(",", ":")))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, parameters: dict[str, Any]) -> None:
        """Record the export parameters and the installed slotsnap version."""
        self.current_stage = None
        self.event(
            "run_started",
            data={"version": get_package_version(), "parameters": parameters},
        )

    def run_finished(self, status: str, duration_seconds: float) -> None:
        """Record the run outcome.

        Parameters
        ----------
        status : str
            Run status ("success", "failed").
        duration_seconds : float
            Wall-clock duration of the run.
        """
        self.event(
            "run_finished",
            data={"status": status, "duration_seconds": round(duration_seconds, 6)},
        )

    def stage_started(self, stage: str) -> None:
        """Log stage_started and make ``stage`` the current stage."""
        self.current_stage = stage
        self.event("stage_started", stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log stage_finished with its duration and optional counters.

        Parameters
        ----------
        stage : str
            Stage name.
        duration_seconds : float
            Stage duration.
        counters : dict[str, int] | None, optional
            Stage counters; omitted from the event when empty.
        """
        data: dict[str, Any] = {"duration_seconds": round(duration_seconds, 6)}
        if counters:
            data["counters"] = counters
        self.event("stage_finished", data=data, stage=stage)

    @contextmanager
    def stage(self, name: str) -> Iterator[dict[str, int]]:
        """Time a stage and log its start and end.

        Yields a dict the caller fills with counters; they are written on
        the ``stage_finished`` event. If the body raises, no
        ``stage_finished`` is written and :attr:`current_stage` keeps
        pointing at the failed stage so the error event is attributed to it.

        Examples
        --------
            >>> with logger.stage("stage1_discover") as counters:
            ...     counters["units"] = len(units)
        """
        start = time.perf_counter()
        self.stage_started(name)
        counters: dict[str, int] = {}
        yield counters
        self.stage_finished(name, time.perf_counter() - start, counters)

    def unit_processed(
        self,
        unit: str,
        excluded_slots: int,
        rows: int,
        variables: int,
    ) -> None:
        """Record the outcome of both passes over one compilation unit."""
        self.event(
            "unit_processed",
            data={"excluded_slots": excluded_slots, "rows": rows, "variables": variables},
            unit=unit,
        )

    def artifact_written(
        self,
        path: str,
        sha256: str,
        bytes_written: int | None = None,
        record_count: int | None = None,
    ) -> None:
        """Log that a report file was written.

        Parameters
        ----------
        path : str
            Path of the written file.
        sha256 : str
            Content hash, ``"sha256:<hex>"``.
        bytes_written : int | None, optional
            File size in bytes.
        record_count : int | None, optional
            Number of table rows in the file.
        """
        data: dict[str, Any] = {"path": path, "sha256": sha256}
        if bytes_written is not None:
            data["bytes"] = bytes_written
        if record_count is not None:
            data["record_count"] = record_count
        self.event("artifact_written", data=data)

    def error(self, exc: BaseException, stage: str | None = None) -> None:
        """Record an exception that ended the run, with its traceback."""
        self.event(
            "error",
            data={
                "exception_class": type(exc).__name__,
                "message": str(exc),
                "traceback": "".join(traceback.format_exception(exc)),
            },
            level="ERROR",
            stage=stage,
        )
