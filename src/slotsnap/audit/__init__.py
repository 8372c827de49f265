"""Audit logging subsystem for slotsnap.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: Unique run identifiers
"""

from slotsnap.audit.helpers import generate_run_id, get_package_version
from slotsnap.audit.logger import AuditLogger
from slotsnap.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "get_package_version",
]
