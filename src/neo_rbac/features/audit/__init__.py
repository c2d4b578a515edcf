"""Audit feature for neo-rbac.

Fire-and-forget stream of permission checks and policy mutations.
"""

from .entities import AuditEvent, AuditLogEntry
from .services import AuditEmitter, AuditSink, LoggingAuditSink

__all__ = [
    "AuditEvent",
    "AuditLogEntry",
    "AuditEmitter",
    "AuditSink",
    "LoggingAuditSink",
]
