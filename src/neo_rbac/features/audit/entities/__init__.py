"""Audit entities package."""

from .audit_event import AuditEvent, AuditLogEntry

__all__ = ["AuditEvent", "AuditLogEntry"]
