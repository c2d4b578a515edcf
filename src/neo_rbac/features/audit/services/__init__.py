"""Audit services package."""

from .audit_emitter import AuditEmitter, AuditSink, LoggingAuditSink

__all__ = ["AuditEmitter", "AuditSink", "LoggingAuditSink"]
