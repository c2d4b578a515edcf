"""Audit event publishing for the access control engine.

The emitter owns two kinds of listener:

- handlers subscribed to a single named event,
- sinks that receive every event.

Publishing is synchronous. A failing listener is logged and skipped so that
it can never change or interrupt the caller's result.
"""

import json
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Union, runtime_checkable

from ....config.constants import AuditEventType
from ..entities import AuditEvent, AuditLogEntry

logger = logging.getLogger(__name__)

AuditRecord = Union[AuditEvent, AuditLogEntry]
AuditHandler = Callable[[AuditRecord], Any]


@runtime_checkable
class AuditSink(Protocol):
    """Receives every record published on the audit stream."""

    def log(self, record: AuditRecord) -> None:
        ...


class LoggingAuditSink:
    """Audit sink that writes each record as JSON through stdlib logging."""

    def __init__(self, logger_name: str = "neo_rbac.features.audit.sink", level: int = logging.INFO):
        self._logger = logging.getLogger(logger_name)
        self._level = level

    def log(self, record: AuditRecord) -> None:
        self._logger.log(self._level, json.dumps(record.to_dict(), default=str))


class AuditEmitter:
    """Named-event publish/subscribe bus owned by one engine instance."""

    def __init__(self, sinks: Optional[Iterable[AuditSink]] = None):
        self._handlers: Dict[AuditEventType, List[AuditHandler]] = defaultdict(list)
        self._sinks: List[AuditSink] = list(sinks or [])

    # Subscription management

    def subscribe(self, event_type: Union[AuditEventType, str], handler: AuditHandler) -> None:
        """Register ``handler`` for one event name."""
        self._handlers[AuditEventType(event_type)].append(handler)

    on = subscribe

    def unsubscribe(self, event_type: Union[AuditEventType, str], handler: AuditHandler) -> bool:
        handlers = self._handlers.get(AuditEventType(event_type), [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def add_sink(self, sink: AuditSink) -> None:
        self._sinks.append(sink)

    def remove_sink(self, sink: AuditSink) -> bool:
        if sink in self._sinks:
            self._sinks.remove(sink)
            return True
        return False

    @property
    def sinks(self) -> List[AuditSink]:
        return list(self._sinks)

    def listener_count(self, event_type: Union[AuditEventType, str]) -> int:
        return len(self._handlers.get(AuditEventType(event_type), [])) + len(self._sinks)

    # Publishing

    def publish(self, event_type: AuditEventType, record: AuditRecord) -> None:
        """Deliver ``record`` to the event's handlers and then to every sink."""
        for handler in list(self._handlers.get(event_type, [])):
            self._deliver(event_type, handler, record)
        for sink in list(self._sinks):
            self._deliver(event_type, sink.log, record)

    def _deliver(self, event_type: AuditEventType, callback: Callable[[AuditRecord], Any], record: AuditRecord) -> None:
        try:
            callback(record)
        except Exception:
            logger.exception(f"Audit listener {callback!r} failed on {event_type.value}")

    def _emit(self, event_type: AuditEventType, **payload) -> AuditEvent:
        event = AuditEvent(event_type=event_type, payload=payload)
        self.publish(event_type, event)
        return event

    def emit_permission_check(self, entry: AuditLogEntry) -> None:
        self.publish(AuditEventType.PERMISSION_CHECK, entry)

    def emit_role_assignment(self, principal_id, role) -> AuditEvent:
        return self._emit(AuditEventType.ROLE_ASSIGNMENT, principal_id=principal_id, role=role)

    def emit_role_revocation(self, principal_id, role) -> AuditEvent:
        return self._emit(AuditEventType.ROLE_REVOCATION, principal_id=principal_id, role=role)

    def emit_resource_permission_assignment(self, resource_id, role, permission) -> AuditEvent:
        return self._emit(
            AuditEventType.RESOURCE_PERMISSION_ASSIGNMENT,
            resource_id=resource_id, role=role, permission=permission
        )

    def emit_principal_addition(self, principal) -> AuditEvent:
        return self._emit(AuditEventType.PRINCIPAL_ADDITION, principal=principal)

    def emit_principal_removal(self, principal_id) -> AuditEvent:
        return self._emit(AuditEventType.PRINCIPAL_REMOVAL, principal_id=principal_id)

    def emit_role_creation(self, role, permissions) -> AuditEvent:
        return self._emit(AuditEventType.ROLE_CREATION, role=role, permissions=list(permissions))

    def emit_role_removal(self, role) -> AuditEvent:
        return self._emit(AuditEventType.ROLE_REMOVAL, role=role)

    def emit_group_creation(self, group_id, name) -> AuditEvent:
        return self._emit(AuditEventType.GROUP_CREATION, group_id=group_id, name=name)

    def emit_group_addition(self, group_id, principal_id) -> AuditEvent:
        return self._emit(AuditEventType.GROUP_ADDITION, group_id=group_id, principal_id=principal_id)

    def emit_group_removal(self, group_id, principal_id) -> AuditEvent:
        return self._emit(AuditEventType.GROUP_REMOVAL, group_id=group_id, principal_id=principal_id)

    def emit_permission_denial(self, principal_id, permission) -> AuditEvent:
        return self._emit(AuditEventType.PERMISSION_DENIAL, principal_id=principal_id, permission=permission)

    def emit_permission_denial_removal(self, principal_id, permission) -> AuditEvent:
        return self._emit(
            AuditEventType.PERMISSION_DENIAL_REMOVAL, principal_id=principal_id, permission=permission
        )

    def emit_condition_addition(self, principal_id, permission, condition_type) -> AuditEvent:
        return self._emit(
            AuditEventType.CONDITION_ADDITION,
            principal_id=principal_id, permission=permission, condition_type=condition_type
        )
