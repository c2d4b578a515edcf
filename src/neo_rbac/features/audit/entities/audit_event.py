"""Audit stream entities for neo-rbac.

Entries are produced by the engine and forwarded to subscribers; the engine
never stores them.
"""

from dataclasses import asdict, dataclass, field, is_dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

from ....config.constants import AuditEventType

if TYPE_CHECKING:
    from ...permissions.entities import ResourceId


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_primitive(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {k: _to_primitive(v) for k, v in asdict(value).items()}
    if isinstance(value, dict):
        return {k: _to_primitive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_primitive(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "value") and isinstance(getattr(value, "value"), str):
        return value.value
    return value


@dataclass
class AuditLogEntry:
    """Result of a single permission check."""

    principal_id: str
    action: str
    granted: bool
    reason: str
    resource_id: Optional["ResourceId"] = None
    context: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def event_type(self) -> AuditEventType:
        return AuditEventType.PERMISSION_CHECK

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "timestamp": self.timestamp.isoformat(),
            "principal_id": self.principal_id,
            "action": self.action,
            "resource_id": _to_primitive(self.resource_id),
            "granted": self.granted,
            "reason": self.reason,
        }
        if self.context is not None:
            data["context"] = _to_primitive(self.context)
        return data


@dataclass
class AuditEvent:
    """Envelope for every mutating operation published on the audit stream."""

    event_type: AuditEventType
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utc_now)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            **_to_primitive(self.payload),
        }
