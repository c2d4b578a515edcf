"""Pytest configuration and fixtures for neo-rbac tests."""

from datetime import datetime

import pytest

from neo_rbac import RBAC, Permission, ResourceId, User
from neo_rbac.config.constants import AuditEventType


class RecordingSink:
    """Audit sink that keeps every record it receives."""

    def __init__(self):
        self.records = []

    def log(self, record):
        self.records.append(record)

    def of_type(self, event_type: AuditEventType):
        return [r for r in self.records if r.event_type == event_type]


class FailingSink:
    """Audit sink that always raises."""

    def __init__(self):
        self.calls = 0

    def log(self, record):
        self.calls += 1
        raise RuntimeError("sink is down")


@pytest.fixture
def recorder():
    """Recording audit sink."""
    return RecordingSink()


@pytest.fixture
def rbac(recorder):
    """Empty engine wired to the recording sink."""
    return RBAC(audit_sinks=[recorder])


@pytest.fixture
def default_rbac(recorder):
    """Engine seeded with the default roles."""
    return RBAC.with_default_roles(audit_sinks=[recorder])


@pytest.fixture
def counter_resource():
    """Resource id of a counter used across scenarios."""
    return ResourceId(
        tenant_id="t",
        subscription_id="s",
        namespace_id="n",
        resource_type_id="counter",
        resource_id="x",
    )


@pytest.fixture
def request_for(counter_resource):
    """Build a request permission on ``counter_resource`` for an action."""
    def build(action: str, resource: ResourceId = None) -> Permission:
        return Permission.for_resource(action, resource or counter_resource)
    return build


@pytest.fixture
def add_user():
    """Register a user principal on an engine."""
    def add(engine: RBAC, principal_id: str) -> User:
        user = User(id=principal_id, username=f"user {principal_id}")
        engine.add_principal(user)
        return user
    return add


@pytest.fixture
def at_hour():
    """Context whose current time is at the given hour."""
    def build(hour: int, **extra):
        return {"currentTime": datetime(2024, 1, 1, hour, 30), **extra}
    return build


@pytest.fixture
def failing_sink():
    """Audit sink that raises on every record."""
    return FailingSink()
