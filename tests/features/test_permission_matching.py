"""Tests for permission scope matching and resource keys."""

import pytest

from neo_rbac import Permission, PermissionEffect, Resource, ResourceId, permission_matches, resource_key
from neo_rbac.config.constants import WILDCARD


SCOPE_FIELDS = ["action", "tenant_id", "subscription_id", "namespace_id", "resource_type_id", "resource_id"]

REQUEST = Permission(
    action="read",
    tenant_id="t",
    subscription_id="s",
    namespace_id="n",
    resource_type_id="counter",
    resource_id="x",
)


class TestPermissionMatching:
    """Test cases for the six-field wildcard match."""

    def test_all_wildcards_match_anything(self):
        assert permission_matches(Permission(action=WILDCARD), REQUEST)

    def test_exact_grant_matches(self):
        assert permission_matches(REQUEST, REQUEST)

    @pytest.mark.parametrize("field_name", SCOPE_FIELDS)
    def test_single_literal_field(self, field_name):
        """Each dimension is checked independently of the others."""
        base = {name: WILDCARD for name in SCOPE_FIELDS}

        matching = Permission(**{**base, field_name: getattr(REQUEST, field_name)})
        other = Permission(**{**base, field_name: "something-else"})

        assert permission_matches(matching, REQUEST)
        assert not permission_matches(other, REQUEST)

    def test_wildcard_in_request_is_literal(self):
        """A literal grant does not match a request that itself uses '*'."""
        grant = Permission(action="read", subscription_id="system")
        request = Permission(action="read", subscription_id=WILDCARD)

        assert not permission_matches(grant, request)
        assert permission_matches(Permission(action="read"), request)

    def test_match_ignores_effect_and_conditions(self):
        from neo_rbac import IPAllowListCondition

        grant = Permission(action="read", effect=PermissionEffect.DENY).with_conditions(
            IPAllowListCondition(allowed_ips={"10.0.0.1"})
        )
        assert grant.matches(REQUEST)


class TestPermissionValue:
    """Test cases for the Permission value object."""

    def test_defaults_to_wildcard_scope_and_allow(self):
        permission = Permission(action="read")

        assert permission.tenant_id == WILDCARD
        assert permission.resource_id == WILDCARD
        assert permission.effect is PermissionEffect.ALLOW
        assert permission.conditions == ()

    def test_effect_string_is_coerced(self):
        assert Permission(action="read", effect="deny").effect is PermissionEffect.DENY

    def test_equal_permissions_deduplicate_in_sets(self):
        assert len({Permission(action="read"), Permission(action="read")}) == 1

    def test_for_resource_copies_scope(self):
        resource = ResourceId("t", "s", "n", "counter", "x")
        assert Permission.for_resource("read", resource) == REQUEST


class TestResourceKey:
    """Test cases for canonical resource keys."""

    def test_resource_id_key(self):
        resource = ResourceId("t", "s", "n", "counter", "x")
        assert resource_key(resource) == "rid:t:s:n:counter:x"

    def test_resource_key_matches_resource_id(self):
        resource = Resource(
            id="x", tenant_id="t", subscription_id="s", namespace_id="n", type_id="counter", parent_id="p"
        )

        assert resource.key == "rid:t:s:n:counter:x"
        assert ResourceId.from_resource(resource).key == resource.key
