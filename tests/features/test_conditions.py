"""Tests for condition variants and their evaluation."""

from datetime import datetime
from ipaddress import ip_network

import pytest

from neo_rbac import (
    ConditionKind,
    InvalidConditionError,
    IPAllowListCondition,
    IPFilterCondition,
    Permission,
    ResourceId,
    TimeWindowCondition,
    check_conditions,
    evaluate_condition,
)

PERMISSION = Permission(action="read")
RESOURCE = ResourceId("t", "s", "n", "counter", "x")


def evaluate(condition, context):
    return evaluate_condition(condition, "u1", PERMISSION, RESOURCE, context)


class TestTimeWindowCondition:
    """Test cases for the time-of-day window."""

    @pytest.mark.parametrize("start,end", [(-1, 5), (0, 24), (25, 3)])
    def test_rejects_out_of_range_hours(self, start, end):
        with pytest.raises(InvalidConditionError, match="between 0 and 23"):
            TimeWindowCondition(start, end)

    def test_kind_tag(self):
        assert TimeWindowCondition(9, 17).kind is ConditionKind.TIME_WINDOW

    @pytest.mark.parametrize("hour,expected", [(8, False), (9, True), (16, True), (17, False)])
    def test_daytime_window(self, at_hour, hour, expected):
        assert evaluate(TimeWindowCondition(9, 17), at_hour(hour)) is expected

    @pytest.mark.parametrize("hour,expected", [(21, False), (22, True), (23, True), (0, True), (5, True), (6, False)])
    def test_window_spanning_midnight(self, at_hour, hour, expected):
        assert evaluate(TimeWindowCondition(22, 6), at_hour(hour)) is expected

    def test_snake_case_context_key(self):
        context = {"current_time": datetime(2024, 1, 1, 10)}
        assert evaluate(TimeWindowCondition(9, 17), context)

    def test_defaults_to_now(self):
        hour = datetime.now().hour
        assert evaluate(TimeWindowCondition(hour, (hour + 1) % 24), None)


class TestIPAllowListCondition:
    """Test cases for the static address set."""

    def test_member_address(self):
        assert evaluate(IPAllowListCondition(allowed_ips=["10.0.0.1"]), {"ip": "10.0.0.1"})

    def test_other_address(self):
        assert not evaluate(IPAllowListCondition(allowed_ips=["10.0.0.1"]), {"ip": "10.0.0.2"})

    @pytest.mark.parametrize("context", [None, {}, {"ip": ""}])
    def test_fails_closed_without_ip(self, context):
        assert not evaluate(IPAllowListCondition(allowed_ips=["10.0.0.1"]), context)


class TestIPFilterCondition:
    """Test cases for the allow/block address and subnet filter."""

    def test_no_lists_allows_any_address(self):
        assert evaluate(IPFilterCondition(), {"ip": "203.0.113.9"})

    def test_fails_closed_without_ip(self):
        assert not evaluate(IPFilterCondition(), {})

    def test_fails_closed_on_unparseable_ip(self):
        assert not evaluate(IPFilterCondition(), {"ip": "not-an-ip"})

    def test_blocked_ip(self):
        condition = IPFilterCondition(allowed_ips=["10.0.0.1"], blocked_ips=["10.0.0.1"])
        assert not evaluate(condition, {"ip": "10.0.0.1"})

    def test_blocked_subnet_beats_allowed_ip(self):
        condition = IPFilterCondition(allowed_ips=["10.0.0.7"], blocked_subnets=["10.0.0.0/24"])
        assert not evaluate(condition, {"ip": "10.0.0.7"})

    def test_block_only_allows_everything_else(self):
        condition = IPFilterCondition(blocked_subnets=["10.0.0.0/24"])
        assert evaluate(condition, {"ip": "192.168.1.1"})

    def test_allowed_subnet(self):
        condition = IPFilterCondition(allowed_subnets=["192.168.0.0/16"])

        assert evaluate(condition, {"ip": "192.168.44.2"})
        assert not evaluate(condition, {"ip": "172.16.0.1"})

    def test_allowed_ip_outside_subnets(self):
        condition = IPFilterCondition(allowed_ips=["8.8.8.8"], allowed_subnets=["192.168.0.0/16"])
        assert evaluate(condition, {"ip": "8.8.8.8"})

    def test_address_family_must_match(self):
        condition = IPFilterCondition(allowed_subnets=["::/0"])

        assert evaluate(condition, {"ip": "2001:db8::1"})
        assert not evaluate(condition, {"ip": "10.0.0.1"})

    def test_subnet_host_bits_are_ignored(self):
        condition = IPFilterCondition(allowed_subnets=["10.1.2.3/8"])

        assert condition.allowed_subnets == (ip_network("10.0.0.0/8"),)
        assert evaluate(condition, {"ip": "10.200.0.1"})

    def test_invalid_subnet_is_rejected(self):
        with pytest.raises(InvalidConditionError, match="Invalid subnet"):
            IPFilterCondition(blocked_subnets=["10.0.0.0/99"])

    def test_conditions_are_hashable(self):
        condition = IPFilterCondition(allowed_ips=["1.1.1.1"], allowed_subnets=["10.0.0.0/8"])
        assert len({condition, IPFilterCondition(allowed_ips=["1.1.1.1"], allowed_subnets=["10.0.0.0/8"])}) == 1


class TestCheckConditions:
    """Test cases for ANDing conditions."""

    def test_empty_conditions_pass(self):
        assert check_conditions([], "u1", PERMISSION, RESOURCE, None)

    def test_one_false_condition_fails_all(self, at_hour):
        always = IPFilterCondition()
        never = IPAllowListCondition(allowed_ips=[])
        context = at_hour(10, ip="10.0.0.1")

        assert check_conditions([always], "u1", PERMISSION, RESOURCE, context)
        assert not check_conditions([always, never], "u1", PERMISSION, RESOURCE, context)

    def test_unknown_condition_fails_closed(self):
        class Custom:
            kind = "custom"

        assert not evaluate(Custom(), {"ip": "10.0.0.1"})
