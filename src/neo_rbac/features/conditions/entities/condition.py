"""Condition entities for neo-rbac.

Conditions are runtime predicates attached to a grant. They form a closed set
of variants, each tagged with a ``ConditionKind`` and carrying its own
parameters. Evaluation lives in ``services.condition_evaluator``.
"""

from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Network, IPv6Network, ip_network
from typing import FrozenSet, Iterable, Tuple, Union

from ....core.exceptions import InvalidConditionError

IPNetwork = Union[IPv4Network, IPv6Network]


class ConditionKind(str, Enum):
    """Built-in condition variants."""

    TIME_WINDOW = "time_window"
    IP_ALLOW_LIST = "ip_allow_list"
    IP_FILTER = "ip_filter"


@dataclass(frozen=True)
class TimeWindowCondition:
    """Grant applies only between ``start_hour`` (inclusive) and ``end_hour`` (exclusive).

    A window whose start is after its end spans midnight.
    """

    start_hour: int
    end_hour: int
    kind: ConditionKind = field(default=ConditionKind.TIME_WINDOW, init=False)

    def __post_init__(self):
        for name, hour in (("start_hour", self.start_hour), ("end_hour", self.end_hour)):
            if not isinstance(hour, int) or isinstance(hour, bool) or not 0 <= hour <= 23:
                raise InvalidConditionError(
                    "Hours must be between 0 and 23",
                    details={name: hour}
                )

    @property
    def spans_midnight(self) -> bool:
        return self.start_hour > self.end_hour


@dataclass(frozen=True)
class IPAllowListCondition:
    """Grant applies only to requests from one of a static set of addresses."""

    allowed_ips: FrozenSet[str]
    kind: ConditionKind = field(default=ConditionKind.IP_ALLOW_LIST, init=False)

    def __post_init__(self):
        object.__setattr__(self, "allowed_ips", frozenset(self.allowed_ips))


def _parse_subnets(subnets: Iterable[Union[str, IPNetwork]]) -> Tuple[IPNetwork, ...]:
    parsed = []
    for subnet in subnets:
        if isinstance(subnet, (IPv4Network, IPv6Network)):
            parsed.append(subnet)
            continue
        try:
            parsed.append(ip_network(subnet, strict=False))
        except ValueError as e:
            raise InvalidConditionError(
                f"Invalid subnet: {subnet}",
                details={"subnet": subnet, "reason": str(e)}
            ) from e
    return tuple(parsed)


@dataclass(frozen=True)
class IPFilterCondition:
    """Allow and block lists of addresses and CIDR subnets.

    Blocks always win. With no allow entries configured every address that
    is not blocked passes.
    """

    allowed_ips: FrozenSet[str] = frozenset()
    allowed_subnets: Tuple[IPNetwork, ...] = ()
    blocked_ips: FrozenSet[str] = frozenset()
    blocked_subnets: Tuple[IPNetwork, ...] = ()
    kind: ConditionKind = field(default=ConditionKind.IP_FILTER, init=False)

    def __post_init__(self):
        object.__setattr__(self, "allowed_ips", frozenset(self.allowed_ips))
        object.__setattr__(self, "blocked_ips", frozenset(self.blocked_ips))
        object.__setattr__(self, "allowed_subnets", _parse_subnets(self.allowed_subnets))
        object.__setattr__(self, "blocked_subnets", _parse_subnets(self.blocked_subnets))

    @property
    def has_allow_list(self) -> bool:
        return bool(self.allowed_ips) or bool(self.allowed_subnets)


Condition = Union[TimeWindowCondition, IPAllowListCondition, IPFilterCondition]
