"""Shared constants for the models layer.

Defines the address family and resolution stage enumerations used across
the resolver, the lookup utilities, and the connection helper. Placing them
here avoids circular dependencies between the models and utils layers.

See Also:
    [stagedns.models.resolution][]: Uses both enums to tag attempts and
        resolved addresses.
    [stagedns.resolver][]: Iterates [ResolutionStage][stagedns.models.constants.ResolutionStage]
        to drive the staged fallback.
"""

from __future__ import annotations

import socket
from enum import IntEnum, StrEnum


class AddressFamily(IntEnum):
    """IP version of a resolved address.

    The integer values match the ``family`` tag handed to the connection
    layer (``4`` or ``6``), not the platform ``socket.AF_*`` constants.

    Attributes:
        IPV4: IPv4 (A records).
        IPV6: IPv6 (AAAA records).
    """

    IPV4 = 4
    IPV6 = 6

    @property
    def socket_family(self) -> socket.AddressFamily:
        """The ``socket.AF_*`` constant used to restrict ``getaddrinfo``."""
        return socket.AF_INET if self is AddressFamily.IPV4 else socket.AF_INET6


class ResolutionStage(StrEnum):
    """Ordered stages of the resolution fallback.

    Iteration order is the order in which stages are tried. Each stage is
    attempted at most once per resolution.

    Attributes:
        SYSTEM_IPV4: Stage A -- system resolver restricted to IPv4.
        SYSTEM_IPV6: Stage B -- system resolver restricted to IPv6.
        AUTHORITATIVE_IPV6: Stage C -- direct AAAA query bypassing the
            system resolver.
    """

    SYSTEM_IPV4 = "system_ipv4"
    SYSTEM_IPV6 = "system_ipv6"
    AUTHORITATIVE_IPV6 = "authoritative_ipv6"

    @property
    def family(self) -> AddressFamily:
        """Address family this stage resolves."""
        if self is ResolutionStage.SYSTEM_IPV4:
            return AddressFamily.IPV4
        return AddressFamily.IPV6

    @property
    def label(self) -> str:
        """Human-readable name used in operator-facing messages."""
        return _STAGE_LABELS[self]


_STAGE_LABELS: dict[ResolutionStage, str] = {
    ResolutionStage.SYSTEM_IPV4: "IPv4",
    ResolutionStage.SYSTEM_IPV6: "IPv6 system",
    ResolutionStage.AUTHORITATIVE_IPV6: "authoritative IPv6",
}
