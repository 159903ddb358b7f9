"""Pure frozen dataclasses and enums with zero I/O for hostname resolution.

The models layer is the foundation of the package. It has **no dependencies**
on any other stagedns package -- only the Python standard library. Every
model uses ``@dataclass(frozen=True, slots=True)``.

Attributes:
    AddressFamily: IP version tag (4 or 6) handed to the connection layer.
    ResolutionStage: Ordered fallback stages (system IPv4, system IPv6,
        authoritative IPv6).
    LookupOptions: Explicit system-resolver options with a resolver-owned
        family override.
    ResolutionAttempt: Outcome of a single stage.
    ResolvedAddress: Final ``(address, family)`` result of a resolution.
    FailureChain: Ordered per-stage causes of a failed resolution.
"""

from .constants import AddressFamily, ResolutionStage
from .resolution import FailureChain, LookupOptions, ResolutionAttempt, ResolvedAddress


__all__ = [
    "AddressFamily",
    "FailureChain",
    "LookupOptions",
    "ResolutionAttempt",
    "ResolutionStage",
    "ResolvedAddress",
]
