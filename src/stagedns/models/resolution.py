"""Value types produced and consumed by a single resolution call.

Every type here is ephemeral: it is created during one
[Resolver.resolve()][stagedns.resolver.Resolver.resolve] call and either
handed to the caller or discarded. Nothing is cached or shared between
calls.

All validation happens in ``__post_init__`` so invalid instances never
escape the constructor.

See Also:
    [stagedns.resolver][]: Builds attempts, chains, and resolved addresses.
    [stagedns.core.exceptions.ResolutionExhaustedError][]: Carries a
        [FailureChain][stagedns.models.resolution.FailureChain] on total
        failure.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .constants import AddressFamily, ResolutionStage


@dataclass(frozen=True, slots=True)
class LookupOptions:
    """Options forwarded to the system resolver.

    The resolver owns ``family`` and overrides it for every stage; the
    remaining fields are passed through to ``socket.getaddrinfo``
    untouched.

    Attributes:
        family: Address family override, ``None`` for unrestricted lookups.
        type: Socket type filter (``0`` for any, e.g. ``socket.SOCK_STREAM``).
        proto: Protocol filter (``0`` for any, e.g. ``socket.IPPROTO_TCP``).
        flags: ``AI_*`` flags combined with bitwise OR.

    Examples:
        ```python
        opts = LookupOptions(type=socket.SOCK_STREAM)
        opts.with_family(AddressFamily.IPV6).family  # AddressFamily.IPV6
        opts.with_family(AddressFamily.IPV6).type    # socket.SOCK_STREAM
        ```
    """

    family: AddressFamily | None = None
    type: int = 0
    proto: int = 0
    flags: int = 0

    def __post_init__(self) -> None:
        if self.family is not None:
            object.__setattr__(self, "family", AddressFamily(self.family))
        for name in ("type", "proto", "flags"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    def with_family(self, family: AddressFamily) -> LookupOptions:
        """Return a copy with only ``family`` replaced."""
        return dataclasses.replace(self, family=family)


@dataclass(frozen=True, slots=True)
class ResolvedAddress:
    """The single address produced by a successful resolution.

    Attributes:
        address: IP address literal, used verbatim by the connection layer.
        family: Address family of ``address``.
        stage: Stage that produced the address.
    """

    address: str
    family: AddressFamily
    stage: ResolutionStage

    def __post_init__(self) -> None:
        if not self.address:
            raise ValueError("address must not be empty")
        object.__setattr__(self, "family", AddressFamily(self.family))
        if self.family is not self.stage.family:
            raise ValueError(
                f"family {int(self.family)} does not match stage {self.stage} "
                f"(expects {int(self.stage.family)})"
            )

    def as_tuple(self) -> tuple[str, int]:
        """Return the ``(address, family)`` pair handed to socket openers."""
        return self.address, int(self.family)


@dataclass(frozen=True, slots=True)
class ResolutionAttempt:
    """Outcome of one stage: an address on success, an error on failure.

    Exactly one of ``address`` and ``error`` is set.
    """

    stage: ResolutionStage
    address: str | None = None
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if (self.address is None) == (self.error is None):
            raise ValueError("exactly one of address or error must be set")

    @property
    def family(self) -> AddressFamily:
        return self.stage.family

    @property
    def succeeded(self) -> bool:
        return self.address is not None


@dataclass(frozen=True, slots=True)
class FailureChain:
    """Ordered record of failed attempts, earliest stage first.

    The latest attempt's error is the primary diagnostic: operators reading
    the final message see the most specific failure, while earlier causes
    stay available through ``errors``.
    """

    attempts: tuple[ResolutionAttempt, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "attempts", tuple(self.attempts))
        if not self.attempts:
            raise ValueError("a failure chain needs at least one attempt")
        if any(attempt.succeeded for attempt in self.attempts):
            raise ValueError("a failure chain cannot contain successful attempts")

    @property
    def errors(self) -> tuple[BaseException, ...]:
        """Per-stage causes in stage order."""
        return tuple(a.error for a in self.attempts if a.error is not None)

    @property
    def primary(self) -> BaseException:
        """The latest stage's error."""
        return self.errors[-1]

    @property
    def stages(self) -> tuple[ResolutionStage, ...]:
        return tuple(a.stage for a in self.attempts)

    def __len__(self) -> int:
        return len(self.attempts)
