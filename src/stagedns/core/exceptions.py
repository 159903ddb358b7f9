"""stagedns exception hierarchy.

Provides typed exceptions for every error category so callers can tell a
per-stage lookup failure apart from total exhaustion, and a resolution
failure apart from a connection failure that happened after resolving.

Exception hierarchy:

```text
StageDnsError (base -- never raised directly)
├── ConfigurationError            -- config validation, missing env, bad YAML
├── ResolutionError               -- hostname resolution failures
│   ├── AddressUnavailableError   -- a stage found no address for its family
│   ├── LookupFailedError         -- a stage failed with a lower-level error
│   └── ResolutionExhaustedError  -- every stage failed
└── ConnectivityError             -- connect failed after a successful resolution
```

Only [ResolutionExhaustedError][stagedns.core.exceptions.ResolutionExhaustedError]
reaches callers of [Resolver.resolve()][stagedns.resolver.Resolver.resolve];
the per-stage errors are recorded in its
[FailureChain][stagedns.models.resolution.FailureChain].
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from stagedns.models import AddressFamily, FailureChain, ResolutionStage


class StageDnsError(Exception):
    """Base exception for all stagedns errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(StageDnsError):
    """Invalid or missing configuration (YAML, env vars, CLI flags)."""


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class ResolutionError(StageDnsError):
    """Base for hostname resolution failures.

    Attributes:
        host: The hostname that failed to resolve.
    """

    def __init__(self, host: str, message: str) -> None:
        super().__init__(message)
        self.host = host


class AddressUnavailableError(ResolutionError):
    """A single stage completed but returned no address for its family.

    Recovered locally by advancing to the next stage.
    """

    def __init__(self, host: str, stage: ResolutionStage) -> None:
        super().__init__(host, f"{stage.label} lookup returned no address for {host}")
        self.stage = stage

    @property
    def family(self) -> AddressFamily:
        return self.stage.family


class LookupFailedError(ResolutionError):
    """A single stage failed with a lower-level resolver or network error.

    The original error is kept as both ``cause`` and ``__cause__`` so
    tracebacks show it. Recovered locally by advancing to the next stage.
    """

    def __init__(self, host: str, stage: ResolutionStage, cause: BaseException) -> None:
        reason = str(cause) or type(cause).__name__
        super().__init__(host, f"{stage.label} lookup failed for {host}: {reason}")
        self.stage = stage
        self.cause = cause
        self.__cause__ = cause

    @property
    def family(self) -> AddressFamily:
        return self.stage.family


class ResolutionExhaustedError(ResolutionError):
    """Every stage failed.

    The message surfaces the latest stage's error (the most specific
    diagnostic); earlier causes stay available through ``chain``.

    Attributes:
        chain: Ordered per-stage failures, earliest first.
    """

    def __init__(self, host: str, chain: FailureChain) -> None:
        tried = [stage.label for stage in chain.stages]
        if len(tried) > 2:
            tried_text = ", ".join(tried[:-1]) + f", and {tried[-1]}"
        else:
            tried_text = " and ".join(tried)
        super().__init__(
            host, f"could not resolve host {host}; tried {tried_text}: {chain.primary}"
        )
        self.chain = chain
        self.__cause__ = chain.primary

    @property
    def primary(self) -> BaseException:
        return self.chain.primary


# ---------------------------------------------------------------------------
# Connectivity
# ---------------------------------------------------------------------------


class ConnectivityError(StageDnsError):
    """Opening a connection to a resolved address failed.

    Raised by the connection helper after resolution succeeded; retrying is
    the caller's decision.
    """
