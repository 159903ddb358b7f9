"""
Staged hostname resolution with IPv4-first, IPv6 and authoritative fallback.

Resolves a hostname to exactly one connectable address by trying three
stages in strict order and stopping at the first that yields an address:

1. ``system_ipv4`` -- system resolver restricted to IPv4. The common path:
   dual-stack and IPv4-only hosts finish here after a single lookup.
2. ``system_ipv6`` -- system resolver restricted to IPv6, for IPv6-only
   managed hosts.
3. ``authoritative_ipv6`` -- direct AAAA query through ``dnspython``, for
   environments whose system resolver cannot reach the zone's nameservers
   or holds stale negative answers.

A stage fails on a lookup error *or* an empty answer; either way the next
stage runs. No stage is retried and no two stages overlap. When every stage
fails, a single
[ResolutionExhaustedError][stagedns.core.exceptions.ResolutionExhaustedError]
is raised whose message carries the latest stage's error, with all
per-stage errors kept in order on its ``chain``.

Examples:
    ```python
    resolver = Resolver(ResolverConfig(stage_timeout=2.0))
    resolved = await resolver.resolve("db.abcdefgh.supabase.co")
    resolved.as_tuple()  # ('2600:1f18::1', 6)
    ```

See Also:
    [stagedns.utils.dns][]: The default lookup collaborators.
    [stagedns.database.connect][]: The connection helper that calls this
        resolver once per new connection.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence  # noqa: TC003
from typing import Protocol

from stagedns.core.exceptions import (
    AddressUnavailableError,
    LookupFailedError,
    ResolutionError,
    ResolutionExhaustedError,
)
from stagedns.core.logger import Logger
from stagedns.core.metrics import (
    OUTCOME_FAILED,
    OUTCOME_SUCCESS,
    OUTCOME_UNAVAILABLE,
    RESOLUTION_ATTEMPTS,
    RESOLUTION_DURATION_SECONDS,
)
from stagedns.models import (
    FailureChain,
    LookupOptions,
    ResolutionAttempt,
    ResolutionStage,
    ResolvedAddress,
)
from stagedns.utils import dns as dns_utils

from .configs import ResolverConfig


class SystemLookup(Protocol):
    """Family-restricted system lookup (stages A and B)."""

    async def __call__(
        self,
        host: str,
        options: LookupOptions,
        *,
        timeout: float,  # noqa: ASYNC109
    ) -> list[str]: ...


class AaaaLookup(Protocol):
    """Direct AAAA record query (stage C)."""

    async def __call__(
        self,
        host: str,
        *,
        timeout: float,  # noqa: ASYNC109
        nameservers: Sequence[str] | None = None,
    ) -> list[str]: ...


class Resolver:
    """Resolve hostnames through the staged IPv4 / IPv6 / AAAA fallback.

    Holds only immutable configuration and the two lookup callables, so a
    single instance can serve any number of concurrent ``resolve()`` calls.

    Args:
        config: Timeouts and nameserver settings. Defaults to
            ``ResolverConfig()``.
        system_lookup: Replacement for
            [system_lookup][stagedns.utils.dns.system_lookup].
        aaaa_lookup: Replacement for
            [resolve_aaaa][stagedns.utils.dns.resolve_aaaa].
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        system_lookup: SystemLookup | None = None,
        aaaa_lookup: AaaaLookup | None = None,
    ) -> None:
        self._config = config or ResolverConfig()
        self._system_lookup: SystemLookup = system_lookup or dns_utils.system_lookup
        self._aaaa_lookup: AaaaLookup = aaaa_lookup or dns_utils.resolve_aaaa
        self._default_options = self._config.lookup.to_options()
        self._logger = Logger("resolver", json_output=self._config.json_logs)

    @property
    def config(self) -> ResolverConfig:
        """The resolver configuration (read-only)."""
        return self._config

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    async def _lookup(
        self, stage: ResolutionStage, host: str, options: LookupOptions
    ) -> list[str]:
        timeout = self._config.stage_timeout
        if stage is ResolutionStage.AUTHORITATIVE_IPV6:
            return await self._aaaa_lookup(
                host, timeout=timeout, nameservers=self._config.nameservers
            )
        return await self._system_lookup(host, options.with_family(stage.family), timeout=timeout)

    async def _attempt(
        self, stage: ResolutionStage, host: str, options: LookupOptions
    ) -> ResolutionAttempt:
        """Run one stage and turn its outcome into an attempt record.

        Lookup errors and empty answers become failed attempts; anything
        else (including cancellation) propagates.
        """
        error: ResolutionError
        try:
            addresses = await self._lookup(stage, host, options)
        except dns_utils.LOOKUP_ERRORS as e:
            error = LookupFailedError(host, stage, e)
            outcome = OUTCOME_FAILED
        else:
            if addresses:
                RESOLUTION_ATTEMPTS.labels(stage=stage.value, outcome=OUTCOME_SUCCESS).inc()
                return ResolutionAttempt(stage=stage, address=addresses[0])
            error = AddressUnavailableError(host, stage)
            outcome = OUTCOME_UNAVAILABLE

        RESOLUTION_ATTEMPTS.labels(stage=stage.value, outcome=outcome).inc()
        self._logger.warning("stage_failed", host=host, stage=stage.value, error=str(error))
        return ResolutionAttempt(stage=stage, error=error)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def resolve(
        self,
        host: str,
        options: LookupOptions | None = None,
        *,
        deadline: float | None = None,
    ) -> ResolvedAddress:
        """Resolve *host* to a single address.

        Args:
            host: Hostname, passed verbatim to every stage.
            options: System-resolver options. The family is overridden per
                stage; other fields pass through. Defaults to the configured
                ``lookup`` options.
            deadline: Whole-call timeout in seconds. Defaults to
                ``config.deadline`` (``None`` disables it).

        Returns:
            The first address found, tagged with its family and stage.

        Raises:
            ResolutionExhaustedError: If every stage failed, or the deadline
                expired before a stage succeeded.
        """
        options = options if options is not None else self._default_options
        limit = deadline if deadline is not None else self._config.deadline
        attempts: list[ResolutionAttempt] = []
        stage = ResolutionStage.SYSTEM_IPV4
        started = time.perf_counter()

        try:
            async with asyncio.timeout(limit):
                for stage in ResolutionStage:
                    attempt = await self._attempt(stage, host, options)
                    if attempt.address is not None:
                        resolved = ResolvedAddress(attempt.address, stage.family, stage)
                        RESOLUTION_DURATION_SECONDS.labels(outcome=OUTCOME_SUCCESS).observe(
                            time.perf_counter() - started
                        )
                        self._logger.debug(
                            "resolution_succeeded",
                            host=host,
                            address=resolved.address,
                            family=int(resolved.family),
                            stage=stage.value,
                        )
                        return resolved
                    attempts.append(attempt)
        except TimeoutError as e:
            expired = TimeoutError(f"resolution deadline of {limit}s exceeded")
            expired.__cause__ = e
            error = LookupFailedError(host, stage, expired)
            self._logger.warning("deadline_exceeded", host=host, stage=stage.value, deadline=limit)
            attempts.append(ResolutionAttempt(stage=stage, error=error))

        chain = FailureChain(tuple(attempts))
        RESOLUTION_DURATION_SECONDS.labels(outcome=OUTCOME_FAILED).observe(
            time.perf_counter() - started
        )
        self._logger.error(
            "resolution_exhausted",
            host=host,
            stages=",".join(s.value for s in chain.stages),
            error=str(chain.primary),
        )
        raise ResolutionExhaustedError(host, chain) from chain.primary

    def __repr__(self) -> str:
        return (
            f"Resolver(stage_timeout={self._config.stage_timeout}, "
            f"deadline={self._config.deadline}, nameservers={self._config.nameservers})"
        )


async def resolve(
    host: str,
    options: LookupOptions | None = None,
    *,
    config: ResolverConfig | None = None,
) -> ResolvedAddress:
    """Resolve *host* once with a freshly built [Resolver][stagedns.resolver.Resolver]."""
    return await Resolver(config).resolve(host, options)
