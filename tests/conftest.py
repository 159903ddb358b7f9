"""
Pytest configuration and shared fixtures for stagedns tests.

Provides:
- StubLookups: scripted lookup collaborators that record every call
- Resolver factory wired to the stubs
- Prometheus sample helper for metric deltas
"""

import asyncio
import logging
import socket
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from prometheus_client import REGISTRY

from stagedns.models import AddressFamily, LookupOptions, ResolutionStage
from stagedns.resolver import Resolver, ResolverConfig


Outcome = list[str] | BaseException


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Lookup Stubs
# ============================================================================


def not_found(host: str = "") -> socket.gaierror:
    return socket.gaierror(socket.EAI_NONAME, f"Name or service not known: {host}")


class StubLookups:
    """Scripted system and AAAA lookups keyed by (host, stage).

    Unscripted combinations fail like an unknown name. ``calls`` records
    ``(host, stage, options)`` in call order; ``options`` is ``None`` for the
    AAAA stage.
    """

    def __init__(self, script: dict[str, dict[ResolutionStage, Outcome]] | None = None) -> None:
        self.script = script or {}
        self.calls: list[tuple[str, ResolutionStage, LookupOptions | None]] = []
        self.aaaa_kwargs: list[dict[str, Any]] = []

    def _outcome(self, host: str, stage: ResolutionStage) -> list[str]:
        outcome = self.script.get(host, {}).get(stage, not_found(host))
        if isinstance(outcome, BaseException):
            raise outcome
        return list(outcome)

    async def system_lookup(
        self, host: str, options: LookupOptions, *, timeout: float
    ) -> list[str]:
        stage = (
            ResolutionStage.SYSTEM_IPV4
            if options.family is AddressFamily.IPV4
            else ResolutionStage.SYSTEM_IPV6
        )
        self.calls.append((host, stage, options))
        await asyncio.sleep(0)
        return self._outcome(host, stage)

    async def aaaa_lookup(
        self, host: str, *, timeout: float, nameservers: Sequence[str] | None = None
    ) -> list[str]:
        self.calls.append((host, ResolutionStage.AUTHORITATIVE_IPV6, None))
        self.aaaa_kwargs.append({"timeout": timeout, "nameservers": nameservers})
        await asyncio.sleep(0)
        return self._outcome(host, ResolutionStage.AUTHORITATIVE_IPV6)

    def stages_for(self, host: str) -> list[ResolutionStage]:
        return [stage for h, stage, _ in self.calls if h == host]

    def count(self, stage: ResolutionStage) -> int:
        return sum(1 for _, s, _ in self.calls if s is stage)


@pytest.fixture
def stub_lookups() -> StubLookups:
    return StubLookups()


@pytest.fixture
def make_resolver(stub_lookups: StubLookups) -> Callable[..., Resolver]:
    """Build a Resolver wired to ``stub_lookups``."""

    def factory(**config: Any) -> Resolver:
        return Resolver(
            ResolverConfig(**config),
            system_lookup=stub_lookups.system_lookup,
            aaaa_lookup=stub_lookups.aaaa_lookup,
        )

    return factory


# ============================================================================
# Metrics
# ============================================================================


def sample(name: str, **labels: str) -> float:
    """Current value of a Prometheus sample (0.0 when not yet recorded)."""
    return REGISTRY.get_sample_value(name, labels) or 0.0
