"""Unit tests for the stagedns exception hierarchy.

Tests verify:
- issubclass relationships match the documented tree
- per-stage errors carry host, stage, family and cause
- ResolutionExhaustedError surfaces the latest cause
"""

import socket

import pytest

from stagedns.core.exceptions import (
    AddressUnavailableError,
    ConfigurationError,
    ConnectivityError,
    LookupFailedError,
    ResolutionError,
    ResolutionExhaustedError,
    StageDnsError,
)
from stagedns.models import AddressFamily, FailureChain, ResolutionAttempt, ResolutionStage


# =============================================================================
# Hierarchy Tests
# =============================================================================


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_cls",
        [
            ConfigurationError,
            ResolutionError,
            AddressUnavailableError,
            LookupFailedError,
            ResolutionExhaustedError,
            ConnectivityError,
        ],
    )
    def test_all_inherit_from_base(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, StageDnsError)

    @pytest.mark.parametrize(
        "exc_cls", [AddressUnavailableError, LookupFailedError, ResolutionExhaustedError]
    )
    def test_resolution_errors(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, ResolutionError)

    def test_connectivity_not_resolution(self) -> None:
        assert not issubclass(ConnectivityError, ResolutionError)
        assert not issubclass(ResolutionError, ConnectivityError)


# =============================================================================
# Per-stage Errors
# =============================================================================


class TestAddressUnavailableError:
    def test_fields_and_message(self) -> None:
        err = AddressUnavailableError("db.example.com", ResolutionStage.SYSTEM_IPV6)
        assert err.host == "db.example.com"
        assert err.stage is ResolutionStage.SYSTEM_IPV6
        assert err.family is AddressFamily.IPV6
        assert str(err) == "IPv6 system lookup returned no address for db.example.com"


class TestLookupFailedError:
    def test_keeps_cause(self) -> None:
        cause = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        err = LookupFailedError("db.example.com", ResolutionStage.SYSTEM_IPV4, cause)
        assert err.cause is cause
        assert err.__cause__ is cause
        assert err.family is AddressFamily.IPV4
        assert str(err).startswith("IPv4 lookup failed for db.example.com: ")

    def test_empty_cause_message_uses_type_name(self) -> None:
        err = LookupFailedError("h", ResolutionStage.AUTHORITATIVE_IPV6, TimeoutError())
        assert str(err) == "authoritative IPv6 lookup failed for h: TimeoutError"


# =============================================================================
# Exhaustion
# =============================================================================


class TestResolutionExhaustedError:
    def _error(self, stages: list[ResolutionStage]) -> ResolutionExhaustedError:
        attempts = tuple(
            ResolutionAttempt(stage, error=LookupFailedError("h", stage, OSError(stage.value)))
            for stage in stages
        )
        return ResolutionExhaustedError("h", FailureChain(attempts))

    def test_primary_is_latest_stage(self) -> None:
        err = self._error(list(ResolutionStage))
        assert err.primary is err.chain.errors[-1]
        assert err.__cause__ is err.primary
        assert str(err) == (
            "could not resolve host h; tried IPv4, IPv6 system, and authoritative IPv6: "
            "authoritative IPv6 lookup failed for h: authoritative_ipv6"
        )

    def test_partial_chain_message(self) -> None:
        err = self._error([ResolutionStage.SYSTEM_IPV4, ResolutionStage.SYSTEM_IPV6])
        assert "tried IPv4 and IPv6 system: " in str(err)

    def test_single_stage_message(self) -> None:
        err = self._error([ResolutionStage.SYSTEM_IPV4])
        assert "tried IPv4: " in str(err)
