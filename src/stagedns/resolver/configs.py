"""Resolver configuration models.

See Also:
    [Resolver][stagedns.resolver.Resolver]: The class that consumes these
        configurations.
"""

from __future__ import annotations

import ipaddress
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from stagedns.core.exceptions import ConfigurationError
from stagedns.core.yaml import load_yaml
from stagedns.models import LookupOptions


class LookupOptionsConfig(BaseModel):
    """Pass-through options for the system resolver stages.

    The address family is deliberately absent: the resolver sets it per
    stage. Values are the integer ``socket`` constants (e.g. ``1`` for
    ``SOCK_STREAM``); ``0`` means unrestricted.
    """

    type: int = Field(default=0, ge=0, description="Socket type filter")
    proto: int = Field(default=0, ge=0, description="Protocol filter")
    flags: int = Field(default=0, ge=0, description="getaddrinfo AI_* flags")

    def to_options(self) -> LookupOptions:
        return LookupOptions(type=self.type, proto=self.proto, flags=self.flags)


class ResolverConfig(BaseModel):
    """Timeouts and collaborator settings for the staged resolver.

    Note:
        ``stage_timeout`` bounds each stage on its own, so a slow system
        resolver still leaves room for the next stage. ``deadline`` bounds
        the whole call; when it expires the resolution fails as if the last
        stage had failed.
    """

    stage_timeout: float = Field(
        default=5.0, gt=0.0, le=120.0, description="Per-stage lookup timeout (seconds)"
    )
    deadline: float | None = Field(
        default=None, gt=0.0, description="Whole-call timeout (seconds), None to disable"
    )
    nameservers: list[str] | None = Field(
        default=None,
        description="Nameserver IPs for the authoritative AAAA stage (default: system config)",
    )
    lookup: LookupOptionsConfig = Field(default_factory=LookupOptionsConfig)
    json_logs: bool = Field(default=False, description="Emit resolver logs as JSON")

    @field_validator("nameservers")
    @classmethod
    def validate_nameservers(cls, v: list[str] | None) -> list[str] | None:
        """Require nameservers to be IP literals; an empty list means system config."""
        if not v:
            return None
        for ns in v:
            try:
                ipaddress.ip_address(ns)
            except ValueError as e:
                raise ValueError(f"nameserver must be an IP address, got {ns!r}") from e
        return v

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> ResolverConfig:
        """Validate a configuration mapping.

        Raises:
            ConfigurationError: If the mapping does not match the schema.
        """
        try:
            return cls.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"invalid resolver configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str) -> ResolverConfig:
        """Load the configuration from a YAML file.

        A ``resolver`` section is used when present, so the same file can
        also carry database settings; otherwise the whole file is the
        resolver section.
        """
        data = load_yaml(config_path)
        section = data.get("resolver", data)
        if not isinstance(section, dict):
            raise ConfigurationError(f"'resolver' section in {config_path} must be a mapping")
        return cls.from_dict(section)
