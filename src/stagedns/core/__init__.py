"""Core layer: errors, structured logging, YAML loading, and metrics.

Depends only on ``stagedns.models`` and is used by ``stagedns.resolver``,
``stagedns.database`` and the CLI.

Attributes:
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][stagedns.core.logger.Logger].
    StageDnsError: Root of the exception hierarchy. See
        [stagedns.core.exceptions][].
    load_yaml: Safe YAML loading. See [load_yaml()][stagedns.core.yaml.load_yaml].
    RESOLUTION_ATTEMPTS, RESOLUTION_DURATION_SECONDS: Prometheus metrics
        recorded by the resolver.
"""

from .exceptions import (
    AddressUnavailableError,
    ConfigurationError,
    ConnectivityError,
    LookupFailedError,
    ResolutionError,
    ResolutionExhaustedError,
    StageDnsError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .metrics import RESOLUTION_ATTEMPTS, RESOLUTION_DURATION_SECONDS
from .yaml import load_yaml


__all__ = [
    "RESOLUTION_ATTEMPTS",
    "RESOLUTION_DURATION_SECONDS",
    "AddressUnavailableError",
    "ConfigurationError",
    "ConnectivityError",
    "Logger",
    "LookupFailedError",
    "ResolutionError",
    "ResolutionExhaustedError",
    "StageDnsError",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
]
