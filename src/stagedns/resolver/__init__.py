"""Staged hostname resolution.

See [stagedns.resolver.resolver][] for the algorithm and
[stagedns.resolver.configs][] for its settings.
"""

from .configs import LookupOptionsConfig, ResolverConfig
from .resolver import AaaaLookup, Resolver, SystemLookup, resolve


__all__ = [
    "AaaaLookup",
    "LookupOptionsConfig",
    "Resolver",
    "ResolverConfig",
    "SystemLookup",
    "resolve",
]
