r"""stagedns -- staged hostname resolution for database and network clients.

Resolves a hostname to one connectable address by trying the system
resolver for IPv4, then for IPv6, then a direct AAAA query, stopping at the
first stage that answers.

Imports flow strictly downward:

```text
        database           Connection helper (asyncpg)
            |
        resolver           Staged fallback algorithm and its config
         /     \
      core     utils       Errors, logging, YAML, metrics / DNS lookups
         \     /
         models            Pure frozen dataclasses (zero I/O)
```

Note:
    Top-level imports (``from stagedns import Resolver``) use lazy loading
    and resolve on first access, so importing ``stagedns.models`` alone does
    not pull in ``dnspython`` or ``asyncpg``.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("stagedns")

__all__ = [
    "AddressFamily",
    "DatabaseConfig",
    "FailureChain",
    "LookupOptions",
    "ResolutionAttempt",
    "ResolutionExhaustedError",
    "ResolutionStage",
    "ResolvedAddress",
    "Resolver",
    "ResolverConfig",
    "StageDnsError",
    "connect",
    "resolve",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "AddressFamily": ("stagedns.models", "AddressFamily"),
    "FailureChain": ("stagedns.models", "FailureChain"),
    "LookupOptions": ("stagedns.models", "LookupOptions"),
    "ResolutionAttempt": ("stagedns.models", "ResolutionAttempt"),
    "ResolutionStage": ("stagedns.models", "ResolutionStage"),
    "ResolvedAddress": ("stagedns.models", "ResolvedAddress"),
    "ResolutionExhaustedError": ("stagedns.core", "ResolutionExhaustedError"),
    "StageDnsError": ("stagedns.core", "StageDnsError"),
    "Resolver": ("stagedns.resolver", "Resolver"),
    "ResolverConfig": ("stagedns.resolver", "ResolverConfig"),
    "resolve": ("stagedns.resolver", "resolve"),
    "DatabaseConfig": ("stagedns.database", "DatabaseConfig"),
    "connect": ("stagedns.database", "connect"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'stagedns' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
