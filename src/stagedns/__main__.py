"""CLI entry point for diagnosing hostname resolution.

Resolves one or more hostnames through the staged resolver and prints the
address each connection would use, or why none could be found.

Examples:
    ```bash
    python -m stagedns db.example.com
    python -m stagedns db.example.com cache.example.com --deadline 10
    python -m stagedns db.example.com --config config/stagedns.yaml --log-level DEBUG
    ```
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from stagedns.core.exceptions import ConfigurationError, ResolutionExhaustedError
from stagedns.core.logger import Logger, StructuredFormatter
from stagedns.models import ResolvedAddress
from stagedns.resolver import Resolver, ResolverConfig


logger = Logger("cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="stagedns",
        description="Resolve hostnames with IPv4, IPv6 and authoritative AAAA fallback",
    )

    parser.add_argument("hosts", nargs="+", metavar="HOST", help="Hostname(s) to resolve")

    parser.add_argument(
        "--config",
        type=Path,
        help="Resolver YAML config (a top-level 'resolver' section is honoured)",
    )

    parser.add_argument(
        "--deadline",
        type=float,
        help="Whole-call timeout per host in seconds (overrides the config)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit resolver logs as JSON",
    )

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Install a ``StructuredFormatter`` on the root handler.

    Unifies ``Logger`` output and plain ``logging.getLogger()`` calls from
    the utils layer as ``level name message key=value ...`` on stderr.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def build_config(args: argparse.Namespace) -> ResolverConfig:
    """Load the config file (if any) and apply CLI overrides."""
    config = ResolverConfig.from_yaml(str(args.config)) if args.config else ResolverConfig()
    overrides: dict[str, object] = {}
    if args.deadline is not None:
        overrides["deadline"] = args.deadline
    if args.json:
        overrides["json_logs"] = True
    if overrides:
        config = ResolverConfig.from_dict({**config.model_dump(), **overrides})
    return config


async def resolve_all(resolver: Resolver, hosts: list[str]) -> list[ResolvedAddress | BaseException]:
    """Resolve every host concurrently; failures are returned, not raised."""
    return await asyncio.gather(
        *(resolver.resolve(host) for host in hosts), return_exceptions=True
    )


async def main(argv: list[str] | None = None) -> int:
    """Parse args, resolve each host, and print one line per host."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = build_config(args)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error("config_invalid", error=str(e))
        return 1

    resolver = Resolver(config)
    results = await resolve_all(resolver, args.hosts)

    exit_code = 0
    for host, result in zip(args.hosts, results, strict=True):
        if isinstance(result, ResolvedAddress):
            print(f"{host} {int(result.family)} {result.address}")
        elif isinstance(result, ResolutionExhaustedError):
            print(f"{host} error {result}")
            exit_code = 1
        else:
            raise result
    return exit_code


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    cli()
