"""DNS lookup primitives used by the staged resolver.

Two collaborators, each performing exactly one lookup and reporting the raw
outcome. Neither retries, suppresses errors, or falls back: deciding what a
failure means is the [Resolver][stagedns.resolver.Resolver]'s job.

* [system_lookup][stagedns.utils.dns.system_lookup] -- the platform resolver
  (``socket.getaddrinfo``) restricted to one address family. Used by the
  system IPv4 and system IPv6 stages.
* [resolve_aaaa][stagedns.utils.dns.resolve_aaaa] -- a direct AAAA query via
  ``dnspython``, bypassing ``getaddrinfo`` and whatever caching or
  family-filtering the platform applies. Used by the authoritative stage.

Note:
    Both calls are blocking under the hood and are delegated to threads with
    ``asyncio.to_thread`` so the event loop stays responsive. Each is bounded
    by its own *timeout*.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from collections.abc import Sequence  # noqa: TC003
from typing import TYPE_CHECKING, cast

import dns.exception
import dns.resolver

from stagedns.models import LookupOptions  # noqa: TC001


if TYPE_CHECKING:
    from dns.rdtypes.IN.AAAA import AAAA


logger = logging.getLogger("stagedns.utils.dns")

LOOKUP_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    UnicodeError,
    TimeoutError,
    dns.exception.DNSException,
)
"""Errors a single lookup may raise that mean "this stage failed"."""


def _unique(addresses: list[str]) -> list[str]:
    """Drop duplicates while keeping first-seen order."""
    return list(dict.fromkeys(addresses))


async def system_lookup(
    host: str,
    options: LookupOptions,
    *,
    timeout: float,  # noqa: ASYNC109
) -> list[str]:
    """Resolve *host* through the system resolver.

    ``options.family`` restricts the lookup (``None`` means any family);
    ``type``, ``proto`` and ``flags`` are forwarded to ``getaddrinfo``
    unchanged.

    Args:
        host: Hostname to resolve.
        options: Lookup options, usually with the family set by the resolver.
        timeout: Maximum seconds to wait for the lookup.

    Returns:
        Address literals in resolver order, without duplicates. May be empty.

    Raises:
        socket.gaierror: On resolver errors (NXDOMAIN, no data, ...).
        TimeoutError: If the lookup exceeds *timeout*.
        UnicodeError: If *host* cannot be IDNA-encoded.
    """
    family = options.family.socket_family if options.family is not None else socket.AF_UNSPEC
    logger.debug("system_lookup host=%s family=%s", host, family.name)
    infos = await asyncio.wait_for(
        asyncio.to_thread(
            socket.getaddrinfo,
            host,
            None,
            family,
            options.type,
            options.proto,
            options.flags,
        ),
        timeout=timeout,
    )
    return _unique([str(info[4][0]) for info in infos])


def _query_aaaa(host: str, timeout: float, nameservers: Sequence[str] | None) -> list[str]:
    """Blocking AAAA query; runs in a worker thread."""
    if nameservers:
        resolver = dns.resolver.Resolver(configure=False)
        resolver.nameservers = list(nameservers)
    else:
        resolver = dns.resolver.Resolver()
    resolver.timeout = timeout
    resolver.lifetime = timeout
    resolver.cache = None

    answers = resolver.resolve(host, "AAAA", search=False)
    return _unique([cast("AAAA", rdata).address for rdata in answers])


async def resolve_aaaa(
    host: str,
    *,
    timeout: float,  # noqa: ASYNC109
    nameservers: Sequence[str] | None = None,
) -> list[str]:
    """Query AAAA records for *host* directly, without ``getaddrinfo``.

    Args:
        host: Hostname to query.
        timeout: Resolver timeout and lifetime in seconds.
        nameservers: Nameserver IPs to query instead of the ones listed in
            the system resolver configuration.

    Returns:
        IPv6 address literals in answer order, without duplicates.

    Raises:
        dns.resolver.NXDOMAIN: If the name does not exist.
        dns.resolver.NoAnswer: If the name has no AAAA records.
        dns.exception.Timeout: If no nameserver answered in time.
        dns.exception.DNSException: For any other resolver failure.
    """
    logger.debug("aaaa_query host=%s nameservers=%s", host, nameservers or "system")
    return await asyncio.wait_for(
        asyncio.to_thread(_query_aaaa, host, timeout, nameservers),
        timeout=timeout,
    )
