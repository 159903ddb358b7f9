"""Low-level DNS lookups.

Depends only on [stagedns.models][]. Provides the two lookup collaborators
consumed by [stagedns.resolver][]:

Attributes:
    dns: ``system_lookup`` (``getaddrinfo`` restricted to one family) and
        ``resolve_aaaa`` (direct AAAA query via ``dnspython``).

Note:
    The utils layer has **zero** imports from ``stagedns.core`` and logs
    through plain ``logging.getLogger()`` calls, which the CLI's
    ``StructuredFormatter`` renders alongside structured output.
"""
