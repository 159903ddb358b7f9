"""
Prometheus metrics for hostname resolution.

Module-level metric objects are process-wide singletons (thread-safe, as
provided by ``prometheus_client``). The resolver records one sample per
stage outcome and one duration sample per ``resolve()`` call; exposing
them is left to the embedding application (e.g. via
``prometheus_client.start_http_server`` or its own ``/metrics`` route).

Architecture:
    RESOLUTION_ATTEMPTS:          Counter of stage outcomes, labelled
                                  ``stage`` and ``outcome``.
    RESOLUTION_DURATION_SECONDS:  Histogram of whole-call latency, labelled
                                  by final ``outcome``.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram


OUTCOME_SUCCESS = "success"
OUTCOME_UNAVAILABLE = "unavailable"
OUTCOME_FAILED = "failed"

RESOLUTION_ATTEMPTS = Counter(
    "stagedns_resolution_attempts",
    "Resolution stage outcomes",
    ["stage", "outcome"],
)

# Stages B and C only run on the unhappy path, so the upper buckets matter.
RESOLUTION_DURATION_SECONDS = Histogram(
    "stagedns_resolution_duration_seconds",
    "Duration of a full staged resolution in seconds",
    ["outcome"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30),
)
