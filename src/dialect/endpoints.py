"""Endpoint selection for the HTTP dialect converter.

A conversion request goes either to a single override URL or, when no
override is set, round-robin across a pool of ``host:port`` services.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from src.utils.constants import CONVERT_API_PATH, ENDPOINT_SEPARATOR


def parse_endpoint_pool(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a semicolon-delimited ``host:port`` list into an endpoint pool.

    Empty or missing configuration yields an empty pool. Blank segments
    (e.g. a trailing ``;``) are dropped.
    """
    if not raw:
        return ()
    return tuple(
        part.strip() for part in raw.split(ENDPOINT_SEPARATOR) if part.strip()
    )


def pool_endpoint_url(endpoint: str) -> str:
    """Build the conversion URL for a pool entry."""
    return f"http://{endpoint}{CONVERT_API_PATH}"


class RotationCursor:
    """Shared round-robin counter.

    Every call advances the counter, whatever the outcome of the request
    that used it. Concurrent callers may interleave; each still gets an
    index inside ``[0, size)``.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def next_index(self, size: int) -> int:
        if size < 1:
            raise ValueError(f"pool size must be positive, got {size}")
        with self._lock:
            current = self._value
            self._value += 1
        return current % size

    @property
    def value(self) -> int:
        return self._value


@dataclass(frozen=True)
class NoEndpoint:
    """Neither an override URL nor a pool is configured."""


@dataclass(frozen=True)
class FixedEndpoint:
    """Single override URL; one attempt, no failover."""

    url: str


@dataclass(frozen=True)
class PoolEndpoints:
    """Round-robin pool with sequential failover."""

    endpoints: Tuple[str, ...]


EndpointSelection = Union[NoEndpoint, FixedEndpoint, PoolEndpoints]


def resolve_selection(
    override_url: Optional[str], pool: Tuple[str, ...]
) -> EndpointSelection:
    """Pick the endpoint mode for one request. The override wins over the pool."""
    if override_url:
        return FixedEndpoint(override_url)
    if pool:
        return PoolEndpoints(pool)
    return NoEndpoint()
