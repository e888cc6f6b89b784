"""Health checks.

Each check is a coroutine returning a HealthCheckResult. The service runs
every registered check, times it, and folds the results into one report
whose status is the worst individual status. A check that raises is
reported as unhealthy; it never fails the report itself.
"""

from __future__ import annotations

import gc
import sys
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

import structlog


class HealthStatus(StrEnum):
    HEALTHY = "Healthy"
    DEGRADED = "Degraded"
    UNHEALTHY = "Unhealthy"


_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}


@dataclass(frozen=True)
class HealthCheckResult:
    status: HealthStatus
    description: str = ""
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HealthCheckEntry:
    name: str
    status: HealthStatus
    description: str
    duration_ms: float
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HealthReport:
    status: HealthStatus
    total_duration_ms: float
    entries: list[HealthCheckEntry]


HealthCheck = Callable[[], Awaitable[HealthCheckResult]]


class HealthCheckService:
    """Runs named health checks and aggregates their results."""

    def __init__(
        self,
        checks: Mapping[str, HealthCheck] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        self._checks: dict[str, HealthCheck] = dict(checks or {})
        self._logger = logger or structlog.get_logger()

    def add_check(self, name: str, check: HealthCheck) -> None:
        self._checks[name] = check

    @property
    def check_names(self) -> list[str]:
        return list(self._checks)

    async def run(self) -> HealthReport:
        started = time.perf_counter()
        entries = [await self._run_check(name, check) for name, check in self._checks.items()]
        overall = max(
            (entry.status for entry in entries),
            key=_SEVERITY.__getitem__,
            default=HealthStatus.HEALTHY,
        )
        return HealthReport(
            status=overall,
            total_duration_ms=(time.perf_counter() - started) * 1000,
            entries=entries,
        )

    async def _run_check(self, name: str, check: HealthCheck) -> HealthCheckEntry:
        started = time.perf_counter()
        try:
            result = await check()
        except Exception as e:
            self._logger.error("health_check_failed", check=name, error=str(e))
            result = HealthCheckResult(
                status=HealthStatus.UNHEALTHY,
                description=f"Health check raised {type(e).__name__}",
            )
        return HealthCheckEntry(
            name=name,
            status=result.status,
            description=result.description,
            duration_ms=(time.perf_counter() - started) * 1000,
            data=result.data,
        )


async def self_check() -> HealthCheckResult:
    """The process is up and serving requests."""
    return HealthCheckResult(HealthStatus.HEALTHY, "API is running")


def repository_check(count: Callable[[], Awaitable[int]]) -> HealthCheck:
    """Build a check that the user repository answers a count."""

    async def check() -> HealthCheckResult:
        total = await count()
        return HealthCheckResult(
            HealthStatus.HEALTHY,
            "User repository is reachable",
            {"user_count": total},
        )

    return check


def cache_check(stats: Callable[[], Any]) -> HealthCheck:
    """Build a check reporting the cache counters."""

    async def check() -> HealthCheckResult:
        current = stats()
        return HealthCheckResult(
            HealthStatus.HEALTHY,
            "Cache is available",
            {
                "hits": current.hits,
                "misses": current.misses,
                "size": current.size,
                "max_size": current.max_size,
            },
        )

    return check


# Allocated blocks above which the process is reported degraded
MEMORY_BLOCKS_THRESHOLD = 50_000_000


def memory_check(threshold_blocks: int = MEMORY_BLOCKS_THRESHOLD) -> HealthCheck:
    """Build a check of the interpreter's allocation footprint."""

    async def check() -> HealthCheckResult:
        allocated = sys.getallocatedblocks()
        data = {
            "allocated_blocks": allocated,
            "gc_counts": list(gc.get_count()),
            "threshold_blocks": threshold_blocks,
        }
        if allocated >= threshold_blocks:
            return HealthCheckResult(
                HealthStatus.DEGRADED,
                f"Allocated blocks ({allocated}) above threshold",
                data,
            )
        return HealthCheckResult(HealthStatus.HEALTHY, "Memory usage is normal", data)

    return check
