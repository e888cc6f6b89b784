"""Unit tests for health checks."""

from unittest.mock import MagicMock

import pytest
import structlog

from infrastructure.caching import CacheStats
from infrastructure.health import (
    HealthCheckResult,
    HealthCheckService,
    HealthStatus,
    cache_check,
    memory_check,
    repository_check,
    self_check,
)


def returning(status: HealthStatus):
    async def check() -> HealthCheckResult:
        return HealthCheckResult(status, f"{status} check")

    return check


class TestHealthCheckService:
    @pytest.mark.asyncio
    async def test_no_checks_is_healthy(self):
        report = await HealthCheckService().run()

        assert report.status == HealthStatus.HEALTHY
        assert report.entries == []

    @pytest.mark.asyncio
    async def test_worst_status_wins(self):
        service = HealthCheckService(
            {
                "a": returning(HealthStatus.HEALTHY),
                "b": returning(HealthStatus.DEGRADED),
            }
        )

        assert (await service.run()).status == HealthStatus.DEGRADED

        service.add_check("c", returning(HealthStatus.UNHEALTHY))

        assert (await service.run()).status == HealthStatus.UNHEALTHY

    @pytest.mark.asyncio
    async def test_entries_keep_registration_order(self):
        service = HealthCheckService()
        service.add_check("self", self_check)
        service.add_check("other", returning(HealthStatus.HEALTHY))

        report = await service.run()

        assert [entry.name for entry in report.entries] == ["self", "other"]
        assert service.check_names == ["self", "other"]
        assert all(entry.duration_ms >= 0 for entry in report.entries)

    @pytest.mark.asyncio
    async def test_raising_check_is_unhealthy_and_logged(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)

        async def broken() -> HealthCheckResult:
            raise RuntimeError("boom")

        service = HealthCheckService({"broken": broken}, logger=mock_logger)

        report = await service.run()

        assert report.status == HealthStatus.UNHEALTHY
        assert report.entries[0].description == "Health check raised RuntimeError"
        mock_logger.error.assert_called_once_with(
            "health_check_failed", check="broken", error="boom"
        )


class TestChecks:
    @pytest.mark.asyncio
    async def test_self_check(self):
        result = await self_check()

        assert result.status == HealthStatus.HEALTHY
        assert result.description == "API is running"

    @pytest.mark.asyncio
    async def test_repository_check_reports_count(self):
        async def count() -> int:
            return 7

        result = await repository_check(count)()

        assert result.status == HealthStatus.HEALTHY
        assert result.data == {"user_count": 7}

    @pytest.mark.asyncio
    async def test_cache_check_reports_stats(self):
        result = await cache_check(lambda: CacheStats(hits=3, misses=1, size=2, max_size=10))()

        assert result.data == {"hits": 3, "misses": 1, "size": 2, "max_size": 10}

    @pytest.mark.asyncio
    async def test_memory_check_below_threshold(self):
        result = await memory_check(threshold_blocks=10**12)()

        assert result.status == HealthStatus.HEALTHY
        assert result.data["allocated_blocks"] > 0
        assert len(result.data["gc_counts"]) == 3

    @pytest.mark.asyncio
    async def test_memory_check_above_threshold_is_degraded(self):
        result = await memory_check(threshold_blocks=1)()

        assert result.status == HealthStatus.DEGRADED
