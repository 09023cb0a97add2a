"""Dashboard statistics — pure aggregation over an IoC collection."""

import asyncio
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence

from ..models.ioc import IoC
from ..models.stats import DashboardStats, ReporterCount, TrendPoint
from ..repository.base import IoCRepository

TOP_REPORTERS_LIMIT = 5
RECENT_ACTIVITY_LIMIT = 10
TREND_DAYS = 7
STATS_LATENCY_SECONDS = 0.3


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def weekly_trend(iocs: Sequence[IoC], today: date) -> list[TrendPoint]:
    """One entry per calendar day for the 7 days ending ``today``, oldest first."""
    per_day = Counter(_utc_date(ioc.date_reported) for ioc in iocs)
    points = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        points.append(TrendPoint(date=day.isoformat(), count=per_day.get(day, 0)))
    return points


def top_reporters(iocs: Sequence[IoC], limit: int = TOP_REPORTERS_LIMIT) -> list[ReporterCount]:
    # Counter keeps first-seen order, and most_common sorts stably
    counts = Counter(ioc.reporter for ioc in iocs)
    return [ReporterCount(name=name, count=count) for name, count in counts.most_common(limit)]


def compute_dashboard_stats(iocs: Sequence[IoC], today: Optional[date] = None) -> DashboardStats:
    """Aggregate counts, top reporters, weekly trend and recent activity.

    Categories with no records are left out of the count mappings. The input
    sequence is not modified.
    """
    if today is None:
        today = datetime.now(timezone.utc).date()

    recent = sorted(iocs, key=lambda ioc: ioc.date_reported.timestamp(), reverse=True)

    return DashboardStats(
        total_iocs=len(iocs),
        iocs_by_type=dict(Counter(ioc.ioc_type for ioc in iocs)),
        iocs_by_severity=dict(Counter(ioc.severity for ioc in iocs)),
        iocs_by_status=dict(Counter(ioc.status for ioc in iocs)),
        recent_activity=recent[:RECENT_ACTIVITY_LIMIT],
        top_reporters=top_reporters(iocs),
        weekly_trend=weekly_trend(iocs, today),
    )


async def get_dashboard_stats(
    repository: IoCRepository,
    simulate_latency: bool = False,
    today: Optional[date] = None,
) -> DashboardStats:
    """Fetch the collection through the repository interface and aggregate it."""
    if simulate_latency:
        await asyncio.sleep(STATS_LATENCY_SECONDS)
    iocs = await repository.list()
    return compute_dashboard_stats(iocs, today=today)
