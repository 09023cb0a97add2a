"""Dashboard refresher — recomputes statistics on a fixed interval.

The refresh loop is an asyncio task owned by the refresher. ``stop()``
cancels it, so whoever starts a refresher must stop it when it goes away.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from ..models.stats import DashboardStats
from ..repository.base import IoCRepository
from ..utils.logging import get_logger
from .stats import get_dashboard_stats


class DashboardRefresher:
    """Keeps the latest DashboardStats snapshot for polling clients."""

    def __init__(self, repository: IoCRepository, interval_seconds: float = 300) -> None:
        self._repository = repository
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self.running = False
        self.latest: Optional[DashboardStats] = None
        self.last_refreshed: Optional[datetime] = None
        self.refresh_count = 0
        self.logger = get_logger("services.refresher")

    async def start(self) -> None:
        if self.running:
            return
        self.running = True
        await self.refresh()
        self._task = asyncio.create_task(self._poll_loop())
        self.logger.info("dashboard_refresher_started", interval=self._interval)

    async def stop(self) -> None:
        self.running = False
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        self.logger.info("dashboard_refresher_stopped")

    async def refresh(self) -> DashboardStats:
        stats = await get_dashboard_stats(self._repository)
        self.latest = stats
        self.last_refreshed = datetime.now(timezone.utc)
        self.refresh_count += 1
        return stats

    async def _poll_loop(self) -> None:
        while self.running:
            try:
                await asyncio.sleep(self._interval)
                if self.running:
                    await self.refresh()
            except asyncio.CancelledError:
                break
            except Exception as e:
                self.logger.error("dashboard_refresh_error", error=str(e))

    def get_status(self) -> dict:
        return {
            "running": self.running,
            "interval_seconds": self._interval,
            "refresh_count": self.refresh_count,
            "last_refreshed": self.last_refreshed.isoformat() if self.last_refreshed else None,
        }
