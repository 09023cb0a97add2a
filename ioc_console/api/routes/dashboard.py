"""Dashboard routes — aggregate statistics."""

from fastapi import APIRouter, Depends

from ...config import IoCConsoleConfig
from ...dependencies import get_app_config, get_current_user, get_refresher, get_repository
from ...models.user import User
from ...repository.base import IoCRepository
from ...services.refresher import DashboardRefresher
from ...services.stats import get_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
async def dashboard_stats(
    repository: IoCRepository = Depends(get_repository),
    config: IoCConsoleConfig = Depends(get_app_config),
    current_user: User = Depends(get_current_user),
):
    """Statistics computed from the current collection."""
    stats = await get_dashboard_stats(repository, simulate_latency=config.simulate_latency)
    return stats.to_wire()


@router.get("/snapshot")
async def dashboard_snapshot(
    refresher: DashboardRefresher = Depends(get_refresher),
    current_user: User = Depends(get_current_user),
):
    """Most recent periodically refreshed statistics plus refresher status."""
    stats = refresher.latest
    if stats is None:
        stats = await refresher.refresh()
    return {
        "stats": stats.to_wire(),
        "refresher": refresher.get_status(),
    }
