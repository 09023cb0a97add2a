"""Export routes — download or preview the IoC collection as TXT, JSON or CSV."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from ...config import IoCConsoleConfig
from ...dependencies import get_app_config, get_current_user, get_repository
from ...export.renderer import export_filename, media_type, render, summarize
from ...models.user import User
from ...repository.base import IoCRepository
from ...services.query import filter_iocs

router = APIRouter(prefix="/export", tags=["export"])


async def _collect(
    repository: IoCRepository,
    ioc_type: str | None,
    severity: str | None,
    status: str | None,
):
    iocs = await repository.list()
    return filter_iocs(iocs, ioc_type=ioc_type, severity=severity, status=status)


@router.get("/{fmt}")
async def download_export(
    fmt: str,
    ioc_type: str | None = Query(None, alias="type"),
    severity: str | None = None,
    status: str | None = None,
    repository: IoCRepository = Depends(get_repository),
    config: IoCConsoleConfig = Depends(get_app_config),
    current_user: User = Depends(get_current_user),
):
    """Download the export file. Unknown formats are rejected with 400."""
    iocs = await _collect(repository, ioc_type, severity, status)
    generated = datetime.now(timezone.utc)
    content = render(fmt, iocs, generated=generated)
    filename = export_filename(fmt, generated, prefix=config.export_filename_prefix)
    return Response(
        content=content,
        media_type=f"{media_type(fmt)}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{fmt}/preview")
async def preview_export(
    fmt: str,
    ioc_type: str | None = Query(None, alias="type"),
    severity: str | None = None,
    status: str | None = None,
    repository: IoCRepository = Depends(get_repository),
    config: IoCConsoleConfig = Depends(get_app_config),
    current_user: User = Depends(get_current_user),
):
    """Rendered content plus the counts shown beside an export preview."""
    iocs = await _collect(repository, ioc_type, severity, status)
    generated = datetime.now(timezone.utc)
    content = render(fmt, iocs, generated=generated)
    return {
        "format": fmt,
        "filename": export_filename(fmt, generated, prefix=config.export_filename_prefix),
        "generated": generated.isoformat(),
        "summary": summarize(iocs),
        "content": content,
    }
