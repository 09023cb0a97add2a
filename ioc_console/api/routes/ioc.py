"""IoC routes — list with filters and sorting, CRUD."""

from fastapi import APIRouter, Depends, Query, status

from ...dependencies import get_current_user, get_repository
from ...models.ioc import IoCCreate, IoCUpdate
from ...models.user import User
from ...repository.base import IoCRepository
from ...services.query import filter_iocs, sort_iocs
from ...utils.exceptions import NotFoundError
from ...utils.logging import get_logger

logger = get_logger("api.ioc")

router = APIRouter(prefix="/ioc", tags=["ioc"])


@router.get("/")
async def list_iocs(
    ioc_type: str | None = Query(None, alias="type"),
    severity: str | None = None,
    status_filter: str | None = Query(None, alias="status"),
    search: str | None = Query(None, max_length=512),
    sort_by: str = "date_reported",
    order: str = "desc",
    repository: IoCRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """List IoCs, optionally filtered and sorted."""
    all_iocs = await repository.list()
    matched = filter_iocs(
        all_iocs,
        ioc_type=ioc_type,
        severity=severity,
        status=status_filter,
        search=search,
    )
    ordered = sort_iocs(matched, sort_by=sort_by, order=order)
    return {
        "items": [ioc.to_wire() for ioc in ordered],
        "matched": len(ordered),
        "total": len(all_iocs),
    }


@router.get("/{ioc_id}")
async def get_ioc(
    ioc_id: str,
    repository: IoCRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """Get a single IoC by ID."""
    ioc = await repository.get_by_id(ioc_id)
    if ioc is None:
        raise NotFoundError("IoC", ioc_id)
    return ioc.to_wire()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_ioc(
    body: IoCCreate,
    repository: IoCRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """Report a new IoC. It always starts in ``pending`` status."""
    ioc = await repository.create(body)
    logger.info("ioc_reported", ioc_id=ioc.id, by=current_user.username)
    return ioc.to_wire()


@router.patch("/{ioc_id}")
async def update_ioc(
    ioc_id: str,
    body: IoCUpdate,
    repository: IoCRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """Partially update an IoC, typically a status change."""
    ioc = await repository.update(ioc_id, body)
    if ioc is None:
        raise NotFoundError("IoC", ioc_id)
    return ioc.to_wire()


@router.delete("/{ioc_id}")
async def delete_ioc(
    ioc_id: str,
    repository: IoCRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """Delete an IoC."""
    if not await repository.delete(ioc_id):
        raise NotFoundError("IoC", ioc_id)
    return {"deleted": ioc_id}
