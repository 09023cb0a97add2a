"""Filtering and sorting for IoC list views."""

from datetime import datetime
from typing import Iterable, Optional

from ..models.ioc import IoC
from ..utils.exceptions import ValidationError

SORTABLE_FIELDS = (
    "type",
    "value",
    "severity",
    "status",
    "reporter",
    "date_reported",
    "confidence",
    "tlp",
    "source",
)

# Wire names accepted as aliases for sort keys
_SORT_ALIASES = {"dateReported": "date_reported", "ioc_type": "type"}


def filter_iocs(
    iocs: Iterable[IoC],
    ioc_type: Optional[str] = None,
    severity: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> list[IoC]:
    """Exact-match filters plus a case-insensitive search over value, description and reporter."""
    needle = search.strip().lower() if search else ""
    matched = []
    for ioc in iocs:
        if ioc_type and ioc.ioc_type != ioc_type:
            continue
        if severity and ioc.severity != severity:
            continue
        if status and ioc.status != status:
            continue
        if needle and not (
            needle in ioc.value.lower()
            or needle in ioc.description.lower()
            or needle in ioc.reporter.lower()
        ):
            continue
        matched.append(ioc)
    return matched


def _sort_key(field: str):
    attr = "ioc_type" if field == "type" else field

    def key(ioc: IoC):
        value = getattr(ioc, attr)
        # Missing values sort before everything else
        if value is None:
            return (0, "")
        if isinstance(value, datetime):
            return (1, value.timestamp())
        if isinstance(value, str):
            return (1, value.lower())
        return (1, value)

    return key


def sort_iocs(iocs: Iterable[IoC], sort_by: str = "date_reported", order: str = "desc") -> list[IoC]:
    """Stable sort by one field. Raises ValidationError for unknown fields or orders."""
    field = _SORT_ALIASES.get(sort_by, sort_by)
    if field not in SORTABLE_FIELDS:
        raise ValidationError({"sort_by": f"Cannot sort by {sort_by!r}"})
    if order not in ("asc", "desc"):
        raise ValidationError({"order": "Order must be 'asc' or 'desc'"})
    return sorted(iocs, key=_sort_key(field), reverse=order == "desc")
