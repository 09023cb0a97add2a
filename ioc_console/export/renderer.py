"""Export renderer — turns an IoC collection into TXT, JSON or CSV text.

TXT is a bare denylist feed, JSON feeds automated import APIs and CSV is for
spreadsheets. Column order and header names of the CSV are fixed because
downstream appliances parse them positionally.
"""

import csv
import io
import json
from datetime import date, datetime, timezone
from typing import Optional, Sequence

from ..models.ioc import IoC
from ..utils.exceptions import UnsupportedFormatError
from ..utils.logging import get_logger

logger = get_logger("export.renderer")

SUPPORTED_FORMATS: tuple[str, ...] = ("txt", "json", "csv")

CSV_COLUMNS: tuple[str, ...] = (
    "id",
    "type",
    "value",
    "description",
    "severity",
    "source",
    "reporter",
    "reporterEmail",
    "dateReported",
    "status",
    "tags",
    "tlp",
    "confidence",
    "notes",
)

MEDIA_TYPES = {
    "txt": "text/plain",
    "json": "application/json",
    "csv": "text/csv",
}


def _check_format(fmt: str) -> str:
    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(fmt, SUPPORTED_FORMATS)
    return fmt


def _iso(value: datetime) -> str:
    return value.isoformat()


# ── Format renderers ───────────────────────────────────────────────────


def render_txt(iocs: Sequence[IoC], generated: datetime) -> str:
    """Comment header followed by one indicator value per line."""
    lines = [
        "# IoC export",
        f"# Generated: {_iso(generated)}",
        f"# Total IoCs: {len(iocs)}",
        "",
    ]
    lines.extend(ioc.value for ioc in iocs)
    return "\n".join(lines) + "\n"


def render_json(iocs: Sequence[IoC], generated: datetime) -> str:
    """Metadata block plus the full records, pretty-printed with a 2-space indent."""
    document = {
        "metadata": {
            "generated": _iso(generated),
            "total": len(iocs),
            "format": "json",
        },
        "iocs": [ioc.to_wire() for ioc in iocs],
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def _csv_row(ioc: IoC) -> list:
    return [
        ioc.id,
        ioc.ioc_type,
        ioc.value,
        ioc.description,
        ioc.severity,
        ioc.source,
        ioc.reporter,
        ioc.reporter_email,
        _iso(ioc.date_reported),
        ioc.status,
        ";".join(ioc.tags),
        ioc.tlp,
        ioc.confidence,
        ioc.notes or "",
    ]


def render_csv(iocs: Sequence[IoC], generated: Optional[datetime] = None) -> str:
    """Header row plus one row per record.

    Every string field is quoted and embedded quotes are doubled (RFC 4180);
    ``confidence`` is the only bare numeric column.
    """
    buf = io.StringIO()
    header = csv.writer(buf, lineterminator="\n")
    header.writerow(CSV_COLUMNS)
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for ioc in iocs:
        writer.writerow(_csv_row(ioc))
    return buf.getvalue()


_RENDERERS = {
    "txt": render_txt,
    "json": render_json,
    "csv": render_csv,
}


def render(fmt: str, iocs: Sequence[IoC], generated: Optional[datetime] = None) -> str:
    """Render ``iocs`` in ``fmt``. Raises UnsupportedFormatError before any output."""
    _check_format(fmt)
    if generated is None:
        generated = datetime.now(timezone.utc)
    content = _RENDERERS[fmt](iocs, generated)
    logger.info("export_rendered", format=fmt, total=len(iocs), size=len(content))
    return content


# ── Download helpers ───────────────────────────────────────────────────


def export_filename(fmt: str, when: Optional[date] = None, prefix: str = "fortigate_iocs") -> str:
    """``<prefix>_<YYYY-MM-DD>.<fmt>``, dated today (UTC) unless ``when`` is given."""
    _check_format(fmt)
    if when is None:
        when = datetime.now(timezone.utc).date()
    elif isinstance(when, datetime):
        when = when.date()
    return f"{prefix}_{when.isoformat()}.{fmt}"


def media_type(fmt: str) -> str:
    return MEDIA_TYPES[_check_format(fmt)]


def summarize(iocs: Sequence[IoC]) -> dict:
    """Counts shown next to an export preview."""
    return {
        "total": len(iocs),
        "approved": sum(1 for ioc in iocs if ioc.status == "approved"),
        "high_or_critical": sum(1 for ioc in iocs if ioc.severity in ("high", "critical")),
    }
