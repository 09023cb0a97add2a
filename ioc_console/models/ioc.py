"""IoC model — Indicators of Compromise and their create/update payloads."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel

IoCType = Literal["ip", "domain", "url", "hash"]
Severity = Literal["low", "medium", "high", "critical"]
Status = Literal["pending", "approved", "rejected"]
TLP = Literal["white", "green", "amber", "red"]

IOC_TYPES: tuple[str, ...] = ("ip", "domain", "url", "hash")
SEVERITIES: tuple[str, ...] = ("low", "medium", "high", "critical")
STATUSES: tuple[str, ...] = ("pending", "approved", "rejected")
TLP_LEVELS: tuple[str, ...] = ("white", "green", "amber", "red")


class IoC(CamelModel):
    """A stored indicator. ``id`` and ``date_reported`` are assigned by the repository."""

    id: str
    ioc_type: IoCType = Field(alias="type")
    value: str
    description: str
    severity: Severity
    source: str
    reporter: str
    reporter_email: str
    date_reported: datetime
    status: Status = "pending"
    tags: list[str] = Field(default_factory=list)
    tlp: TLP = "green"
    confidence: int = 50
    first_seen: Optional[datetime] = None
    last_seen: Optional[datetime] = None
    notes: Optional[str] = None
    references: Optional[list[str]] = None


class IoCCreate(CamelModel):
    """Fields a client may supply when reporting a new indicator.

    ``confidence`` is unbounded here; the 0-100 range is checked together with
    the other field rules so every violation is reported at once.
    """

    ioc_type: IoCType = Field(alias="type")
    value: str
    description: str
    severity: Severity = "medium"
    source: str
    reporter: str
    reporter_email: str
    tags: list[str] = Field(default_factory=list)
    tlp: TLP = "green"
    confidence: int = 50
    first_seen: Optional[datetime] = None
    last_seen: Optional[datetime] = None
    notes: Optional[str] = None
    references: Optional[list[str]] = None


class IoCUpdate(CamelModel):
    """Partial update. Only fields explicitly set are merged into the record."""

    ioc_type: Optional[IoCType] = Field(default=None, alias="type")
    value: Optional[str] = None
    description: Optional[str] = None
    severity: Optional[Severity] = None
    source: Optional[str] = None
    reporter: Optional[str] = None
    reporter_email: Optional[str] = None
    status: Optional[Status] = None
    tags: Optional[list[str]] = None
    tlp: Optional[TLP] = None
    confidence: Optional[int] = None
    first_seen: Optional[datetime] = None
    last_seen: Optional[datetime] = None
    notes: Optional[str] = None
    references: Optional[list[str]] = None
