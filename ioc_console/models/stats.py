"""Dashboard statistics response shapes."""

from pydantic import Field

from .base import CamelModel
from .ioc import IoC


class ReporterCount(CamelModel):
    name: str
    count: int


class TrendPoint(CamelModel):
    date: str  # YYYY-MM-DD
    count: int


class DashboardStats(CamelModel):
    total_iocs: int = Field(alias="totalIoCs")
    iocs_by_type: dict[str, int] = Field(default_factory=dict)
    iocs_by_severity: dict[str, int] = Field(default_factory=dict)
    iocs_by_status: dict[str, int] = Field(default_factory=dict)
    recent_activity: list[IoC] = Field(default_factory=list)
    top_reporters: list[ReporterCount] = Field(default_factory=list)
    weekly_trend: list[TrendPoint] = Field(default_factory=list)
