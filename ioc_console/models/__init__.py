"""Pydantic models package."""

from .base import CamelModel
from .user import Role, User
from .ioc import (
    IOC_TYPES,
    SEVERITIES,
    STATUSES,
    TLP_LEVELS,
    IoC,
    IoCCreate,
    IoCType,
    IoCUpdate,
    Severity,
    Status,
    TLP,
)
from .stats import DashboardStats, ReporterCount, TrendPoint
