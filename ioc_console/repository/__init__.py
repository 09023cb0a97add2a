"""IoC storage: abstract repository interface and the in-memory implementation."""

from .base import IoCRepository
from .memory import InMemoryIoCRepository
from .seed import demo_iocs
