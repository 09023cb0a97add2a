"""In-memory IoC repository.

Records live in a list owned by the instance; nothing is shared between
instances and nothing survives the process. Records handed to callers are
deep copies, so stored state changes only through ``update``. Every call
yields to the event loop and, when latency simulation is on, sleeps for a
short per-operation delay so clients can exercise their loading states.
"""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

import pydantic

from ..models.ioc import IoC, IoCCreate, IoCUpdate
from ..utils.exceptions import ValidationError
from ..utils.logging import get_logger
from ..utils.validators import collect_ioc_errors
from .base import CreatePayload, IoCRepository, UpdatePayload

logger = get_logger("repository.memory")

# Seconds per operation when latency simulation is enabled
OPERATION_LATENCY = {
    "list": 0.2,
    "get": 0.1,
    "create": 0.3,
    "update": 0.2,
    "delete": 0.2,
}

# Never merged by update()
_IMMUTABLE_FIELDS = {"id", "date_reported", "dateReported"}

# Only these may be cleared to None by update()
_NULLABLE_FIELDS = {"first_seen", "last_seen", "notes", "references"}


def _pydantic_errors(exc: pydantic.ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"]) or "__root__"
        errors.setdefault(loc, error["msg"])
    return errors


class InMemoryIoCRepository(IoCRepository):
    def __init__(
        self,
        initial: Iterable[IoC] = (),
        simulate_latency: bool = False,
    ) -> None:
        self._iocs: list[IoC] = list(initial)
        self._simulate_latency = simulate_latency

    async def _pause(self, operation: str) -> None:
        delay = OPERATION_LATENCY[operation] if self._simulate_latency else 0
        await asyncio.sleep(delay)

    def _index_of(self, ioc_id: str) -> int:
        for i, ioc in enumerate(self._iocs):
            if ioc.id == ioc_id:
                return i
        return -1

    def _new_id(self) -> str:
        while True:
            candidate = uuid.uuid4().hex
            if self._index_of(candidate) == -1:
                return candidate

    async def list(self) -> list[IoC]:
        await self._pause("list")
        return [ioc.model_copy(deep=True) for ioc in self._iocs]

    async def get_by_id(self, ioc_id: str) -> Optional[IoC]:
        await self._pause("get")
        index = self._index_of(ioc_id)
        return self._iocs[index].model_copy(deep=True) if index != -1 else None

    async def create(self, payload: CreatePayload) -> IoC:
        await self._pause("create")

        if not isinstance(payload, IoCCreate):
            try:
                payload = IoCCreate.model_validate(payload)
            except pydantic.ValidationError as exc:
                raise ValidationError(_pydantic_errors(exc)) from exc

        errors = collect_ioc_errors(payload)
        if errors:
            logger.info("ioc_rejected", ioc_type=payload.ioc_type, fields=sorted(errors))
            raise ValidationError(errors)

        notes = payload.notes.strip() if payload.notes else None
        references = [r.strip() for r in payload.references or [] if r.strip()]
        ioc = IoC(
            id=self._new_id(),
            ioc_type=payload.ioc_type,
            value=payload.value.strip(),
            description=payload.description.strip(),
            severity=payload.severity,
            source=payload.source.strip(),
            reporter=payload.reporter.strip(),
            reporter_email=payload.reporter_email.strip(),
            date_reported=datetime.now(timezone.utc),
            status="pending",
            tags=[t.strip() for t in payload.tags if t.strip()],
            tlp=payload.tlp,
            confidence=payload.confidence,
            first_seen=payload.first_seen,
            last_seen=payload.last_seen,
            notes=notes or None,
            references=references or None,
        )
        self._iocs.append(ioc)
        logger.info("ioc_created", ioc_id=ioc.id, ioc_type=ioc.ioc_type, severity=ioc.severity)
        return ioc.model_copy(deep=True)

    async def update(self, ioc_id: str, changes: UpdatePayload) -> Optional[IoC]:
        await self._pause("update")

        index = self._index_of(ioc_id)
        if index == -1:
            return None

        if isinstance(changes, IoCUpdate):
            patch = changes.model_dump(exclude_unset=True)
        else:
            raw = {k: v for k, v in changes.items() if k not in _IMMUTABLE_FIELDS}
            try:
                patch = IoCUpdate.model_validate(raw).model_dump(exclude_unset=True)
            except pydantic.ValidationError as exc:
                raise ValidationError(_pydantic_errors(exc)) from exc
        patch = {k: v for k, v in patch.items() if v is not None or k in _NULLABLE_FIELDS}

        updated = self._iocs[index].model_copy(update=patch)
        self._iocs[index] = updated
        logger.info("ioc_updated", ioc_id=ioc_id, fields=sorted(patch))
        return updated.model_copy(deep=True)

    async def delete(self, ioc_id: str) -> bool:
        await self._pause("delete")
        index = self._index_of(ioc_id)
        if index == -1:
            return False
        del self._iocs[index]
        logger.info("ioc_deleted", ioc_id=ioc_id)
        return True

    def __len__(self) -> int:
        return len(self._iocs)
