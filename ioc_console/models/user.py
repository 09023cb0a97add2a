"""User model."""

from datetime import datetime
from typing import Literal

from pydantic import ConfigDict

from .base import CamelModel

Role = Literal["admin", "user"]


class User(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    email: str
    role: Role
    created_at: datetime
