"""Shared pydantic base for models exchanged with clients and exports."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """JSON-safe dict with camelCase keys, ISO-8601 dates and unset optionals dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
