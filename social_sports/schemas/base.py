"""Shared base for wire models. The backend speaks camelCase JSON."""
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the backend's field names, unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def coerce_id(value: Any) -> Any:
    """Backends hand out numeric and string identifiers interchangeably."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value
