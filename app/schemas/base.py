from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; either is accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordInput(CamelModel):
    """Caller-supplied fields. Unknown and server-managed fields are rejected."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", use_enum_values=True
    )


class RecordResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


def reject_null(value: Any) -> Any:
    """Required fields may be left out of a patch but never cleared."""
    if value is None:
        raise ValueError("may not be null")
    return value
