from typing import Annotated, Generic, TypeVar
from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Notes: trimmed, up to 2000 chars
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=2000)]

class CamelModel(BaseModel):
    """snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T | None = None
    message: str | None = None
    count: int | None = None
