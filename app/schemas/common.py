"""Shared schema building blocks: camelCase wire models and the response envelope."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; reads ORM objects directly."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by every endpoint: {success, message, data?}."""

    success: bool = Field(default=True, description="False only on error responses")
    message: str = Field(..., description="Human-readable outcome")
    data: T | None = Field(default=None, description="Payload, when the operation returns one")


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
