"""Shared schema building blocks.

This module defines the camelCase base model used by every request and
response schema, and the pagination envelope returned by list endpoints.
"""

import math
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys.

    Input accepts both camelCase and snake_case keys; ORM objects can be
    validated directly through ``from_attributes``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    total: int = Field(description="Total number of matching records.")
    pages: int = Field(description="Number of pages for the given limit.")
    page: int = Field(description="Current page, starting at 1.")
    limit: int = Field(description="Page size.")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(
            total=total,
            pages=math.ceil(total / limit) if limit else 0,
            page=page,
            limit=limit,
        )


class Page(CamelModel, Generic[T]):
    """List envelope: ``{data: [...], pagination: {...}}``."""

    data: List[T]
    pagination: Pagination

    @classmethod
    def of(
        cls,
        item_model: Type[BaseModel],
        items: List[Any],
        total: int,
        page: int,
        limit: int,
    ) -> "Page":
        """Build a page from ORM rows, converting each through ``item_model``."""
        return cls(
            data=[item_model.model_validate(item) for item in items],
            pagination=Pagination.build(total, page, limit),
        )


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    message: str
    code: int
    details: Optional[Any] = None
    errors: Optional[List[Dict[str, Any]]] = None
