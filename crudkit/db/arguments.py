"""Pydantic models for the argument mappings accepted by ``Crud`` queries."""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderBy(BaseModel):
    column: Optional[str] = None
    order: Literal["asc", "desc"] = "asc"

    @field_validator("order", mode="before")
    @classmethod
    def _default_order(cls, value):
        if not value:
            return "asc"
        return str(value).lower()


class ListFilter(BaseModel):
    search_text: Optional[str] = Field(default=None, alias="searchText")
    model_config = ConfigDict(populate_by_name=True)


class ListArgs(BaseModel):
    limit: Optional[int] = Field(default=None, ge=0)
    offset: Optional[int] = Field(default=None, ge=0)
    order_by: Optional[OrderBy] = Field(default=None, alias="orderBy")
    filter: Optional[ListFilter] = None
    model_config = ConfigDict(populate_by_name=True)


class PageInfo(BaseModel):
    total_count: int = Field(alias="totalCount")
    has_next_page: bool = Field(alias="hasNextPage")
    model_config = ConfigDict(populate_by_name=True)
