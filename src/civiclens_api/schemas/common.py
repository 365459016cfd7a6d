"""Pagination shapes shared by list endpoints."""

import math

from pydantic import BaseModel, Field


class PaginationParams(BaseModel):
    """``?page=&page_size=`` for list endpoints, injected with ``Depends()``."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class PaginationMeta(BaseModel):
    total: int = Field(description="Matching items across all pages")
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, *, total: int, page: int, page_size: int) -> "PaginationMeta":
        return cls(total=total, page=page, page_size=page_size, total_pages=math.ceil(total / page_size))
