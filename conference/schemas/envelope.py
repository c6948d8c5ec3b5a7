"""Response envelope and pagination schemas shared by every endpoint."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope for all responses, success and failure.

    Callers treat success=false as authoritative regardless of the HTTP status.
    """

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")
    data: T | None = Field(default=None, description="Payload on success")
    error: str | None = Field(default=None, description="Error detail on failure")
    code: int = Field(..., description="HTTP status code mirrored in the body")


class PaginationMeta(BaseModel):
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1, le=100)
    pages: int = Field(..., ge=0)

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        """pages = ceil(total / limit)."""
        return cls(total=total, page=page, limit=limit, pages=math.ceil(total / limit))


class Page(BaseModel, Generic[T]):
    """One page of records plus pagination metadata."""

    data: list[T]
    meta: PaginationMeta


def success_response(message: str = "Success", data: T | None = None, code: int = 200) -> ApiResponse[T]:
    return ApiResponse(success=True, message=message, data=data, code=code)


def error_response(message: str = "Error", error: str | None = None, code: int = 500) -> ApiResponse[None]:
    return ApiResponse(success=False, message=message, error=error, code=code)
