"""
Base response schemas for standardized API responses.

Every successful response uses the same envelope; list endpoints add
pagination meta. Errors use ErrorResponse (see minibnb.errors).
"""

import math
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginationMeta(BaseModel):
    """Pagination block attached to list responses."""

    total: int = Field(description="Total number of items")
    page: int = Field(description="Current page number", ge=1)
    limit: int = Field(description="Items per page", ge=1)
    totalPages: int = Field(description="Number of pages for this page size")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        return cls(total=total, page=page, limit=limit, totalPages=math.ceil(total / limit))


class ApiResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    success: bool = Field(default=True, description="Operation success status")
    status: str = Field(default="success")
    message: str = Field(default="Success", description="Human-readable message")
    code: int = Field(default=200, description="HTTP status code echoed in the body")
    data: T
    meta: Optional[PaginationMeta] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "status": "success",
                "message": "Success",
                "code": 200,
                "data": {"id": 1},
                "meta": None,
            }
        }
    )


class MessageData(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    """Standard error detail structure."""

    field: Optional[str] = Field(default=None, description="Field that caused the error")
    message: str = Field(description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    success: bool = False
    message: str
    code: str = Field(description="Error code for programmatic handling")
    errors: Optional[List[ErrorDetail]] = None
    details: Optional[dict[str, Any]] = None


def ok(data: Any, meta: Optional[PaginationMeta] = None, message: str = "Success") -> ApiResponse:
    return ApiResponse(data=data, meta=meta, message=message)


def created(data: Any, message: str = "Created") -> ApiResponse:
    return ApiResponse(data=data, message=message, code=201)
