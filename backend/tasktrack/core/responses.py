"""Response envelope models.

Success responses for collections and single todos use {"data": ...};
errors use {"error": {...}}.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Standard response envelope for resources.

    Usage:
        @router.get("/todos/{todo_id}")
        async def get_todo(todo: OwnedTodo) -> DataResponse[TodoRead]:
            return DataResponse(data=TodoRead.model_validate(todo))
    """

    data: T


class MessageResponse(BaseModel):
    """Plain acknowledgement body, e.g. {"message": "Logged out"}."""

    message: str


class ErrorDetail(BaseModel):
    """Error detail for response body.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        details: Optional list of field-level errors (for validation).
    """

    code: str
    message: str
    details: list[dict] | None = None


class ErrorResponse(BaseModel):
    """Standard error response envelope.

    Usage in exception handlers:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=ErrorDetail(code=exc.code, message=exc.message)
            ).model_dump(),
        )
    """

    error: ErrorDetail
