"""
Rendering facade results as HTTP responses
"""
from typing import Any, Optional, Type

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, TypeAdapter

from reviewhub.core.result import Result, ResultError

# HTTP status for each failure reason; anything unmapped is a bad request
ERROR_STATUS = {
    ResultError.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ResultError.CONFLICT: status.HTTP_409_CONFLICT,
    ResultError.NO_CHANGES: status.HTTP_400_BAD_REQUEST,
    ResultError.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
}


def envelope(
    success: bool,
    message: Any,
    data: Any = None,
    schema: Optional[Any] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Build an envelope response, projecting data through schema.

    Projection drops back-references, so cyclic graphs serialize as trees.
    """
    payload = None
    if data is not None and schema is not None:
        adapter = TypeAdapter(schema)
        payload = adapter.dump_python(adapter.validate_python(data), mode="json")
    return JSONResponse(
        content={"success": success, "message": list(message), "data": payload},
        status_code=status_code,
    )


def render(
    result: Result,
    schema: Optional[Type[BaseModel]] = None,
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Render a Result, picking the status code from its failure reason."""
    if result.success:
        status_code = success_status
    else:
        status_code = ERROR_STATUS.get(result.error, status.HTTP_400_BAD_REQUEST)
    return envelope(result.success, result.message, result.data, schema, status_code)


def missing_updates_message(fields) -> str:
    """Message for a PATCH body that sets no field."""
    return "At least one value must be supplied: " + ", ".join(f"'{field}'" for field in fields)
