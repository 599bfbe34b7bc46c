"""
Uniform result envelope returned by every facade operation.

Expected domain outcomes (not found, duplicates, no-op updates, bad
credentials) are returned as a failed Result instead of being raised.
"""
from enum import Enum
from typing import Any, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

MessageLevel = Literal["success", "warn", "error"]


class ResultError(str, Enum):
    """Reason a Result failed, used by the HTTP layer to pick a status code."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    NO_CHANGES = "no_changes"
    INVALID_CREDENTIALS = "invalid_credentials"


class Result(BaseModel):
    """
    Outcome of a facade operation.

    Attributes:
        success: Whether the operation did what was asked
        message: (text, level) pair, level is one of success/warn/error
        data: Payload, may be a row dict or an assembled (cyclic) graph
        error: Failure reason, never serialized to clients
    """

    success: bool
    message: Tuple[str, MessageLevel]
    data: Any = None
    error: Optional[ResultError] = Field(None, exclude=True)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def ok(cls, text: str, data: Any = None) -> "Result":
        return cls(success=True, message=(text, "success"), data=data)

    @classmethod
    def fail(
        cls,
        text: str,
        error: Optional[ResultError] = None,
        data: Any = None,
        level: MessageLevel = "warn",
    ) -> "Result":
        return cls(success=False, message=(text, level), data=data, error=error)
