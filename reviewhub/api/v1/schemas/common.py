"""
Result envelope schema shared by every endpoint
"""
from typing import Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, Field

from reviewhub.core.result import MessageLevel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope for every API response.

    Attributes:
        success: Whether the operation succeeded
        message: [text, level] where level is success, warn or error
        data: Operation payload, if any
    """

    success: bool = Field(..., description="Whether the operation succeeded")
    message: Tuple[str, MessageLevel] = Field(..., description="Message text and level")
    data: Optional[T] = Field(None, description="Operation payload")
