"""
Pydantic schemas for API request/response models
"""

from reviewhub.api.v1.schemas.business import (
    BusinessCreate,
    BusinessFields,
    BusinessResponse,
    BusinessUpdate,
)
from reviewhub.api.v1.schemas.common import ApiResponse
from reviewhub.api.v1.schemas.photo import PhotoResponse
from reviewhub.api.v1.schemas.review import ReviewCreate, ReviewFields, ReviewResponse, ReviewUpdate
from reviewhub.api.v1.schemas.user import LoginRequest, UserCreate, UserSummary

__all__ = [
    "ApiResponse",
    "BusinessCreate",
    "BusinessFields",
    "BusinessResponse",
    "BusinessUpdate",
    "LoginRequest",
    "PhotoResponse",
    "ReviewCreate",
    "ReviewFields",
    "ReviewResponse",
    "ReviewUpdate",
    "UserCreate",
    "UserSummary",
]
