"""
Review Pydantic schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reviewhub.api.v1.schemas.user import UserSummary
from reviewhub.models.review import MAX_SCORE, MIN_SCORE


class ReviewCreate(BaseModel):
    """
    Schema for creating a new review.

    Attributes:
        business_id: ID of the business being reviewed
        user_id: ID of the author (optional)
        score: Score between 0 and 10
        text: Review text, 25 to 300 characters after trimming
    """

    business_id: int = Field(..., description="ID of the business being reviewed")
    user_id: Optional[int] = Field(None, description="ID of the reviewing user")
    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE, description="Score (0-10)")
    text: str = Field(..., min_length=25, max_length=300, description="Review text")

    model_config = ConfigDict(str_strip_whitespace=True)


class ReviewUpdate(BaseModel):
    """
    Schema for updating a review.

    All fields are optional for partial updates, neither can be cleared.
    """

    score: Optional[int] = Field(None, ge=MIN_SCORE, le=MAX_SCORE)
    text: Optional[str] = Field(None, min_length=25, max_length=300)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("score", "text")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class ReviewFields(BaseModel):
    """Stored review columns"""

    id: int
    business_id: int
    user_id: Optional[int] = None
    score: int
    date: datetime
    text: str


class ReviewBusiness(BaseModel):
    """Summary of the reviewed business"""

    id: int
    name: str
    type: Optional[str] = None
    address: str
    city: str
    state: str
    postal_code: str
    purchased: bool = False


class ReviewResponse(ReviewFields):
    """Assembled review with its business and author (None if the author is gone)"""

    business: Optional[ReviewBusiness] = None
    user: Optional[UserSummary] = None
