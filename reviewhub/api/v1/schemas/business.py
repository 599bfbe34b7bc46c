"""
Business Pydantic schemas
Request and response models for business endpoints
Reference: https://fastapi.tiangolo.com/tutorial/body/
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reviewhub.api.v1.schemas.photo import PhotoResponse
from reviewhub.api.v1.schemas.review import ReviewFields
from reviewhub.api.v1.schemas.user import UserSummary


class BusinessCreate(BaseModel):
    """
    Schema for creating a new business
    Strings are trimmed before length checks
    """
    name: str = Field(..., min_length=4, max_length=200, description="Business name")
    type: Optional[str] = Field(None, min_length=5, max_length=25, description="Business type")
    address: str = Field(..., min_length=4, max_length=50, description="Street address")
    city: str = Field(..., min_length=3, max_length=100, description="City")
    state: str = Field(..., min_length=2, max_length=25, description="State name or code")
    postal_code: str = Field(..., min_length=3, max_length=11, description="Postal code")

    model_config = ConfigDict(str_strip_whitespace=True)


class BusinessUpdate(BaseModel):
    """
    Schema for partially updating a business
    Only fields present in the request body are applied; an explicit null
    clears type or purchased
    Reference: https://fastapi.tiangolo.com/tutorial/body-updates/
    """
    name: Optional[str] = Field(None, min_length=4, max_length=200)
    type: Optional[str] = Field(None, min_length=5, max_length=25)
    address: Optional[str] = Field(None, min_length=4, max_length=50)
    city: Optional[str] = Field(None, min_length=3, max_length=100)
    state: Optional[str] = Field(None, min_length=2, max_length=25)
    postal_code: Optional[str] = Field(None, min_length=3, max_length=11)
    purchased: Optional[bool] = Field(None, description="Purchased flag, null to unset")

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("name", "address", "city", "state", "postal_code")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """Required columns can be changed but not cleared."""
        if v is None:
            raise ValueError("may not be null")
        return v


class BusinessFields(BaseModel):
    """Stored business columns, without nested collections"""
    id: int
    name: str
    type: Optional[str] = None
    address: str
    city: str
    state: str
    postal_code: str
    purchased: Optional[bool] = None


class BusinessReview(ReviewFields):
    """Review nested under its business, with the author summary"""
    user: Optional[UserSummary] = None


class BusinessResponse(BusinessFields):
    """Assembled business with its reviews (newest first) and photos (by position)"""
    purchased: bool = False
    reviews: List[BusinessReview] = Field(default_factory=list)
    photos: List[PhotoResponse] = Field(default_factory=list)
