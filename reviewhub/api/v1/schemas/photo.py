"""
Photo Pydantic schemas
"""
from typing import Optional

from pydantic import BaseModel, Field


class PhotoResponse(BaseModel):
    """Photo row as returned to clients"""
    id: int = Field(..., description="Photo ID, also the storage key")
    business_id: int
    position: int = Field(..., description="Display order within the business")
    caption: Optional[str] = None
