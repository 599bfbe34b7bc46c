"""
User Pydantic schemas
Password hashes never leave the service
"""
from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user"""
    username: str = Field(..., min_length=3, max_length=100, description="Login name, case-insensitive")
    password: str = Field(..., min_length=8, max_length=72, description="Plain-text password")


class LoginRequest(BaseModel):
    """Schema for checking credentials"""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=72)


class UserSummary(BaseModel):
    """Public user fields"""
    id: int
    username: str
