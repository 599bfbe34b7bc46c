"""
User API routes
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.api.v1.responses import envelope, render
from reviewhub.api.v1.schemas.common import ApiResponse
from reviewhub.api.v1.schemas.user import UserCreate, UserSummary
from reviewhub.core.database import get_db
from reviewhub.core.dependencies import get_directory
from reviewhub.services.directory import BusinessDirectory

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.post(
    "",
    response_model=ApiResponse[UserSummary],
    summary="Register user",
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"description": "Username already exists"}
    }
)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    """
    Register a new user

    Usernames are unique regardless of letter case.
    """
    result = await directory.add_user(db, user_data.username, user_data.password)
    return render(result, UserSummary, success_status=status.HTTP_201_CREATED)


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserSummary],
    summary="Get user by ID",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "User not found"}
    }
)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    user = await directory.get_user(db, user_id)
    if user is None:
        return envelope(False, ("User not found", "warn"), status_code=status.HTTP_404_NOT_FOUND)
    return envelope(True, ("User found", "success"), user, UserSummary)
