"""
Authentication routes
Credential checks only; session and cookie handling belong to the deployment
in front of the API.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.api.v1.responses import render
from reviewhub.api.v1.schemas.common import ApiResponse
from reviewhub.api.v1.schemas.user import LoginRequest, UserSummary
from reviewhub.core.database import get_db
from reviewhub.core.dependencies import get_directory
from reviewhub.services.directory import BusinessDirectory

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post(
    "/login",
    response_model=ApiResponse[UserSummary],
    summary="Check credentials",
    description="Verify a username (any letter case) and password.",
    status_code=status.HTTP_200_OK,
    responses={
        401: {"description": "Invalid username or password"}
    }
)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    result = await directory.can_login(db, credentials.username, credentials.password)
    if not result.success:
        logger.warning(f"Failed login for username '{credentials.username}'")
    return render(result, UserSummary)
