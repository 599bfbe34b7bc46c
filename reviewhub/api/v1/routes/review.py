"""
Routes for business reviews.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.api.v1.responses import envelope, missing_updates_message, render
from reviewhub.api.v1.schemas.common import ApiResponse
from reviewhub.api.v1.schemas.review import (
    ReviewCreate,
    ReviewFields,
    ReviewResponse,
    ReviewUpdate,
)
from reviewhub.core.database import get_db
from reviewhub.core.dependencies import get_directory
from reviewhub.services.directory import BusinessDirectory
from reviewhub.services.mutations import EDITABLE_FIELDS, EntityKind

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reviews",
    tags=["reviews"],
)


@router.get(
    "",
    response_model=ApiResponse[List[ReviewResponse]],
    summary="Get reviews",
    description="Get all reviews across all businesses, newest first.",
    status_code=status.HTTP_200_OK,
)
async def get_reviews(
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    reviews = await directory.get_reviews(db)
    logger.info(f"Retrieved {len(reviews)} reviews")
    return envelope(True, ("Reviews found", "success"), reviews, List[ReviewResponse])


@router.get(
    "/{review_id}",
    response_model=ApiResponse[ReviewResponse],
    summary="Get review",
    description="Get a specific review by ID, with its business and author.",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Review not found"},
    },
)
async def get_review(
    review_id: int,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    result = await directory.get_review(db, review_id)
    return render(result, ReviewResponse)


@router.post(
    "",
    response_model=ApiResponse[ReviewFields],
    summary="Create review",
    description="Review an existing business.",
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Business not found"},
    },
)
async def create_review(
    review_data: ReviewCreate,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    """
    Create a new review.

    The review date is set by the server.
    """
    result = await directory.add_review(
        db,
        business_id=review_data.business_id,
        score=review_data.score,
        text=review_data.text,
        user_id=review_data.user_id,
    )
    return render(result, ReviewFields, success_status=status.HTTP_201_CREATED)


@router.patch(
    "/{review_id}",
    response_model=ApiResponse[ReviewFields],
    summary="Update review",
    description="Change the score and/or text of a review.",
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "None of the provided updates contained new data"},
        404: {"description": "Review not found"},
    },
)
async def update_review(
    review_id: int,
    review_data: ReviewUpdate,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    updates = review_data.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=missing_updates_message(EDITABLE_FIELDS[EntityKind.REVIEW][1]),
        )
    result = await directory.edit_entity(db, EntityKind.REVIEW, review_id, updates)
    return render(result, ReviewFields)


@router.delete(
    "/{review_id}",
    response_model=ApiResponse[None],
    summary="Delete review",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Review not found"},
    },
)
async def delete_review(
    review_id: int,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    result = await directory.delete_review(db, review_id)
    return render(result)
