"""
Business API routes
Listing, creation, partial update, deletion and photo uploads
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.api.v1.responses import envelope, missing_updates_message, render
from reviewhub.api.v1.schemas.business import (
    BusinessCreate,
    BusinessFields,
    BusinessResponse,
    BusinessUpdate,
)
from reviewhub.api.v1.schemas.common import ApiResponse
from reviewhub.api.v1.schemas.photo import PhotoResponse
from reviewhub.core.database import get_db
from reviewhub.core.dependencies import get_directory
from reviewhub.services.directory import BusinessDirectory
from reviewhub.services.mutations import EDITABLE_FIELDS, EntityKind

logger = logging.getLogger(__name__)

ALLOWED_PHOTO_EXTENSIONS = {"jpg", "jpeg", "png", "svg"}

router = APIRouter(
    prefix="/businesses",
    tags=["businesses"],
    responses={
        404: {"description": "Business not found"},
        500: {"description": "Internal server error"}
    }
)


@router.get(
    "",
    response_model=ApiResponse[List[BusinessResponse]],
    summary="List businesses",
    description="All businesses with their reviews and photos",
    status_code=status.HTTP_200_OK
)
async def get_businesses(
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    """
    Get every business, assembled

    Reviews are newest first; photos are ordered by position.
    """
    businesses = await directory.get_businesses(db)
    logger.info(f"Retrieved {len(businesses)} businesses")
    return envelope(True, ("Businesses found", "success"), businesses, List[BusinessResponse])


@router.get(
    "/{business_id}",
    response_model=ApiResponse[BusinessResponse],
    summary="Get business by ID",
    status_code=status.HTTP_200_OK
)
async def get_business(
    business_id: int,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    result = await directory.get_business(db, business_id)
    return render(result, BusinessResponse)


@router.post(
    "",
    response_model=ApiResponse[BusinessFields],
    summary="Create business",
    description="Create a business; a business with the same name and address is rejected",
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"description": "Business with that information already exists"}
    }
)
async def create_business(
    business_data: BusinessCreate,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    """
    Create a new business

    On conflict the existing business is returned as data.
    """
    result = await directory.add_business(
        db,
        name=business_data.name,
        type=business_data.type,
        address=business_data.address,
        city=business_data.city,
        state=business_data.state,
        postal_code=business_data.postal_code,
    )
    return render(result, BusinessFields, success_status=status.HTTP_201_CREATED)


@router.patch(
    "/{business_id}",
    response_model=ApiResponse[BusinessFields],
    summary="Update business",
    description="Apply the fields present in the body; unchanged values are ignored",
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "None of the provided updates contained new data"},
        409: {"description": "Business with that information already exists"},
        422: {"description": "No field supplied or a field is invalid"}
    }
)
async def update_business(
    business_id: int,
    business_data: BusinessUpdate,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    """
    Partially update a business

    Explicit nulls clear type or purchased. The stored row is returned as-is,
    so purchased may be null.
    """
    updates = business_data.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=missing_updates_message(EDITABLE_FIELDS[EntityKind.BUSINESS][1]),
        )
    result = await directory.edit_entity(db, EntityKind.BUSINESS, business_id, updates)
    return render(result, BusinessFields)


@router.delete(
    "/{business_id}",
    response_model=ApiResponse[None],
    summary="Delete business",
    description="Delete a business together with its reviews and photos",
    status_code=status.HTTP_200_OK
)
async def delete_business(
    business_id: int,
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    result = await directory.delete_business(db, business_id)
    return render(result)


@router.post(
    "/{business_id}/photos",
    response_model=ApiResponse[PhotoResponse],
    summary="Upload photo",
    description="Append a photo to a business; it is placed after the existing photos",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Empty file or unsupported extension"}
    }
)
async def upload_photo(
    business_id: int,
    file: UploadFile = File(..., description="Image file"),
    caption: Optional[str] = Form(None, max_length=300, description="Photo caption"),
    db: AsyncSession = Depends(get_db),
    directory: BusinessDirectory = Depends(get_directory),
):
    """
    Upload a photo of a business

    The extension is taken from the uploaded file name (default: jpg).
    """
    file_extension = Path(file.filename or "").suffix.lstrip(".").lower() or "jpg"
    if file_extension not in ALLOWED_PHOTO_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported photo extension '{file_extension}'",
        )

    content = await file.read()
    try:
        result = await directory.upload_photo(db, business_id, content, caption, file_extension)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return render(result, PhotoResponse, success_status=status.HTTP_201_CREATED)
