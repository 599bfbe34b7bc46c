"""
Photo storage
Persists uploaded photo bytes under a key derived from the photo ID,
either on the local filesystem or in an S3 bucket.
Reference: https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3.html
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import BinaryIO, Union

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from reviewhub.core.config import settings

logger = logging.getLogger(__name__)

ImageContent = Union[bytes, BinaryIO]


def photo_key(photo_id: int, file_extension: str = "jpg") -> str:
    """Storage key for a photo: "<id>.<ext>"."""
    return f"{photo_id}.{file_extension.lstrip('.').lower()}"


def read_image(file_content: ImageContent) -> bytes:
    if hasattr(file_content, "read"):
        file_content = file_content.read()
    if not file_content:
        raise ValueError("File is empty")
    return file_content


class PhotoStorage(ABC):
    """Interface for photo sinks."""

    @abstractmethod
    async def save_photo(
        self, photo_id: int, file_content: ImageContent, file_extension: str = "jpg"
    ) -> str:
        """
        Store the bytes of a photo.

        Args:
            photo_id: ID of the photo row the bytes belong to
            file_content: File content as bytes or file-like object
            file_extension: File extension (default: "jpg")

        Returns:
            Location of the stored photo (path or URL)

        Raises:
            ValueError: If file is empty
        """

    @abstractmethod
    def url_for(self, key: str) -> str:
        """Public location of a stored photo key."""


class LocalPhotoStorage(PhotoStorage):
    """Writes photos into a directory on the local filesystem"""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    async def save_photo(
        self, photo_id: int, file_content: ImageContent, file_extension: str = "jpg"
    ) -> str:
        content = read_image(file_content)
        path = self.root / photo_key(photo_id, file_extension)

        def write():
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

        # Offload blocking file IO to thread pool
        await asyncio.to_thread(write)
        logger.info(f"Wrote photo {photo_id} to {path} ({len(content)} bytes)")
        return str(path)

    def url_for(self, key: str) -> str:
        return str(self.root / key)


class S3PhotoStorage(PhotoStorage):
    """Uploads photos to an AWS S3 bucket"""

    def __init__(self, bucket_name: str, prefix: str = "business_photos"):
        # Reference: https://boto3.amazonaws.com/v1/documentation/api/latest/guide/configuration.html
        config = Config(
            max_pool_connections=50,
            retries={
                'max_attempts': 3,
                'mode': 'standard'
            },
            connect_timeout=5,
            read_timeout=10
        )
        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=settings.AWS_REGION,
            config=config
        )
        self.bucket_name = bucket_name
        self.prefix = prefix.strip("/")
        self.base_url = (
            settings.AWS_S3_BASE_URL
            or f"https://{self.bucket_name}.s3.{settings.AWS_REGION}.amazonaws.com"
        ).rstrip("/")

    async def save_photo(
        self, photo_id: int, file_content: ImageContent, file_extension: str = "jpg"
    ) -> str:
        content = read_image(file_content)
        key = photo_key(photo_id, file_extension)
        s3_key = f"{self.prefix}/{key}"
        try:
            # Offload sync boto3 call to thread pool
            await asyncio.to_thread(
                self.s3_client.put_object,
                Bucket=self.bucket_name,
                Key=s3_key,
                Body=content,
                ContentType=f"image/{file_extension.lstrip('.').lower()}",
            )
        except ClientError:
            # Backend/S3 failure, not a client error: let it bubble up
            logger.exception(
                "Couldn't put object '%s' to bucket '%s'.",
                s3_key,
                self.bucket_name
            )
            raise
        logger.info(
            "Put object '%s' to bucket '%s' (%d bytes).",
            s3_key,
            self.bucket_name,
            len(content),
        )
        return self.url_for(key)

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{self.prefix}/{key}"


@lru_cache()
def get_photo_storage() -> PhotoStorage:
    """
    Get a singleton PhotoStorage for the configured backend.

    Reference: https://docs.python.org/3/library/functools.html#functools.lru_cache
    """
    if settings.PHOTO_STORAGE_BACKEND == "s3":
        if not settings.AWS_S3_BUCKET_NAME:
            raise ValueError("AWS_S3_BUCKET_NAME must be set when PHOTO_STORAGE_BACKEND is 's3'")
        return S3PhotoStorage(settings.AWS_S3_BUCKET_NAME)
    return LocalPhotoStorage(settings.PHOTO_STORAGE_DIR)
