"""
Resume Upload Service

Stores candidate resumes in S3, either by streaming a multipart upload
through this service or by issuing a pre-signed PUT URL the browser uses
directly.

Validation (extension and size) always runs before any call to S3, so a
rejected file never costs a network round trip. Object keys are generated
here; callers never choose them:

    resumes/2025/06/3f1c...e9.pdf

Usage:
    service = UploadService(bucket="hr-recruiting-resumes", region="us-east-1")
    stored = service.upload_resume(fileobj, "cv.pdf", size=48213)
    print(stored.url)
"""

import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, BinaryIO, Dict, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS: Dict[str, str] = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
PRESIGN_EXPIRES_SECONDS = 15 * 60
KEY_PREFIX = "resumes"


class UploadValidationError(Exception):
    """File rejected before reaching storage."""


class StorageError(Exception):
    """S3 rejected or failed the request."""


@dataclass
class StoredObject:
    key: str
    url: str
    original_filename: str
    size: int
    content_type: str

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            "url": self.url,
            "filename": self.key,
            "originalFilename": self.original_filename,
            "size": self.size,
            "contentType": self.content_type,
        }


def extension_of(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def content_type_for(filename: str) -> str:
    """Map an allowed file extension to its exact content type."""
    content_type = ALLOWED_EXTENSIONS.get(extension_of(filename))
    if content_type is None:
        raise UploadValidationError("Invalid file type. Only PDF, DOC, and DOCX are allowed")
    return content_type


def validate_size(size: Optional[int]) -> None:
    if size is not None and size > MAX_UPLOAD_BYTES:
        raise UploadValidationError("File too large. Maximum size is 10MB")


class UploadService:
    """S3-backed resume storage."""

    def __init__(self, bucket: str, region: str, s3_client: Any = None):
        self.bucket = bucket
        self.region = region
        self._s3 = s3_client

    @property
    def s3(self) -> Any:
        # Created on first use so the app starts without AWS credentials
        if self._s3 is None:
            self._s3 = boto3.client(
                "s3",
                region_name=self.region,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._s3

    def generate_key(self, extension: str, now: Optional[datetime] = None) -> str:
        """Namespace by upload year/month with a random unique suffix."""
        moment = now or datetime.now(timezone.utc)
        return f"{KEY_PREFIX}/{moment:%Y/%m}/{uuid.uuid4()}{extension}"

    def get_file_url(self, key: str) -> str:
        """Public URL for a stored object."""
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"

    def upload_resume(self, fileobj: BinaryIO, filename: str, size: int) -> StoredObject:
        """
        Validate and store a resume.

        Args:
            fileobj: Readable binary stream positioned at the start
            filename: Client-supplied file name (only the extension is used)
            size: File size in bytes

        Returns:
            StoredObject describing the new object

        Raises:
            UploadValidationError: bad extension or oversized file
            StorageError: S3 put failed
        """
        content_type = content_type_for(filename)
        validate_size(size)

        key = self.generate_key(extension_of(filename))
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=fileobj,
                ContentType=content_type,
                Metadata={
                    "original-filename": filename,
                    "uploaded-at": datetime.now(timezone.utc).isoformat(),
                },
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 put failed for {key}: {e}")
            raise StorageError(f"Failed to upload file: {e}") from e

        logger.info(f"Stored resume {key} ({size} bytes)")
        return StoredObject(
            key=key,
            url=self.get_file_url(key),
            original_filename=filename,
            size=size,
            content_type=content_type,
        )

    def create_presigned_upload(
        self,
        filename: str,
        content_type: str,
        size: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Issue a pre-signed PUT URL valid for 15 minutes.

        The declared content type must be the one mapped to the file's
        extension.

        Returns:
            Dict with success, uploadUrl, key, url (query string stripped)
            and expiresIn

        Raises:
            UploadValidationError: bad extension, content type or size
            StorageError: signing failed
        """
        if content_type not in ALLOWED_EXTENSIONS.values():
            raise UploadValidationError("Invalid content type")
        if content_type_for(filename) != content_type:
            raise UploadValidationError("Content type does not match file extension")
        validate_size(size)

        key = self.generate_key(extension_of(filename))
        try:
            upload_url = self.s3.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": key,
                    "ContentType": content_type,
                    "Metadata": {"original-filename": filename},
                },
                ExpiresIn=PRESIGN_EXPIRES_SECONDS,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Presigning failed for {key}: {e}")
            raise StorageError(f"Failed to generate presigned URL: {e}") from e

        return {
            "success": True,
            "uploadUrl": upload_url,
            "key": key,
            "url": upload_url.split("?", 1)[0],
            "expiresIn": PRESIGN_EXPIRES_SECONDS,
        }

    def delete_file(self, key: str) -> None:
        """Delete an object. Deleting a missing key succeeds."""
        try:
            self.s3.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e
