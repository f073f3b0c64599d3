"""
Collaborators invoked by the request handlers: resume storage, email, and
background notification dispatch.
"""

from .email import EmailDeliveryError, EmailService
from .notifier import NotificationDispatcher
from .upload import (
    MAX_UPLOAD_BYTES,
    PRESIGN_EXPIRES_SECONDS,
    StorageError,
    StoredObject,
    UploadService,
    UploadValidationError,
)

__all__ = [
    "EmailDeliveryError",
    "EmailService",
    "MAX_UPLOAD_BYTES",
    "NotificationDispatcher",
    "PRESIGN_EXPIRES_SECONDS",
    "StorageError",
    "StoredObject",
    "UploadService",
    "UploadValidationError",
]
