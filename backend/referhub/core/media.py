"""
Cloudinary media configuration.

Configures the SDK from the environment once, at import time, and exposes
the upload call used by the candidate creation route. Missing credentials
are not checked here; Cloudinary rejects the upload at call time instead.
"""

import logging
from typing import BinaryIO, Optional

import cloudinary
import cloudinary.uploader

from referhub.core.config import settings

logger = logging.getLogger(__name__)


class MediaUploadError(Exception):
    """Raised when a resume could not be stored on the media CDN."""


def configure_cloudinary() -> None:
    """Apply cloud name, API key and secret from settings to the SDK."""
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )
    logger.info("Cloudinary configured for cloud: %s", settings.CLOUDINARY_CLOUD_NAME)


def upload_resume(fileobj: BinaryIO, filename: Optional[str] = None) -> str:
    """
    Upload resume bytes and return the hosted HTTPS URL.

    Args:
        fileobj: Readable binary file object (e.g. ``UploadFile.file``)
        filename: Original filename, kept as a hint for the stored asset

    Returns:
        The ``secure_url`` of the uploaded asset

    Raises:
        MediaUploadError: if the SDK call fails or returns no URL
    """
    try:
        result = cloudinary.uploader.upload(
            fileobj,
            folder=settings.CLOUDINARY_FOLDER,
            resource_type="auto",
            use_filename=bool(filename),
            filename_override=filename,
            unique_filename=True,
        )
    except Exception as e:
        raise MediaUploadError(f"Cloudinary upload failed: {e}") from e

    url = result.get("secure_url") or result.get("url")
    if not url:
        raise MediaUploadError("Cloudinary response did not include a URL")
    return url


configure_cloudinary()
