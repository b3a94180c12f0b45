"""Cloudinary unsigned image upload client."""

import mimetypes
from typing import Optional

import requests
from core.config import settings
from core.logging import get_module_logger

logger = get_module_logger()


class UploadFailedError(Exception):
    """The image could not be uploaded; the enclosing submission must abort."""


def get_upload_url(cloud_name: Optional[str] = None) -> str:
    cloud_name = cloud_name or settings.cloudinary.CLOUDINARY_CLOUD_NAME
    if not cloud_name:
        raise UploadFailedError("CLOUDINARY_CLOUD_NAME is missing")
    return f"{settings.cloudinary.CLOUDINARY_API_URL}/{cloud_name}/image/upload"


def upload_image(
    content: bytes, filename: str, content_type: Optional[str] = None
) -> str:
    """Upload an image with the configured unsigned upload preset.

    Returns:
        str: The durable HTTPS URL of the uploaded image

    Raises:
        UploadFailedError: on a transport error, a non-2xx response or a
            response without ``secure_url``.
    """
    url = get_upload_url()
    upload_preset = settings.cloudinary.CLOUDINARY_UPLOAD_PRESET
    if not upload_preset:
        raise UploadFailedError("CLOUDINARY_UPLOAD_PRESET is missing")

    content_type = (
        content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
    )

    try:
        response = requests.post(
            url,
            files={"file": (filename, content, content_type)},
            data={"upload_preset": upload_preset},
            timeout=settings.cloudinary.CLOUDINARY_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error("image_upload_failed", filename=filename, error=str(e))
        raise UploadFailedError(f"Image upload failed: {e}") from e

    if not response.ok:
        logger.error(
            "image_upload_rejected",
            filename=filename,
            status_code=response.status_code,
            body=response.text[:500],
        )
        raise UploadFailedError(
            f"Image upload rejected with status {response.status_code}"
        )

    try:
        secure_url = response.json().get("secure_url")
    except ValueError:
        secure_url = None
    if not secure_url:
        logger.error("image_upload_missing_url", filename=filename)
        raise UploadFailedError("Image upload response has no secure_url")

    logger.info("image_uploaded", filename=filename, url=secure_url)
    return secure_url
