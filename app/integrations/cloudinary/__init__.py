"""Cloudinary module for hosting event and participant images."""

from .client import UploadFailedError, get_upload_url, upload_image

__all__ = [
    "UploadFailedError",
    "get_upload_url",
    "upload_image",
]
