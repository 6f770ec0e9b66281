"""
Image relocation through Cloudinary.

Admin forms post images as base64 data URIs; they are uploaded here and the
durable secure URL is what gets stored on the catalog document.
"""
import os

import cloudinary
import cloudinary.uploader
import structlog

from errors import UpstreamError

logger = structlog.get_logger(__name__)

DATA_URI_PREFIX = "data:image"

# CLOUDINARY_URL is picked up by the SDK on its own
if os.getenv("CLOUDINARY_CLOUD_NAME"):
    cloudinary.config(
        cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
        api_key=os.getenv("CLOUDINARY_API_KEY"),
        api_secret=os.getenv("CLOUDINARY_API_SECRET"),
        secure=True,
    )


def is_data_uri(value) -> bool:
    return isinstance(value, str) and value.startswith(DATA_URI_PREFIX)


def upload_image(data_uri: str, folder: str) -> str:
    try:
        result = cloudinary.uploader.upload(data_uri, folder=folder)
    except Exception as e:
        logger.error("image_upload_failed", folder=folder, error=str(e)[:200])
        raise UpstreamError("Image upload failed") from e
    return result["secure_url"]


def public_id_from_url(url: str, folder: str) -> str:
    # .../upload/v1712/<folder>/<name>.<ext> -> <folder>/<name>
    last = url.rstrip("/").split("/")[-1]
    return f"{folder}/{last.split('.')[0]}"


def release_image(url: str, folder: str) -> None:
    """Best-effort delete; never raises."""
    if not url:
        return
    try:
        cloudinary.uploader.destroy(public_id_from_url(url, folder))
    except Exception as e:
        logger.warning("image_release_failed", url=url, error=str(e)[:200])
