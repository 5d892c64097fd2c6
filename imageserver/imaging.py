# imageserver/imaging.py
import io
import os
import uuid
import logging
import mimetypes
from dataclasses import replace
from functools import lru_cache
from typing import Optional
from PIL import Image as PILImage, UnidentifiedImageError

from .application.ports.image_store import Image
from .config import Settings, get_settings
from .exceptions import ImageTransformError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_UUID = str(uuid.UUID(int=0))
DEFAULT_IMAGE_NAME = "default.png"

MIME_TO_FORMAT = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/bmp": "BMP",
    "image/webp": "WEBP",
    "image/tiff": "TIFF",
}

# Modes each encoder can write without conversion
FORMAT_MODES = {
    "JPEG": ("RGB", "L", "CMYK"),
    "BMP": ("RGB", "L", "P", "1"),
}


def _encode(img: PILImage.Image, fmt: str, quality: int) -> bytes:
    allowed = FORMAT_MODES.get(fmt)
    if allowed and img.mode not in allowed:
        img = img.convert("RGB")
    output = io.BytesIO()
    if fmt == "JPEG":
        img.save(output, format=fmt, quality=quality, optimize=True)
    else:
        img.save(output, format=fmt)
    return output.getvalue()


def scale_image(image: Image, width: int, height: int, quality: Optional[int] = None) -> Image:
    """
    Resize image bytes to exactly width x height (aspect ratio is not kept).
    Returns a new Image; the input is left untouched.
    """
    if quality is None:
        quality = get_settings().JPEG_QUALITY
    try:
        with PILImage.open(io.BytesIO(image.data)) as img:
            fmt = MIME_TO_FORMAT.get(image.file_type.lower(), img.format)
            if not fmt:
                raise ImageTransformError(f"Cannot encode images of type {image.file_type}")
            resized = img.resize((width, height), PILImage.Resampling.LANCZOS)
            data = _encode(resized, fmt, quality)
    except ImageTransformError:
        raise
    except (UnidentifiedImageError, PILImage.DecompressionBombError, OSError, ValueError) as e:
        logger.warning(f"Could not scale {image.file_name} to {width}x{height}: {e}")
        raise ImageTransformError(f"Could not scale image {image.file_name}: {e}")
    return replace(image, data=data, size=len(data))


def build_default_image(settings: Settings) -> Image:
    """Load the configured fallback image, or render a plain placeholder."""
    if settings.DEFAULT_IMAGE_PATH:
        with open(settings.DEFAULT_IMAGE_PATH, "rb") as f:
            data = f.read()
        file_type = mimetypes.guess_type(settings.DEFAULT_IMAGE_PATH)[0] or "application/octet-stream"
        file_name = os.path.basename(settings.DEFAULT_IMAGE_PATH)
        logger.info(f"Loaded default image from {settings.DEFAULT_IMAGE_PATH}")
    else:
        placeholder = PILImage.new(
            "RGB",
            (settings.DEFAULT_IMAGE_WIDTH, settings.DEFAULT_IMAGE_HEIGHT),
            settings.DEFAULT_IMAGE_COLOR,
        )
        data = _encode(placeholder, "PNG", settings.JPEG_QUALITY)
        file_type = "image/png"
        file_name = DEFAULT_IMAGE_NAME
    return Image(
        uuid=DEFAULT_IMAGE_UUID,
        file_name=file_name,
        file_type=file_type,
        data=data,
        size=len(data),
    )


@lru_cache()
def get_default_image() -> Image:
    return build_default_image(get_settings())
