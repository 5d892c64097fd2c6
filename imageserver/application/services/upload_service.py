import uuid
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..ports.image_store import ImageStore, Image
from ...config import settings
from ...exceptions import InvalidInputError, ImageTooLargeError
from ...filenames import sanitize_file_name
from ...schemas import ImageSummary

logger = logging.getLogger(__name__)

UploadItem = Tuple[Optional[bytes], Optional[str], Optional[str]]


@dataclass
class UploadService:
    image_store: ImageStore
    allowed_types: List[str] = field(default_factory=lambda: list(settings.ALLOWED_IMAGE_TYPES))
    max_file_size: int = settings.MAX_FILE_SIZE

    def build_image(self, data: Optional[bytes], original_file_name: Optional[str], mime_type: Optional[str]) -> Image:
        if not data:
            raise InvalidInputError("Image data is empty")
        if not mime_type or mime_type.lower() not in self.allowed_types:
            raise InvalidInputError(f"File type {mime_type} not allowed")
        if len(data) > self.max_file_size:
            raise ImageTooLargeError(f"File too large (max {self.max_file_size // (1024*1024)}MB)")
        return Image(
            uuid=str(uuid.uuid4()),
            file_name=sanitize_file_name(original_file_name, mime_type),
            file_type=mime_type.lower(),
            data=bytes(data),
            size=len(data),
        )

    def upload(self, data: Optional[bytes], original_file_name: Optional[str], mime_type: Optional[str]) -> ImageSummary:
        image = self.image_store.save(self.build_image(data, original_file_name, mime_type))
        logger.info(f"Stored image {image.uuid} as {image.file_name} ({image.size} bytes)")
        return ImageSummary.from_image(image)

    def upload_many(self, items: Sequence[UploadItem]) -> List[ImageSummary]:
        """
        Store a batch of uploads, all or nothing.

        Every item is validated before anything is written, so the first bad
        item aborts the batch and no image from it becomes visible.
        """
        images = [self.build_image(data, name, mime_type) for data, name, mime_type in items]
        saved = self.image_store.save_all(images)
        logger.info(f"Stored batch of {len(saved)} images")
        return [ImageSummary.from_image(image) for image in saved]

    def list_images(self) -> List[ImageSummary]:
        return self.image_store.list_summaries()
