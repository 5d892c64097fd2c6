import logging
from typing import List, Optional, Sequence
from sqlmodel import Session, select

from .....models import ImageRecord
from .....schemas import ImageSummary
from .....exceptions import InvalidInputError
from .....application.ports.image_store import ImageStore, Image

logger = logging.getLogger(__name__)


class SqlImageStore(ImageStore):
    def __init__(self, session: Session):
        self.session = session

    def _to_image(self, record: ImageRecord) -> Image:
        return Image(
            uuid=record.uuid,
            file_name=record.file_name,
            file_type=record.file_type,
            data=record.data,
            size=record.size,
        )

    def _stage(self, image: Image) -> None:
        # file_name is unique: a newer upload replaces the older record
        existing = self.session.exec(
            select(ImageRecord).where(ImageRecord.file_name == image.file_name)
        ).first()
        if existing:
            logger.info(f"Replacing image {existing.uuid} stored as {image.file_name}")
            self.session.delete(existing)
            self.session.flush()
        self.session.add(ImageRecord(
            uuid=image.uuid,
            file_name=image.file_name,
            file_type=image.file_type,
            size=image.size,
            data=image.data,
        ))
        self.session.flush()

    def save(self, image: Optional[Image]) -> Image:
        if image is None:
            raise InvalidInputError("Image data is null")
        return self.save_all([image])[0]

    def save_all(self, images: Sequence[Optional[Image]]) -> List[Image]:
        if any(image is None for image in images):
            raise InvalidInputError("Image data is null")
        try:
            for image in images:
                self._stage(image)
            self.session.commit()
        except Exception:
            logger.exception("Error saving images to database")
            self.session.rollback()
            raise
        return list(images)

    def find_by_file_name(self, file_name: str) -> Optional[Image]:
        record = self.session.exec(
            select(ImageRecord).where(ImageRecord.file_name == file_name)
        ).first()
        return self._to_image(record) if record else None

    def find_by_uuid(self, uuid: str) -> Optional[Image]:
        record = self.session.get(ImageRecord, uuid)
        return self._to_image(record) if record else None

    def list_summaries(self) -> List[ImageSummary]:
        rows = self.session.exec(
            select(
                ImageRecord.uuid,
                ImageRecord.file_name,
                ImageRecord.file_type,
                ImageRecord.size,
            ).order_by(ImageRecord.created_at)
        ).all()
        return [
            ImageSummary(uuid=uuid, fileName=file_name, fileType=file_type, size=size)
            for uuid, file_name, file_type, size in rows
        ]
