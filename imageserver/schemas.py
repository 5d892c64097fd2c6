# imageserver/schemas.py
from typing import Optional
from pydantic import BaseModel, Field


class ImageSummary(BaseModel):
    """Metadata-only view of a stored image."""
    uuid: str
    fileName: str
    fileType: str
    size: int = Field(ge=0)

    @classmethod
    def from_image(cls, image) -> "ImageSummary":
        return cls(
            uuid=image.uuid,
            fileName=image.file_name,
            fileType=image.file_type,
            size=image.size,
        )


class HealthResponse(BaseModel):
    status: str
    app: str
    version: str
    database: str
    error: Optional[str] = None
