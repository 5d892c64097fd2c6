# imageserver/models.py
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from uuid import uuid4
from sqlalchemy import Column, LargeBinary


class ImageRecord(SQLModel, table=True):
    __tablename__ = "images"
    uuid: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, max_length=36)
    file_name: str = Field(max_length=255, unique=True, index=True)
    file_type: str = Field(max_length=100)
    size: int
    data: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
