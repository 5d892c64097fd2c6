import io
import os

# Point the app at a throwaway database before anything imports the settings
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from PIL import Image as PILImage
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from imageserver.models import ImageRecord  # noqa: F401


def encode_image(fmt: str = "PNG", size=(40, 30), color=(200, 40, 40), mode: str = "RGB") -> bytes:
    img = PILImage.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def decoded_size(data: bytes):
    with PILImage.open(io.BytesIO(data)) as img:
        return img.size


def decoded_format(data: bytes) -> str:
    with PILImage.open(io.BytesIO(data)) as img:
        return img.format


@pytest.fixture
def png_bytes() -> bytes:
    return encode_image("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return encode_image("JPEG", size=(300, 200), color=(10, 120, 220))


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)
    engine.dispose()
