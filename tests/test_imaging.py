import pytest
from PIL import Image as PILImage

from imageserver.application.ports.image_store import Image
from imageserver.config import Settings
from imageserver.exceptions import ImageTransformError
from imageserver.imaging import (
    DEFAULT_IMAGE_UUID,
    build_default_image,
    get_default_image,
    scale_image,
)

from conftest import encode_image, decoded_size, decoded_format


def as_image(data: bytes, mime: str, name: str = "pic") -> Image:
    return Image(uuid="u1", file_name=name, file_type=mime, data=data, size=len(data))


@pytest.mark.parametrize("fmt,mime", [
    ("PNG", "image/png"),
    ("JPEG", "image/jpeg"),
    ("GIF", "image/gif"),
    ("BMP", "image/bmp"),
])
def test_scale_hits_exact_size_and_keeps_format(fmt, mime):
    original = as_image(encode_image(fmt, size=(120, 80)), mime)

    scaled = scale_image(original, 33, 71)

    assert decoded_size(scaled.data) == (33, 71)
    assert decoded_format(scaled.data) == fmt
    assert scaled.file_type == mime
    assert scaled.size == len(scaled.data)


def test_scale_ignores_aspect_ratio():
    scaled = scale_image(as_image(encode_image("PNG", size=(100, 100)), "image/png"), 400, 10)
    assert decoded_size(scaled.data) == (400, 10)


def test_scale_is_size_stable_when_repeated():
    once = scale_image(as_image(encode_image("JPEG", size=(64, 48)), "image/jpeg"), 100, 50)
    twice = scale_image(once, 100, 50)
    assert decoded_size(twice.data) == (100, 50)


def test_scale_returns_copy_and_leaves_input_alone():
    data = encode_image("PNG", size=(20, 20))
    original = as_image(data, "image/png")

    scaled = scale_image(original, 5, 5)

    assert scaled is not original
    assert original.data == data
    assert (scaled.uuid, scaled.file_name) == (original.uuid, original.file_name)


def test_scale_transparent_png_stored_as_jpeg():
    rgba = encode_image("PNG", size=(30, 30), color=(0, 0, 0, 0), mode="RGBA")
    scaled = scale_image(as_image(rgba, "image/jpeg"), 10, 10)
    assert decoded_format(scaled.data) == "JPEG"


def test_scale_unknown_mime_uses_decoded_format():
    scaled = scale_image(as_image(encode_image("PNG"), "application/octet-stream"), 8, 8)
    assert decoded_format(scaled.data) == "PNG"


def test_scale_garbage_raises_transform_error():
    with pytest.raises(ImageTransformError):
        scale_image(as_image(b"\xff\xd8 definitely not a jpeg", "image/jpeg"), 10, 10)


def test_scale_oversized_pixel_count_raises_transform_error(monkeypatch):
    # Pillow refuses images above twice MAX_IMAGE_PIXELS
    monkeypatch.setattr(PILImage, "MAX_IMAGE_PIXELS", 100)
    bomb = as_image(encode_image("PNG", size=(40, 30), mode="1", color=0), "image/png")

    with pytest.raises(ImageTransformError):
        scale_image(bomb, 10, 10)


def test_build_default_placeholder():
    settings = Settings(DEFAULT_IMAGE_WIDTH=12, DEFAULT_IMAGE_HEIGHT=9, DEFAULT_IMAGE_COLOR="red")

    image = build_default_image(settings)

    assert image.uuid == DEFAULT_IMAGE_UUID
    assert image.file_type == "image/png"
    assert decoded_size(image.data) == (12, 9)
    assert image.size == len(image.data)


def test_build_default_from_file(tmp_path):
    path = tmp_path / "fallback.jpg"
    path.write_bytes(encode_image("JPEG", size=(16, 16)))

    image = build_default_image(Settings(DEFAULT_IMAGE_PATH=str(path)))

    assert image.file_name == "fallback.jpg"
    assert image.file_type == "image/jpeg"
    assert image.data == path.read_bytes()


def test_default_image_is_built_once():
    assert get_default_image() is get_default_image()
