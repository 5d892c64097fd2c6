import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..ports.image_store import ImageStore, Image
from ...config import settings
from ...exceptions import InvalidInputError
from ...imaging import get_default_image, scale_image

logger = logging.getLogger(__name__)


@dataclass
class ResolutionService:
    """
    Maps a lookup key (file name or UUID) to concrete image bytes.

    A miss is never an error: the built-in default image is served instead.
    When both width and height are given the resolved image is resized to
    exactly that size. Stored records are never modified; scaling works on
    a copy.
    """
    image_store: ImageStore
    default_image: Callable[[], Image] = get_default_image
    max_dimension: int = settings.MAX_SCALE_DIMENSION

    def _check_dimensions(self, width: Optional[int], height: Optional[int]) -> bool:
        if width is None and height is None:
            return False
        if width is None or height is None:
            raise InvalidInputError("Both width and height are required for scaling")
        for label, value in (("width", width), ("height", height)):
            if value < 1 or value > self.max_dimension:
                raise InvalidInputError(f"{label} must be between 1 and {self.max_dimension}")
        return True

    def _finish(self, found: Optional[Image], key: str, width: Optional[int], height: Optional[int], scaled: bool) -> Image:
        if found is None:
            logger.debug(f"No image for {key}, serving default image")
            found = self.default_image()
        if scaled:
            return scale_image(found, width, height)
        return found

    def resolve_by_name(self, name: str, width: Optional[int] = None, height: Optional[int] = None) -> Image:
        scaled = self._check_dimensions(width, height)
        return self._finish(self.image_store.find_by_file_name(name), f"name={name}", width, height, scaled)

    def resolve_by_uuid(self, uuid: str, width: Optional[int] = None, height: Optional[int] = None) -> Image:
        scaled = self._check_dimensions(width, height)
        return self._finish(self.image_store.find_by_uuid(uuid), f"uuid={uuid}", width, height, scaled)

    def resolve_default(self, width: Optional[int] = None, height: Optional[int] = None) -> Image:
        scaled = self._check_dimensions(width, height)
        return self._finish(None, "default", width, height, scaled)

    def dispatch(
        self,
        uuid: Optional[str] = None,
        name: Optional[str] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Image:
        # uuid wins outright; name is not looked at when a uuid is present
        if uuid:
            return self.resolve_by_uuid(uuid, width, height)
        if name:
            return self.resolve_by_name(name, width, height)
        return self.resolve_default(width, height)
