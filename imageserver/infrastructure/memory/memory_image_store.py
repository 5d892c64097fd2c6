from typing import Dict, List, Optional, Sequence

from ...application.ports.image_store import ImageStore, Image
from ...exceptions import InvalidInputError
from ...schemas import ImageSummary


class InMemoryImageStore(ImageStore):
    def __init__(self) -> None:
        # Insertion order doubles as creation order for listings
        self._by_uuid: Dict[str, Image] = {}

    def save(self, image: Optional[Image]) -> Image:
        if image is None:
            raise InvalidInputError("Image data is null")
        return self.save_all([image])[0]

    def save_all(self, images: Sequence[Optional[Image]]) -> List[Image]:
        if any(image is None for image in images):
            raise InvalidInputError("Image data is null")
        staged = dict(self._by_uuid)
        for image in images:
            for uuid in [u for u, i in staged.items() if i.file_name == image.file_name]:
                del staged[uuid]
            staged[image.uuid] = image
        self._by_uuid = staged
        return list(images)

    def find_by_file_name(self, file_name: str) -> Optional[Image]:
        for image in self._by_uuid.values():
            if image.file_name == file_name:
                return image
        return None

    def find_by_uuid(self, uuid: str) -> Optional[Image]:
        return self._by_uuid.get(uuid)

    def list_summaries(self) -> List[ImageSummary]:
        return [ImageSummary.from_image(i) for i in self._by_uuid.values()]
