from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from ...schemas import ImageSummary


@dataclass(frozen=True)
class Image:
    uuid: str
    file_name: str
    file_type: str
    data: bytes = field(repr=False)
    size: int


class ImageStore(Protocol):
    def save(self, image: Optional[Image]) -> Image:
        ...

    def save_all(self, images: Sequence[Optional[Image]]) -> List[Image]:
        ...

    def find_by_file_name(self, file_name: str) -> Optional[Image]:
        ...

    def find_by_uuid(self, uuid: str) -> Optional[Image]:
        ...

    def list_summaries(self) -> List[ImageSummary]:
        ...
