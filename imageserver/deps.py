# imageserver/deps.py
from typing import Optional
from fastapi import Depends
from sqlmodel import Session

from .config import settings
from .database import get_session
from .application.ports.image_store import ImageStore
from .application.services.resolution_service import ResolutionService
from .application.services.upload_service import UploadService
from .infrastructure.memory.memory_image_store import InMemoryImageStore
from .infrastructure.persistence.sqlalchemy.repositories.image_store_sql import SqlImageStore


_memory_store: Optional[InMemoryImageStore] = None

def get_memory_store() -> InMemoryImageStore:
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemoryImageStore()
    return _memory_store


def get_image_store(session: Session = Depends(get_session)) -> ImageStore:
    if settings.STORE_BACKEND == "memory":
        return get_memory_store()
    return SqlImageStore(session)


def get_resolution_service(image_store: ImageStore = Depends(get_image_store)) -> ResolutionService:
    return ResolutionService(image_store=image_store)


def get_upload_service(image_store: ImageStore = Depends(get_image_store)) -> UploadService:
    return UploadService(image_store=image_store)
