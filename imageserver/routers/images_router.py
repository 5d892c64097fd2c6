import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import Response

from ..config import settings
from ..deps import get_resolution_service, get_upload_service
from ..exceptions import InvalidInputError
from ..schemas import ImageSummary
from ..application.ports.image_store import Image
from ..application.services.resolution_service import ResolutionService
from ..application.services.upload_service import UploadService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


def _image_response(image: Image) -> Response:
    return Response(content=image.data, media_type=image.file_type)


def _read_upload(upload: UploadFile):
    data = upload.file.read()
    return data, upload.filename, upload.content_type


@router.get("/images", response_model=List[ImageSummary])
def list_images(service: UploadService = Depends(get_upload_service)):
    """Get all images information without data"""
    return service.list_images()


@router.post("/upload", response_model=ImageSummary)
def upload_single_file(
    file: UploadFile = File(...),
    service: UploadService = Depends(get_upload_service),
):
    """Upload a single image"""
    return service.upload(*_read_upload(file))


@router.post("/uploads", response_model=List[ImageSummary])
def upload_multiple_files(
    files: List[UploadFile] = File(...),
    service: UploadService = Depends(get_upload_service),
):
    """Upload several images at once; one bad file rejects the whole batch"""
    if len(files) > settings.MAX_FILES_PER_REQUEST:
        raise InvalidInputError(f"At most {settings.MAX_FILES_PER_REQUEST} files per request")
    return service.upload_many([_read_upload(f) for f in files])


@router.get("/view/{file_name}")
def view_image(file_name: str, service: ResolutionService = Depends(get_resolution_service)):
    """Image bytes by file name, or the default image"""
    return _image_response(service.resolve_by_name(file_name))


@router.get("/show")
def show_image(
    uuid: Optional[str] = Query(None),
    name: Optional[str] = Query(None),
    service: ResolutionService = Depends(get_resolution_service),
):
    """Image bytes by uuid, else by name, else the default image"""
    return _image_response(service.dispatch(uuid=uuid, name=name))


@router.get("/show/{width}/{height}")
def show_scaled_image(
    width: int,
    height: int,
    uuid: Optional[str] = Query(None),
    name: Optional[str] = Query(None),
    service: ResolutionService = Depends(get_resolution_service),
):
    """Scaled image bytes by uuid, else by name, else the default image"""
    return _image_response(service.dispatch(uuid=uuid, name=name, width=width, height=height))


@router.get("/show/{width}/{height}/{file_name}")
def show_scaled_image_by_name(
    width: int,
    height: int,
    file_name: str,
    service: ResolutionService = Depends(get_resolution_service),
):
    """Scaled image bytes by file name, or the scaled default image"""
    return _image_response(service.resolve_by_name(file_name, width, height))
