"""
Room analysis and room photo upload routes
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from roomcraft.core.exceptions import ExternalServiceError, InvalidUpload
from roomcraft.schemas.common import ApiResponse
from roomcraft.schemas.room import RoomAnalysis, RoomAnalyzeRequest, UploadedPhoto
from roomcraft.services.storage_service import StorageService, storage_service
from roomcraft.services.vision_service import VisionService, vision_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/room", tags=["room"])


def get_vision_service() -> VisionService:
    return vision_service


def get_storage_service() -> StorageService:
    return storage_service


@router.post("/analyze", response_model=ApiResponse[RoomAnalysis], response_model_exclude_none=True)
async def analyze_room(
    request: RoomAnalyzeRequest,
    vision: VisionService = Depends(get_vision_service),
):
    """Describe a room photo with the vision model"""
    if not request.photo_url:
        return JSONResponse(status_code=400, content=ApiResponse.failure("Photo URL is required"))

    try:
        analysis = await vision.analyze_room(request.photo_url)
        return ApiResponse(success=True, data=analysis)
    except InvalidUpload as e:
        return JSONResponse(status_code=400, content=ApiResponse.failure("Invalid image file", "; ".join(e.errors)))
    except ExternalServiceError as e:
        logger.error(f"Error analyzing room: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ApiResponse.failure("Failed to analyze room", e.message))


@router.post("/upload", response_model=ApiResponse[UploadedPhoto], response_model_exclude_none=True)
async def upload_room_photo(
    photo: Optional[UploadFile] = File(None),
    storage: StorageService = Depends(get_storage_service),
):
    """Store a room photo and return its public URL"""
    if photo is None:
        return JSONResponse(status_code=400, content=ApiResponse.failure("Photo file is required"))

    data = await photo.read()
    try:
        url = storage.save_room_photo(data, photo.filename or "", photo.content_type)
    except InvalidUpload as e:
        return JSONResponse(status_code=400, content=ApiResponse.failure("Invalid image file", "; ".join(e.errors)))
    except OSError as e:
        logger.error(f"Error uploading room photo: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ApiResponse.failure("Failed to upload room photo"))

    return ApiResponse(success=True, data=UploadedPhoto(url=url))
