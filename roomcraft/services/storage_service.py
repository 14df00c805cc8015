"""
Room photo storage on the local filesystem
"""
import io
import logging
import os
import uuid
from pathlib import Path
from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from roomcraft.core.config import settings
from roomcraft.core.exceptions import InvalidUpload

logger = logging.getLogger(__name__)


class StorageService:
    """Validates and stores uploaded room photos"""

    def __init__(self, upload_path: Optional[str] = None):
        self.upload_dir = Path(upload_path or settings.upload_path)
        self.max_file_size = settings.max_file_size
        self.allowed_types = settings.allowed_image_types
        self.allowed_extensions = settings.allowed_image_extensions

    def validate_image(self, data: bytes, filename: str, content_type: Optional[str]) -> List[str]:
        """Collect every reason the upload is not an acceptable image"""
        errors = []

        extension = os.path.splitext(filename or "")[1].lower()
        if extension not in self.allowed_extensions:
            errors.append(f"Unsupported file extension '{extension or filename}'")

        if content_type not in self.allowed_types:
            errors.append(f"Unsupported content type '{content_type}'")

        if not data:
            errors.append("File is empty")
        elif len(data) > self.max_file_size:
            errors.append(f"File exceeds the {self.max_file_size // (1024 * 1024)}MB limit")
        else:
            try:
                with Image.open(io.BytesIO(data)) as image:
                    image.verify()
            except (UnidentifiedImageError, OSError, SyntaxError):
                errors.append("File is not a valid image")

        return errors

    def save_room_photo(self, data: bytes, filename: str, content_type: Optional[str]) -> str:
        """
        Store an uploaded room photo under a generated name

        Args:
            data: Raw file bytes
            filename: Client-supplied name, used for its extension
            content_type: Declared MIME type

        Returns:
            Public URL path of the stored file

        Raises:
            InvalidUpload: the file failed validation
        """
        errors = self.validate_image(data, filename, content_type)
        if errors:
            logger.warning(f"Rejected upload '{filename}': {'; '.join(errors)}")
            raise InvalidUpload(errors)

        extension = os.path.splitext(filename)[1].lower()
        saved_name = f"{uuid.uuid4()}{extension}"

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / saved_name).write_bytes(data)

        logger.info(f"Saved room photo {saved_name} ({len(data)} bytes)")
        return f"/uploads/{saved_name}"

    def get_file_path(self, file_name: str) -> Path:
        return self.upload_dir / file_name


storage_service = StorageService()
