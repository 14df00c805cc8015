"""
Room analysis via the OpenAI vision model
"""
import base64
import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import aiohttp
import openai
from pydantic import ValidationError

from roomcraft.core.config import settings
from roomcraft.core.exceptions import ExternalServiceError, InvalidUpload
from roomcraft.schemas.room import RoomAnalysis
from roomcraft.utils.json_text import loads_model_json

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 64 * 1024

ROOM_ANALYSIS_PROMPT = """Analyze this room image in detail. Extract the following information and return it as a JSON object:
- colors: array of hex color codes found in the room (walls, floor, furniture)
- roomShape: shape of the room (rectangular, square, L-shaped, etc.)
- walls: array of wall objects with color (hex), material (if visible), and dimensions (length, width, height in feet, unit: "ft")
- floor: object with type (hardwood, tile, carpet, etc.), color (hex), and material (if visible)
- furnitureDetected: array of furniture items detected (e.g., ["sofa", "coffee table", "lamp"])
- lighting: type of lighting ("natural", "artificial", or "mixed")
- emptySpaces: array of empty space objects with area (in square feet) and location description

Return ONLY valid JSON, no markdown formatting, no code blocks."""


class VisionService:
    """Service for describing room photos"""

    def __init__(self, client: Optional[openai.AsyncOpenAI] = None):
        self.model = settings.openai_vision_model
        self.max_tokens = settings.openai_max_tokens
        self.timeout = settings.openai_timeout
        self.max_image_size = settings.max_file_size
        self.allowed_types = settings.allowed_image_types

        if client is not None:
            self.client = client
        elif settings.openai_api_key:
            self.client = openai.AsyncOpenAI(api_key=settings.openai_api_key, timeout=self.timeout)
        else:
            self.client = None

    async def fetch_image_as_data_url(self, url: str) -> str:
        """Download an image and inline it as a base64 data URL"""
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as response:
                    response.raise_for_status()
                    mime_type, content = await self._read_image(response)
        except aiohttp.ClientError as e:
            raise ExternalServiceError(f"Could not download room photo: {e}", kind="connection") from e

        encoded = base64.b64encode(content).decode()
        return f"data:{mime_type};base64,{encoded}"

    async def _read_image(self, response: aiohttp.ClientResponse) -> Tuple[str, bytes]:
        """Read an image body, refusing non-image types and anything over the size limit"""
        mime_type = response.headers.get("Content-Type", "image/jpeg").split(";")[0].strip().lower()
        if mime_type not in self.allowed_types:
            raise InvalidUpload([f"Unsupported content type '{mime_type}'"])

        too_large = f"Image exceeds the {self.max_image_size // (1024 * 1024)}MB limit"
        if response.content_length is not None and response.content_length > self.max_image_size:
            raise InvalidUpload([too_large])

        # Content-Length may be missing or understated
        content = bytearray()
        async for chunk in response.content.iter_chunked(DOWNLOAD_CHUNK_SIZE):
            content.extend(chunk)
            if len(content) > self.max_image_size:
                raise InvalidUpload([too_large])
        return mime_type, bytes(content)

    async def analyze_room(self, photo_url: str) -> RoomAnalysis:
        """
        Describe a room photo

        Args:
            photo_url: Public image URL or a data URL

        Returns:
            RoomAnalysis with defaults filled in for anything the model omitted

        Raises:
            ExternalServiceError: download, model call or reply parsing failed
            InvalidUpload: the downloaded file is not an allowed image type or is too large
        """
        if self.client is None:
            raise ExternalServiceError("OpenAI API key not configured", kind="not_configured")

        image_url = photo_url
        if not photo_url.startswith("data:"):
            image_url = await self.fetch_image_as_data_url(photo_url)

        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": ROOM_ANALYSIS_PROMPT},
                    {"type": "image_url", "image_url": {"url": image_url}},
                ],
            }
        ]

        start_time = time.time()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
            )
        except openai.APITimeoutError as e:
            raise ExternalServiceError("Vision call timed out", kind="timeout") from e
        except openai.APIStatusError as e:
            raise ExternalServiceError(e.message, kind="http", status_code=e.status_code) from e
        except openai.APIConnectionError as e:
            raise ExternalServiceError(str(e), kind="connection") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ExternalServiceError("Vision model returned an empty response", kind="empty")

        logger.info(f"Vision analysis completed in {time.time() - start_time:.2f}s")
        return self._parse_analysis(content)

    def _parse_analysis(self, content: str) -> RoomAnalysis:
        try:
            data = loads_model_json(content)
        except json.JSONDecodeError as e:
            logger.error(f"Vision reply was not JSON: {content[:200]}")
            raise ExternalServiceError(f"Failed to parse room analysis: {e}", kind="empty") from e

        if not isinstance(data, dict):
            raise ExternalServiceError("Room analysis was not a JSON object", kind="empty")

        # Treat null or empty values as missing so the defaults apply
        cleaned: Dict[str, Any] = {key: value for key, value in data.items() if value not in (None, "")}
        try:
            return RoomAnalysis.model_validate(cleaned)
        except ValidationError as e:
            raise ExternalServiceError(f"Room analysis had an unexpected shape: {e}", kind="empty") from e


vision_service = VisionService()
