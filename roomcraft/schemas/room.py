"""
Pydantic schemas for room analysis and room photo upload
"""
from typing import List, Optional

from pydantic import Field

from roomcraft.schemas.common import CamelModel
from roomcraft.schemas.products import Dimensions


class Wall(CamelModel):
    color: str = "#FFFFFF"
    material: Optional[str] = None
    dimensions: Dimensions = Field(default_factory=lambda: Dimensions(unit="ft"))


class Floor(CamelModel):
    type: str = "unknown"
    color: Optional[str] = None
    material: Optional[str] = None


class EmptySpace(CamelModel):
    area: float = 0
    location: str = ""


def _default_walls() -> List[Wall]:
    return [Wall()]


class RoomAnalysis(CamelModel):
    """Structured description of a room photo"""

    colors: List[str] = Field(default_factory=list)
    room_shape: str = "rectangular"
    walls: List[Wall] = Field(default_factory=_default_walls)
    floor: Floor = Field(default_factory=Floor)
    furniture_detected: List[str] = Field(default_factory=list)
    lighting: str = "mixed"
    empty_spaces: List[EmptySpace] = Field(default_factory=list)


class RoomAnalyzeRequest(CamelModel):
    photo_url: Optional[str] = None


class UploadedPhoto(CamelModel):
    url: str
