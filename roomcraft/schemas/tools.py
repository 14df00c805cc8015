"""
Pydantic schemas for planning tools
"""
from typing import Optional

from pydantic import Field

from roomcraft.schemas.common import CamelModel
from roomcraft.schemas.products import DimensionUnit


class TileCalculatorRequest(CamelModel):
    room_length: Optional[float] = None
    room_width: Optional[float] = None
    tile_length: Optional[float] = None
    tile_width: Optional[float] = None
    unit: DimensionUnit = "ft"
    price_per_tile: Optional[float] = Field(default=None, ge=0)

    def has_all_dimensions(self) -> bool:
        values = (self.room_length, self.room_width, self.tile_length, self.tile_width)
        return all(value is not None and value > 0 for value in values)


class TileSize(CamelModel):
    length: float
    width: float
    unit: DimensionUnit = "ft"


class TileCalculation(CamelModel):
    """Tile quantity estimate, all lengths in feet"""

    room_length: float
    room_width: float
    tile_size: TileSize
    tiles_needed: int
    wastage_percent: int
    wastage_count: int
    total_tiles: int
    price_estimate: float
