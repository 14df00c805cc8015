"""
Tile quantity calculator
"""
import math
from typing import Optional

from roomcraft.schemas.tools import TileCalculation, TileSize

WASTAGE_PERCENT = 10


def convert_to_feet(value: float, unit: str) -> float:
    if unit == "cm":
        return value / 30.48
    if unit == "in":
        return value / 12
    if unit == "ft":
        return value
    raise ValueError(f"Unsupported unit: {unit}")


def calculate_tiles(
    room_length: float,
    room_width: float,
    tile_length: float,
    tile_width: float,
    unit: str = "ft",
    price_per_tile: Optional[float] = None,
) -> TileCalculation:
    """
    Estimate how many tiles cover a rectangular floor

    Args:
        room_length: Room length in `unit`
        room_width: Room width in `unit`
        tile_length: Tile length in `unit`
        tile_width: Tile width in `unit`
        unit: cm, in or ft
        price_per_tile: Optional unit price for the estimate

    Returns:
        TileCalculation with lengths converted to feet
    """
    if min(room_length, room_width, tile_length, tile_width) <= 0:
        raise ValueError("All dimensions must be positive")

    room_length_ft = convert_to_feet(room_length, unit)
    room_width_ft = convert_to_feet(room_width, unit)
    tile_length_ft = convert_to_feet(tile_length, unit)
    tile_width_ft = convert_to_feet(tile_width, unit)

    room_area = room_length_ft * room_width_ft
    tile_area = tile_length_ft * tile_width_ft
    # Unit conversion leaves float noise; an exact fit must not cost an extra tile
    tiles_needed = math.ceil(round(room_area / tile_area, 9))
    wastage_count = -(-tiles_needed * WASTAGE_PERCENT // 100)
    total_tiles = tiles_needed + wastage_count

    return TileCalculation(
        room_length=room_length_ft,
        room_width=room_width_ft,
        tile_size=TileSize(length=tile_length_ft, width=tile_width_ft, unit="ft"),
        tiles_needed=tiles_needed,
        wastage_percent=WASTAGE_PERCENT,
        wastage_count=wastage_count,
        total_tiles=total_tiles,
        price_estimate=round(total_tiles * price_per_tile, 2) if price_per_tile else 0.0,
    )
