"""
Planning tool routes
"""
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from roomcraft.schemas.common import ApiResponse
from roomcraft.schemas.tools import TileCalculation, TileCalculatorRequest
from roomcraft.services.tile_calculator import calculate_tiles

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tools", tags=["tools"])


@router.post("/tile-calculator", response_model=ApiResponse[TileCalculation], response_model_exclude_none=True)
async def tile_calculator(request: TileCalculatorRequest):
    """Estimate the number of tiles needed for a floor"""
    if not request.has_all_dimensions():
        return JSONResponse(status_code=400, content=ApiResponse.failure("All dimensions are required"))

    calculation = calculate_tiles(
        request.room_length,
        request.room_width,
        request.tile_length,
        request.tile_width,
        unit=request.unit,
        price_per_tile=request.price_per_tile,
    )
    logger.info(f"Tile estimate: {calculation.total_tiles} tiles ({calculation.wastage_count} wastage)")
    return ApiResponse(success=True, data=calculation)
