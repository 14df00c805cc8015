"""
Pydantic schemas for Recommendation Engine
"""
from typing import List, Literal, Optional

from pydantic import Field

from roomcraft.schemas.common import CamelModel
from roomcraft.schemas.products import Product, ProductCategory

Lighting = Literal["natural", "artificial", "mixed"]


class RoomDescription(CamelModel):
    """User-supplied description of the room"""

    length: float = Field(gt=0, le=1000)
    width: float = Field(gt=0, le=1000)
    height: Optional[float] = Field(default=None, gt=0, le=1000)
    wall_colors: List[str] = Field(default_factory=list)
    floor_type: Optional[str] = None
    lighting: Lighting = "mixed"
    existing_furniture: Optional[List[str]] = None
    style_preference: Optional[List[str]] = None


class UserPreferences(CamelModel):
    """Style preferences used for filtering"""

    style_tags: List[str] = Field(default_factory=list)
    color_palette: Optional[List[str]] = None
    material_preferences: Optional[List[str]] = None


class BudgetRange(CamelModel):
    """Inclusive price range"""

    min: float = Field(default=0, ge=0)
    max: float = Field(ge=0)
    currency: str = "USD"


class RecommendationRequest(CamelModel):
    """Request for product recommendations"""

    room_photo_url: Optional[str] = None
    room_description: Optional[RoomDescription] = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    budget: Optional[BudgetRange] = None

    class Config:
        json_schema_extra = {
            "example": {
                "roomDescription": {
                    "length": 14,
                    "width": 12,
                    "wallColors": ["white", "sage"],
                    "lighting": "natural",
                    "stylePreference": ["modern"],
                },
                "preferences": {"styleTags": ["modern", "minimal"]},
                "budget": {"min": 100, "max": 1000, "currency": "USD"},
            }
        }


class Recommendation(CamelModel):
    """Single product recommendation"""

    product: Product
    rank: int = Field(ge=1)
    reasoning: str
    match_score: float = Field(ge=0.0, le=1.0)
    suggested_combinations: List[str] = Field(default_factory=list, max_length=2)


class DimensionBounds(CamelModel):
    """Optional per-axis dimension bounds"""

    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    def is_empty(self) -> bool:
        return not (self.length or self.width or self.height)


class SearchFilters(CamelModel):
    """Criteria for catalog search"""

    query: Optional[str] = None
    category: Optional[ProductCategory] = None
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    style_tags: Optional[List[str]] = None
    min_dimensions: Optional[DimensionBounds] = None
    max_dimensions: Optional[DimensionBounds] = None
    sort_by: Optional[Literal["price", "name", "relevance", "popularity"]] = None
    sort_order: Literal["asc", "desc"] = "asc"

    class Config:
        use_enum_values = True


class SearchResult(CamelModel):
    """Paginated search result"""

    products: List[Product]
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    filters: SearchFilters
