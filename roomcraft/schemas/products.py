"""
Pydantic schemas for catalog products
"""
from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field

from roomcraft.schemas.common import CamelModel

DimensionUnit = Literal["cm", "in", "ft"]


class ProductCategory(str, Enum):
    """Catalog categories"""

    FURNITURE = "furniture"
    TILES = "tiles"
    APPLIANCES = "appliances"
    DECOR = "decor"
    MATERIALS = "materials"
    PAINT = "paint"


class Dimensions(CamelModel):
    """Physical size of a product"""

    length: float = 0
    width: float = 0
    height: float = 0
    unit: DimensionUnit = "in"


class StoreLink(CamelModel):
    """Where a product can be bought"""

    store_name: str
    url: str
    price: Optional[float] = None


class Product(CamelModel):
    """Catalog product as seen by the API and the recommendation engine"""

    id: str
    name: str
    price: float = Field(ge=0)
    category: ProductCategory
    style_tags: List[str] = Field(default_factory=list)
    dimensions: Dimensions = Field(default_factory=Dimensions)
    images: List[str] = Field(default_factory=list)
    model_3d_url: str = Field(default="", alias="model3DUrl")
    store_links: List[StoreLink] = Field(default_factory=list)
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        use_enum_values = True
        frozen = True


class ModelUrl(CamelModel):
    """3D model location for a product"""

    url: str
