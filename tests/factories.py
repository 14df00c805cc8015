"""
Test data builders and fakes shared across test modules
"""
import uuid
from datetime import datetime
from typing import List, Optional
from unittest.mock import Mock

from roomcraft.schemas.products import Product


def make_product(
    name: str,
    price: float = 100.0,
    category: str = "furniture",
    style_tags: Optional[List[str]] = None,
    **overrides,
) -> Product:
    """Build a catalog product with sensible defaults"""
    now = datetime(2024, 1, 1, 12, 0, 0)
    data = {
        "id": str(uuid.uuid4()),
        "name": name,
        "price": price,
        "category": category,
        "style_tags": style_tags if style_tags is not None else ["modern"],
        "description": f"{name} for testing",
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return Product(**data)


class FakeCatalog:
    """In-memory stand-in for CatalogService"""

    def __init__(self, products: List[Product], fail: Optional[Exception] = None):
        self.products = list(products)
        self.fail = fail
        self.calls = []

    async def get_products(self, category=None, style_tags=None, search=None, limit=50, offset=0):
        self.calls.append({"category": category, "style_tags": style_tags, "search": search, "limit": limit})
        if self.fail:
            raise self.fail
        results = self.products
        if category:
            results = [p for p in results if p.category == category]
        if style_tags:
            results = [p for p in results if set(style_tags).intersection(p.style_tags)]
        if search:
            needle = search.lower()
            results = [p for p in results if needle in p.name.lower() or needle in (p.description or "").lower()]
        return results[offset:offset + limit]

    async def get_product_by_id(self, product_id):
        if self.fail:
            raise self.fail
        return next((p for p in self.products if p.id == product_id), None)


def chat_completion(content: Optional[str], total_tokens: int = 120) -> Mock:
    """Shape of an openai chat completion response"""
    message = Mock()
    message.content = content
    choice = Mock()
    choice.message = message
    response = Mock()
    response.choices = [choice]
    response.usage = Mock(total_tokens=total_tokens)
    return response
