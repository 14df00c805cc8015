"""
Demo catalog inserted into an empty products table on startup
"""
from typing import Any, Dict, List


def _store_link(store_name: str, price: float) -> List[Dict[str, Any]]:
    return [{"storeName": store_name, "url": "https://example.com", "price": price}]


def _image(label: str) -> List[str]:
    return [f"https://via.placeholder.com/400x300?text={label}"]


SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Modern Sofa",
        "price": 899.99,
        "category": "furniture",
        "style_tags": ["modern", "minimal"],
        "dimensions": {"length": 84, "width": 36, "height": 34, "unit": "in"},
        "images": _image("Modern+Sofa"),
        "store_links": _store_link("Furniture Store", 899.99),
        "description": "A comfortable modern sofa",
    },
    {
        "name": "Rustic Coffee Table",
        "price": 299.99,
        "category": "furniture",
        "style_tags": ["rustic", "wood"],
        "dimensions": {"length": 48, "width": 24, "height": 18, "unit": "in"},
        "images": _image("Coffee+Table"),
        "store_links": _store_link("Furniture Store", 299.99),
        "description": "Beautiful rustic coffee table",
    },
    {
        "name": "Ceramic Floor Tiles",
        "price": 4.99,
        "category": "tiles",
        "style_tags": ["modern", "ceramic"],
        "dimensions": {"length": 12, "width": 12, "height": 0.5, "unit": "in"},
        "images": _image("Ceramic+Tiles"),
        "store_links": _store_link("Tile Store", 4.99),
        "description": "High-quality ceramic floor tiles",
    },
    {
        "name": "Minimalist Chair",
        "price": 199.99,
        "category": "furniture",
        "style_tags": ["minimal", "modern"],
        "dimensions": {"length": 24, "width": 24, "height": 32, "unit": "in"},
        "images": _image("Minimalist+Chair"),
        "store_links": _store_link("Furniture Store", 199.99),
        "description": "Elegant minimalist chair",
    },
    {
        "name": "Wooden Bookshelf",
        "price": 449.99,
        "category": "furniture",
        "style_tags": ["rustic", "wood", "traditional"],
        "dimensions": {"length": 36, "width": 12, "height": 72, "unit": "in"},
        "images": _image("Bookshelf"),
        "store_links": _store_link("Furniture Store", 449.99),
        "description": "Classic wooden bookshelf",
    },
    {
        "name": "Marble Tiles",
        "price": 12.99,
        "category": "tiles",
        "style_tags": ["luxury", "marble"],
        "dimensions": {"length": 24, "width": 24, "height": 0.75, "unit": "in"},
        "images": _image("Marble+Tiles"),
        "store_links": _store_link("Tile Store", 12.99),
        "description": "Premium marble floor tiles",
    },
    {
        "name": "Decorative Vase",
        "price": 49.99,
        "category": "decor",
        "style_tags": ["modern", "ceramic"],
        "dimensions": {"length": 8, "width": 8, "height": 16, "unit": "in"},
        "images": _image("Decorative+Vase"),
        "store_links": _store_link("Decor Store", 49.99),
        "description": "Stylish decorative vase",
    },
    {
        "name": "Wall Art Print",
        "price": 79.99,
        "category": "decor",
        "style_tags": ["modern", "minimal"],
        "dimensions": {"length": 24, "width": 18, "height": 1, "unit": "in"},
        "images": _image("Wall+Art"),
        "store_links": _store_link("Decor Store", 79.99),
        "description": "Modern wall art print",
    },
]
