"""
Database module for Roomcraft
"""
from .models import Base, ProductRecord

__all__ = [
    "Base",
    "ProductRecord",
]
