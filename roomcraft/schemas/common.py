"""
Shared schema building blocks for API payloads
"""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and accepts snake_case too"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ApiResponse(CamelModel, Generic[T]):
    """Envelope returned by every /api endpoint"""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def failure(cls, error: str, message: Optional[str] = None) -> dict:
        """Serialized error body, ready for a JSONResponse"""
        return cls(success=False, error=error, message=message).model_dump(by_alias=True, exclude_none=True)
