"""Shared pydantic building blocks: camelCase base model and the response envelope."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire. Accepts either form on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success envelope: {success, data, count?, message?}."""

    success: bool = True
    data: Optional[T] = None
    count: Optional[int] = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
