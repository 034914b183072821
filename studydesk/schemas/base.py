"""Base schema configuration."""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class IDMixin(BaseModel):
    """Mixin for the opaque string record ID."""

    id: str


class CreatedResponse(BaseSchema):
    """ID of a newly created record."""

    id: str
