"""
Common/shared Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All schemas should inherit from this.
    """

    model_config = ConfigDict(
        from_attributes=True,  # Allow ORM mode (SQLAlchemy objects)
        populate_by_name=True,  # Allow population by field name or alias
        str_strip_whitespace=True,  # Strip whitespace from strings
        validate_assignment=True,  # Validate on assignment, not just creation
    )


class MessageResponse(BaseModel):
    """Simple message response."""
    message: str


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""
    detail: str
    errors: list[dict] | None = None
    request_id: str | None = None


class NamedRef(BaseSchema):
    """``{id, name}`` pair used by lookups and dropdowns."""
    id: str
    name: str
