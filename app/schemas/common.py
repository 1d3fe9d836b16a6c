"""Error body shared by every endpoint."""

from pydantic import BaseModel, Field


class FieldErrorOut(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """JSON body for any non-2xx response."""

    success: bool = False
    message: str = Field(description="Short machine-readable reason")
    errors: list[FieldErrorOut] | None = None
