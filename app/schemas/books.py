"""Request/response schemas for the books endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class BookCreate(BaseModel):
    """Body for POST /books. Required-ness is enforced by the catalog service."""

    title: str | None = None
    author: str | None = None
    year: int | float | None = None


class BookUpdate(BaseModel):
    """Body for PUT /books/{id}; only fields actually sent are applied."""

    title: str | None = None
    author: str | None = None
    year: int | float | None = None


class BookOut(BaseModel):
    """A persisted book as returned to clients."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    author: str
    year: int | float | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @field_serializer("year")
    def serialize_year(self, year: int | float | None) -> int | float | None:
        # The column is a float; whole years go out as integers.
        if isinstance(year, float) and year.is_integer():
            return int(year)
        return year


class BookResponse(BaseModel):
    success: bool = True
    data: BookOut


class BookListResponse(BaseModel):
    """One page of books plus totals for the whole filtered set."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: list[BookOut]
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")
    total_items: int = Field(alias="totalItems")


class BookDeletedResponse(BaseModel):
    success: bool = True
    message: str = "Book deleted successfully"
