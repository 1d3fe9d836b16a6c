"""Books endpoints: public paginated listing, token-protected create/update/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.auth import AUTH_ERROR_RESPONSES, require_capability
from app.core.database import get_db
from app.schemas.auth import TokenIdentity
from app.schemas.books import (
    BookCreate,
    BookDeletedResponse,
    BookListResponse,
    BookOut,
    BookResponse,
    BookUpdate,
)
from app.schemas.common import ErrorResponse
from app.services.authorization import Capability
from app.services.catalog import CatalogService

router = APIRouter()

require_catalog_write = require_capability(Capability.CATALOG_WRITE)

WRITE_ERROR_RESPONSES = {
    **AUTH_ERROR_RESPONSES,
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


def get_catalog_service(db: Annotated[Session, Depends(get_db)]) -> CatalogService:
    return CatalogService(db)


@router.get("", response_model=BookListResponse, responses={500: {"model": ErrorResponse}})
def list_books(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    page: Annotated[str | None, Query(description="1-based page number")] = None,
    limit: Annotated[str | None, Query(description="Items per page (default 5)")] = None,
    search: Annotated[str | None, Query(description="Substring of title or author")] = None,
) -> BookListResponse:
    """
    Return books newest first.

    page and limit are forgiving: missing, zero or non-numeric values fall back
    to 1 and 5, negatives become 1. search matches title or author,
    case-insensitively.
    """
    result = service.list_books(page=page, limit=limit, search=search)
    return BookListResponse(
        data=[BookOut.model_validate(b) for b in result.items],
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
        total_items=result.total_items,
    )


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses=WRITE_ERROR_RESPONSES,
)
def create_book(
    body: BookCreate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    _identity: Annotated[TokenIdentity, Depends(require_catalog_write)],
) -> BookResponse:
    """Create a book. title, author and year are all required."""
    book = service.create_book(body.title, body.author, body.year)
    return BookResponse(data=BookOut.model_validate(book))


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={**WRITE_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
def update_book(
    book_id: str,
    body: BookUpdate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    _identity: Annotated[TokenIdentity, Depends(require_catalog_write)],
) -> BookResponse:
    """Update any subset of title, author and year; fields not sent are left alone."""
    book = service.update_book(book_id, body.model_dump(exclude_unset=True))
    return BookResponse(data=BookOut.model_validate(book))


@router.delete(
    "/{book_id}",
    response_model=BookDeletedResponse,
    responses={**WRITE_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
def delete_book(
    book_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    _identity: Annotated[TokenIdentity, Depends(require_catalog_write)],
) -> BookDeletedResponse:
    service.delete_book(book_id)
    return BookDeletedResponse()
