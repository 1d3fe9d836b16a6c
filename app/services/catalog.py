"""Catalog service: paginated search over books plus create, update and delete."""

import logging
import math
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, sessionmaker

from app.models.book import Book
from app.services.errors import (
    FetchFailedError,
    InvalidInputError,
    NotFoundError,
    ValidationError,
)
from app.services.validation import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    coerce_positive_int,
    normalize_search,
    parse_book_id,
    validate_book_changes,
    validate_new_book,
)

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"

# Largest value a signed 64-bit LIMIT/OFFSET parameter can hold.
MAX_SQL_INT = 2**63 - 1


@dataclass
class BookPage:
    items: list[Book]
    page: int
    limit: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit)


def _escape_like(text: str) -> str:
    """Escape LIKE wildcards so the search text matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class CatalogService:
    """Book operations on one DB session. Write operations assume the caller passed the token guard."""

    def __init__(
        self,
        db: Session,
        session_factory: Callable[[], Session] | None = None,
    ) -> None:
        self.db = db
        # Opens the second session the listing count runs on.
        self._session_factory = session_factory or sessionmaker(bind=db.get_bind())

    def _filtered(self, session: Session, search: str) -> Query:
        query = session.query(Book)
        if search:
            pattern = f"%{_escape_like(search)}%"
            query = query.filter(
                or_(
                    Book.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Book.author.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return query

    def _count(self, search: str) -> int:
        with self._session_factory() as session:
            return self._filtered(session, search).count()

    def list_books(
        self,
        page: Any = None,
        limit: Any = None,
        search: Any = None,
    ) -> BookPage:
        """
        Return one page of books, newest first.

        page and limit are coerced leniently (see coerce_positive_int) and
        clamped so the offset fits a 64-bit integer; search matches title or
        author as a case-insensitive substring. The page and the total count
        are read concurrently, the count on its own session. Any database
        error becomes FetchFailedError.
        """
        page_size = min(coerce_positive_int(limit, DEFAULT_LIMIT), MAX_SQL_INT)
        page_num = min(coerce_positive_int(page, DEFAULT_PAGE), MAX_SQL_INT // page_size + 1)
        text = normalize_search(search)

        try:
            with ThreadPoolExecutor(max_workers=1) as pool:
                count_future = pool.submit(self._count, text)
                items = (
                    self._filtered(self.db, text)
                    .order_by(Book.created_at.desc(), Book.id.desc())
                    .offset((page_num - 1) * page_size)
                    .limit(page_size)
                    .all()
                )
                total_items = count_future.result()
        except SQLAlchemyError:
            logger.exception(
                "Failed to fetch books: page=%s limit=%s search=%r",
                page_num,
                page_size,
                text,
            )
            raise FetchFailedError()
        return BookPage(
            items=items, page=page_num, limit=page_size, total_items=total_items
        )

    def create_book(self, title: Any, author: Any, year: Any) -> Book:
        """Persist a new book. title, author and a truthy year are required."""
        result = validate_new_book(title, author, year)
        if not result.ok:
            raise ValidationError(
                "Title, author, and year are required", errors=result.error_dicts()
            )
        book = Book(**result.values)
        self.db.add(book)
        self.db.commit()
        self.db.refresh(book)
        logger.info("Created book id=%s", book.id)
        return book

    def _get_existing(self, book_id: int) -> Book:
        book = self.db.get(Book, book_id)
        if book is None:
            raise NotFoundError()
        return book

    def update_book(self, raw_id: Any, changes: dict[str, Any]) -> Book:
        """
        Apply the given subset of title/author/year to a book and return it.

        Raises InvalidInputError for a malformed id or bad field values and
        NotFoundError when no such book exists.
        """
        book_id = parse_book_id(raw_id)
        if book_id is None:
            raise InvalidInputError()
        result = validate_book_changes(changes)
        if not result.ok:
            raise InvalidInputError(errors=result.error_dicts())

        book = self._get_existing(book_id)
        for field, value in result.values.items():
            setattr(book, field, value)
        self.db.commit()
        self.db.refresh(book)
        logger.info("Updated book id=%s fields=%s", book.id, sorted(result.values))
        return book

    def delete_book(self, raw_id: Any) -> None:
        """Remove a book permanently. Raises InvalidInputError or NotFoundError."""
        book_id = parse_book_id(raw_id)
        if book_id is None:
            raise InvalidInputError("Invalid ID")
        book = self._get_existing(book_id)
        self.db.delete(book)
        self.db.commit()
        logger.info("Deleted book id=%s", book_id)
