"""
Insert the sample catalog. Run once from project root:

  python -m app.scripts.seed_books

Running it again inserts the same books a second time.
"""

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.models.book import Book

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

SAMPLE_BOOKS = (
    {"title": "The Catcher in the Rye", "author": "J.D. Salinger", "year": 1951},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "year": 1960},
    {"title": "1984", "author": "George Orwell", "year": 1949},
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "year": 1925},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "year": 1813},
)


def seed_books(db: Session) -> int:
    """Add SAMPLE_BOOKS in one transaction; return how many were inserted."""
    db.add_all([Book(**data) for data in SAMPLE_BOOKS])
    db.commit()
    return len(SAMPLE_BOOKS)


def main() -> int:
    db = SessionLocal()
    try:
        inserted = seed_books(db)
        logger.info("Seeded books: inserted=%s", inserted)
        return 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
