"""ORM model for catalog books."""

from sqlalchemy import Column, DateTime, Float, Integer, Text, func

from app.models.base import Base


class Book(Base):
    """A catalog entry. No owner: any authenticated caller may change it."""

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    year = Column(Float, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
