"""Bookmark model for storing rated bookmarks."""
from sqlalchemy import CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Bookmark(Base):
    """Bookmark model - stores a URL with a title, optional description and a 1-5 rating."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_bookmarks_rating_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
