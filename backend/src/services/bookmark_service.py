"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import StorageError

logger = logging.getLogger(__name__)


async def list_bookmarks(db: AsyncSession) -> list[Bookmark]:
    """Return all bookmarks ordered by ID."""
    try:
        result = await db.execute(select(Bookmark).order_by(Bookmark.id))
    except SQLAlchemyError as e:
        logger.exception("Failed to list bookmarks")
        raise StorageError("list") from e
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, bookmark_id: int) -> Bookmark | None:
    """Return the bookmark with the given ID, or None if it doesn't exist."""
    try:
        result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch bookmark %s", bookmark_id)
        raise StorageError("fetch") from e
    return result.scalar_one_or_none()


async def create_bookmark(db: AsyncSession, data: BookmarkCreate) -> Bookmark:
    """
    Create a new bookmark.

    Args:
        db: Database session.
        data: Validated and sanitized bookmark fields.

    Returns:
        The created bookmark with its database-assigned ID.

    Raises:
        StorageError: If the insert fails.
    """
    bookmark = Bookmark(**data.model_dump())
    db.add(bookmark)
    try:
        await db.flush()
        await db.refresh(bookmark)
    except SQLAlchemyError as e:
        logger.exception("Failed to create bookmark")
        raise StorageError("create") from e
    logger.info("Created bookmark %s", bookmark.id)
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark | None:
    """
    Apply a partial update to a bookmark.

    Only fields explicitly set on `data` are written; everything else is left as-is.

    Args:
        db: Database session.
        bookmark_id: ID of the bookmark to update.
        data: Validated and sanitized fields to write.

    Returns:
        The updated bookmark, or None if not found.

    Raises:
        StorageError: If the update fails.
    """
    bookmark = await get_bookmark(db, bookmark_id)
    if bookmark is None:
        return None

    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(bookmark, field, value)
    try:
        await db.flush()
    except SQLAlchemyError as e:
        logger.exception("Failed to update bookmark %s", bookmark_id)
        raise StorageError("update") from e
    logger.info("Updated bookmark %s fields=%s", bookmark_id, sorted(changes))
    return bookmark


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> bool:
    """
    Permanently delete a bookmark.

    Returns:
        True if deleted, False if not found.

    Raises:
        StorageError: If the delete fails.
    """
    bookmark = await get_bookmark(db, bookmark_id)
    if bookmark is None:
        return False

    try:
        await db.delete(bookmark)
        await db.flush()
    except SQLAlchemyError as e:
        logger.exception("Failed to delete bookmark %s", bookmark_id)
        raise StorageError("delete") from e
    logger.info("Deleted bookmark %s", bookmark_id)
    return True
