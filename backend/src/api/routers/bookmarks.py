"""Bookmark CRUD endpoints."""
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from schemas.bookmark import BookmarkResponse
from schemas.errors import ErrorResponse
from schemas.validators import validate_create, validate_update
from services import bookmark_service
from services.exceptions import BookmarkNotFoundError
from services.sanitizer import sanitize_bookmark, sanitize_bookmarks, sanitize_fields

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])

BookmarkPayload = Annotated[
    dict[str, Any],
    Body(
        default_factory=dict,
        description="Bookmark fields. Values are checked by the bookmark validation rules, "
                    "so wrongly typed values are reported with a 400 rather than coerced. "
                    "A missing body is treated as an empty object.",
    ),
]
NOT_FOUND_RESPONSE = {"description": BookmarkNotFoundError.message}


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks with markup in text fields escaped."""
    bookmarks = await bookmark_service.list_bookmarks(db)
    return sanitize_bookmarks(bookmarks)


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_bookmark(
    request: Request,
    response: Response,
    payload: BookmarkPayload,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    - **title**, **url** and **rating** are required
    - **url** must begin with `http://` or `https://`
    - **rating** must be a number in [1, 6); it is floored before storage
    """
    data = sanitize_fields(validate_create(payload))
    bookmark = await bookmark_service.create_bookmark(db, data)
    response.headers["Location"] = str(request.url_for("get_bookmark", bookmark_id=bookmark.id))
    return sanitize_bookmark(bookmark)


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    bookmark = await bookmark_service.get_bookmark(db, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return sanitize_bookmark(bookmark)


@router.patch(
    "/{bookmark_id}",
    status_code=204,
    responses={400: {"model": ErrorResponse}, 404: NOT_FOUND_RESPONSE},
)
async def update_bookmark(
    bookmark_id: int,
    payload: BookmarkPayload,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Update a bookmark.

    Only supplied fields are validated and written. A missing bookmark is reported
    before the payload is validated.
    """
    if await bookmark_service.get_bookmark(db, bookmark_id) is None:
        raise BookmarkNotFoundError(bookmark_id)

    data = sanitize_fields(validate_update(payload))
    bookmark = await bookmark_service.update_bookmark(db, bookmark_id, data)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)


@router.delete("/{bookmark_id}", status_code=204, responses={404: NOT_FOUND_RESPONSE})
async def delete_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    deleted = await bookmark_service.delete_bookmark(db, bookmark_id)
    if not deleted:
        raise BookmarkNotFoundError(bookmark_id)
