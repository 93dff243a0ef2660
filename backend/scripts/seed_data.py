"""Seed script to populate the local dev database with sample bookmarks.

Usage:
    PYTHONPATH=backend/src python backend/scripts/seed_data.py populate
    PYTHONPATH=backend/src python backend/scripts/seed_data.py populate --force
    PYTHONPATH=backend/src python backend/scripts/seed_data.py clear
"""

import argparse
import asyncio
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import get_settings
from core.logging_config import configure_logging
from models import Base, Bookmark
from schemas.validators import validate_create
from services import bookmark_service
from services.sanitizer import sanitize_fields

logger = logging.getLogger(__name__)

BOOKMARKS = [
    {
        'title': 'Youtube',
        'description': 'a website for watching videos',
        'url': 'http://www.youtube.com',
        'rating': 4,
    },
    {
        'title': 'Google',
        'description': 'the best search engine around',
        'url': 'http://www.google.com',
        'rating': 5,
    },
    {
        'title': 'Reddit',
        'description': 'the front page of the internet',
        'url': 'http://www.reddit.com',
        'rating': 1,
    },
]


async def count_bookmarks(session: AsyncSession) -> int:
    """Return the number of stored bookmarks."""
    result = await session.execute(select(func.count()).select_from(Bookmark))
    return result.scalar_one()


async def create_bookmarks(session: AsyncSession) -> list[Bookmark]:
    """Insert the sample bookmarks through the same validation pipeline as the API."""
    created = []
    for data in BOOKMARKS:
        payload = sanitize_fields(validate_create(data))
        created.append(await bookmark_service.create_bookmark(session, payload))
    return created


async def clear_data(session: AsyncSession) -> int:
    """Delete every bookmark, returning the number of rows removed."""
    result = await session.execute(delete(Bookmark))
    return result.rowcount


async def populate(force: bool = False) -> None:
    """Populate the database with sample bookmarks."""
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        try:
            existing = await count_bookmarks(session)
            if existing and not force:
                print(
                    f'Database already has {existing} bookmark(s). '
                    'Use --force to clear and re-seed.'
                )
                return
            if existing:
                removed = await clear_data(session)
                logger.info('Cleared %s existing bookmark(s)', removed)
            created = await create_bookmarks(session)
            await session.commit()
            print(f'Seed data created successfully ({len(created)} bookmarks).')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


async def clear() -> None:
    """Remove all bookmarks."""
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            removed = await clear_data(session)
            await session.commit()
            print(f'Removed {removed} bookmark(s).')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    configure_logging(get_settings().log_level)

    parser = argparse.ArgumentParser(description='Seed the dev database with sample bookmarks.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser('populate', help='Populate database with sample bookmarks')
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing bookmarks before populating',
    )

    subparsers.add_parser('clear', help='Remove all bookmarks')

    args = parser.parse_args()

    if args.command == 'populate':
        asyncio.run(populate(force=args.force))
    elif args.command == 'clear':
        asyncio.run(clear())


if __name__ == '__main__':
    main()
