"""Async PostgreSQL access to the ``books`` catalogue using asyncpg.

Direct SQL, no ORM. The schema is owned by the website; these helpers only
read book titles and write corrected ones.
"""

from __future__ import annotations

import asyncpg

from hadith_hub.config import settings
from hadith_hub.models import Book, TitleUpdate
from hadith_hub.utils.logging import DIM, RED, RESET, get_logger

log = get_logger()

_pool: asyncpg.Pool | None = None


async def get_pool(database_url: str | None = None) -> asyncpg.Pool:
    global _pool
    if _pool is None:
        url = database_url or settings.database_url
        _pool = await asyncpg.create_pool(url, min_size=1, max_size=5)
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool:
        await _pool.close()
        _pool = None


async def get_books(pool: asyncpg.Pool) -> list[Book]:
    rows = await pool.fetch(
        "SELECT id, title_ar, title_en, author_ar, author_en FROM books ORDER BY id"
    )
    return [Book(**dict(r)) for r in rows]


async def apply_title_updates(pool: asyncpg.Pool, updates: list[TitleUpdate]) -> int:
    """Write corrected titles in one batch. executemany is atomic in asyncpg."""
    if not updates:
        return 0
    await pool.executemany(
        """
        UPDATE books
        SET title_ar = $1, title_en = $2, author_ar = $3, author_en = $4
        WHERE id = $5
        """,
        [(u.title_ar, u.title_en, u.author_ar, u.author_en, u.book_id) for u in updates],
    )
    return len(updates)


async def sync_english_titles(src_pool: asyncpg.Pool, dst_pool: asyncpg.Pool) -> dict:
    """Copy ``title_en`` for every book from the local DB to the hosted copy.

    A failing row is logged and counted; the rest still sync.
    Returns {updated, errors, total}.
    """
    rows = await src_pool.fetch("SELECT id, title_en FROM books ORDER BY id")
    log.info(f"Found {len(rows)} books in local database")

    updated = 0
    errors = 0
    for r in rows:
        try:
            await dst_pool.execute(
                "UPDATE books SET title_en = $1 WHERE id = $2",
                r["title_en"],
                r["id"],
            )
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            errors += 1
            log.error(f"  {RED}✗{RESET} Error updating book {r['id']}: {e}")
            continue
        updated += 1
        if updated % 100 == 0:
            log.info(f"  {DIM}Updated {updated} books...{RESET}")

    return {"updated": updated, "errors": errors, "total": len(rows)}
