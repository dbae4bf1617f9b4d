"""Click CLI entry point.

Usage:
    hadith-hub parse-sheet List_of_books.xlsx --out book-names-mapping.json
    hadith-hub match "أعلام الدین"
    hadith-hub index-stats
    hadith-hub check --limit 100
    hadith-hub update-titles --dry-run
    hadith-hub sync-titles
"""

from __future__ import annotations

import asyncio

import click

from hadith_hub.config import settings
from hadith_hub.models import TitleRecord
from hadith_hub.text.matching import TitleIndex, find_matches
from hadith_hub.text.normalize import normalize_title
from hadith_hub.utils.logging import BOLD, DIM, GREEN, RED, RESET, YELLOW, get_logger

log = get_logger()

_mapping_option = click.option(
    "--mapping",
    "mapping_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Book-names mapping JSON (default: MAPPING_PATH setting)",
)


def _load_mapping(mapping_path: str | None) -> list[TitleRecord]:
    from hadith_hub.sheet import read_mapping

    try:
        return read_mapping(mapping_path or settings.mapping_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
def cli() -> None:
    """Hadith Hub catalogue tools."""
    pass


@cli.command("parse-sheet")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option("--out", "out_path", default=None, type=click.Path(dir_okay=False), help="Output JSON path")
@click.option("--sheet", default="0", help="Sheet name or 0-based position")
def parse_sheet(path: str | None, out_path: str | None, sheet: str) -> None:
    """Convert the book-names spreadsheet into the JSON mapping."""
    from hadith_hub.sheet import load_title_records, write_mapping

    path = path or settings.sheet_path
    if not path:
        raise click.ClickException("No spreadsheet given and SHEET_PATH not set")

    sheet_ref: str | int = int(sheet) if sheet.isdigit() else sheet
    try:
        records = load_title_records(path, sheet_ref)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    for r in records[:5]:
        click.echo(f"  {DIM}{r.index}{RESET}  {r.title_ar} | {r.title_en}")

    out = write_mapping(records, out_path or settings.mapping_path)
    click.echo(f"\n  {GREEN}✓{RESET} {len(records)} books written to {out}")


@cli.command()
@click.argument("query")
@_mapping_option
def match(query: str, mapping_path: str | None) -> None:
    """Show every mapping entry whose title normalizes like QUERY."""
    records = _load_mapping(mapping_path)
    matches = find_matches(query, records)

    click.echo(f"Looking for: {query}")
    click.echo(f"Normalized: {normalize_title(query)}")
    click.echo(f"Matches: {len(matches)}")
    for m in matches:
        click.echo(f" - {m.title_ar} | {m.title_en}")
    if len(matches) > 1:
        click.echo(f"{YELLOW}Ambiguous: {len(matches)} entries share this title{RESET}")


@cli.command("index-stats")
@_mapping_option
def index_stats(mapping_path: str | None) -> None:
    """Count distinct normalized titles and list duplicates."""
    records = _load_mapping(mapping_path)
    index = TitleIndex(records)
    duplicates = index.duplicates()

    click.echo(f"Loaded {len(records)} entries")
    untitled = index.untitled()
    click.echo(f"Unique normalized titles: {len(index) - bool(untitled)}")
    click.echo(f"Duplicate titles: {len(duplicates)}")
    if untitled:
        rows = ", ".join(e.index for e in untitled)
        click.echo(f"  {RED}Without Arabic title: {len(untitled)}{RESET} {DIM}→ {rows}{RESET}")
    for key, entries in duplicates.items():
        rows = ", ".join(e.index for e in entries)
        click.echo(f"  {YELLOW}{entries[0].title_ar}{RESET} {DIM}({key}){RESET} → {rows}")


@cli.command()
@_mapping_option
@click.option("--limit", default=None, type=int, help="Only check the first N mapping entries")
def check(mapping_path: str | None, limit: int | None) -> None:
    """Check that mapping titles line up with books in the database."""
    records = _load_mapping(mapping_path)
    asyncio.run(_check(records, limit))


async def _check(records: list[TitleRecord], limit: int | None) -> None:
    from hadith_hub.db import close_pool, get_books, get_pool
    from hadith_hub.reconcile import check_alignment

    try:
        pool = await get_pool()
        books = await get_books(pool)
    finally:
        await close_pool()

    click.echo(f"Database has {len(books)} books")
    report = check_alignment(records, books, limit=limit)

    shown = 0
    missing = 0
    for row in report.rows:
        if row.book is not None and shown < settings.report_limit:
            click.echo(
                f"  {DIM}{row.record.index}{RESET} DB={row.book.id} | "
                f"{row.record.title_ar[:30]} | {row.record.title_en[:30]}"
            )
            shown += 1
        elif row.book is None:
            missing += 1
            if missing <= 5:
                click.echo(f"  {RED}Not found:{RESET} {row.record.index} - {row.record.title_ar}")

    click.echo(f"\n{len(report.rows)} rows: {report.aligned} found in DB, {report.not_found} not found")


@cli.command("update-titles")
@_mapping_option
@click.option("--dry-run", is_flag=True, help="Report what would change without writing")
def update_titles(mapping_path: str | None, dry_run: bool) -> None:
    """Correct book titles/authors from the mapping (unique matches only)."""
    records = _load_mapping(mapping_path)
    asyncio.run(_update_titles(records, dry_run))


async def _update_titles(records: list[TitleRecord], dry_run: bool) -> None:
    from hadith_hub.db import apply_title_updates, close_pool, get_books, get_pool
    from hadith_hub.reconcile import plan_title_updates

    index = TitleIndex(records)
    log.info(f"Found {len(index.duplicates())} normalized titles with duplicates in mapping")

    try:
        pool = await get_pool()
        books = await get_books(pool)
        log.info(f"Found {len(books)} books in database")

        report = plan_title_updates(books, index)
        for u in report.updates[: settings.report_limit]:
            click.echo(f"{BOLD}{u.book_id}{RESET}")
            click.echo(f"  Old En: {u.old_title_en or '(empty)'}")
            click.echo(f"  New En: {u.title_en}")

        if not dry_run:
            await apply_title_updates(pool, report.updates)
    finally:
        await close_pool()

    summary = report.summary()
    verb = "Would update" if dry_run else "Updated"
    click.echo(f"\n{BOLD}Results{RESET}")
    click.echo(f"  {GREEN}{verb}: {summary['updated']}{RESET}")
    click.echo(f"  {YELLOW}Skipped (duplicate): {summary['skipped_duplicate']}{RESET}")
    click.echo(f"  No match: {summary['no_match']}")
    click.echo(f"  Unchanged: {summary['unchanged']}")

    if report.unmatched and len(report.unmatched) <= 50:
        click.echo(f"\n{DIM}Unmatched books:{RESET}")
        for b in report.unmatched:
            click.echo(f"  {b.id}: {b.title_ar}")


@cli.command("sync-titles")
def sync_titles() -> None:
    """Copy English titles from the local DB to the hosted copy."""
    if not settings.remote_database_url:
        click.echo("Error: REMOTE_DATABASE_URL not set in .env")
        raise SystemExit(1)
    asyncio.run(_sync_titles())


async def _sync_titles() -> None:
    import asyncpg

    from hadith_hub.db import sync_english_titles

    src_pool = await asyncpg.create_pool(settings.database_url, min_size=1, max_size=2)
    dst_pool = await asyncpg.create_pool(settings.remote_database_url, min_size=1, max_size=2)
    try:
        result = await sync_english_titles(src_pool, dst_pool)
    finally:
        await src_pool.close()
        await dst_pool.close()

    click.echo(
        f"\n  {GREEN}✓{RESET} Sync complete: {result['updated']} books updated, {result['errors']} errors"
    )


if __name__ == "__main__":
    cli()
