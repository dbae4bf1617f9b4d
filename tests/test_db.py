import asyncio

from hadith_hub.db import apply_title_updates, get_books, sync_english_titles
from hadith_hub.models import TitleUpdate


def test_get_books(fake_pool, book_rows):
    rows = book_rows + [{"id": 99, "title_ar": "المحاسن", "title_en": None, "author_ar": None, "author_en": None}]
    books = asyncio.run(get_books(fake_pool(rows)))
    assert [b.id for b in books] == ["kafi", "bihar", "amali", "tuhaf", "99"]
    assert books[-1].title_en == ""


def test_apply_title_updates_single_batch(fake_pool):
    pool = fake_pool()
    updates = [
        TitleUpdate(book_id="kafi", title_ar="الکافي", title_en="Al-Kafi", author_ar="الكليني", author_en="al-Kulayni"),
        TitleUpdate(book_id="bihar", title_ar="بحار الأنوار", title_en="Bihar", author_ar="", author_en=""),
    ]
    assert asyncio.run(apply_title_updates(pool, updates)) == 2
    assert len(pool.batches) == 1
    sql, args = pool.batches[0]
    assert "UPDATE books" in sql
    assert args[0] == ("الکافي", "Al-Kafi", "الكليني", "al-Kulayni", "kafi")


def test_apply_no_updates_is_noop(fake_pool):
    pool = fake_pool()
    assert asyncio.run(apply_title_updates(pool, [])) == 0
    assert pool.batches == []


def test_sync_counts_errors_and_continues(fake_pool):
    src = fake_pool([{"id": "a", "title_en": "A"}, {"id": "b", "title_en": "B"}, {"id": "c", "title_en": "C"}])
    dst = fake_pool(fail_ids={"b"})
    result = asyncio.run(sync_english_titles(src, dst))
    assert result == {"updated": 2, "errors": 1, "total": 3}
    assert [args for _, args in dst.executed] == [("A", "a"), ("C", "c")]


def test_sync_survives_dropped_connection(fake_pool):
    import asyncpg

    src = fake_pool([{"id": "a", "title_en": "A"}, {"id": "b", "title_en": "B"}])
    dst = fake_pool(fail_ids={"a"}, error=asyncpg.InterfaceError)
    result = asyncio.run(sync_english_titles(src, dst))
    assert result == {"updated": 1, "errors": 1, "total": 2}
