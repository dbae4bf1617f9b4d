import json

import pytest

from hadith_hub.models import Book, TitleRecord


@pytest.fixture
def alam_candidates():
    """Two spellings of the same title plus an unrelated book."""
    return [
        TitleRecord(index="1", titleAr="أعلام الدين", titleEn="A"),
        TitleRecord(index="2", titleAr="اعلام الدين", titleEn="B"),
        TitleRecord(index="3", titleAr="كتاب آخر", titleEn="C"),
    ]


@pytest.fixture
def mapping_records():
    return [
        TitleRecord(index="1", titleAr="الکافي", titleEn="Al-Kafi", authorAr="الكليني", authorEn="al-Kulayni"),
        TitleRecord(index="2", titleAr="بحار الأنوار", titleEn="Bihar al-Anwar", authorAr="المجلسي", authorEn="al-Majlisi"),
        TitleRecord(index="3", titleAr="الأمالي", titleEn="Al-Amali (Saduq)", authorAr="الصدوق", authorEn="al-Saduq"),
        TitleRecord(index="4", titleAr="الامالي", titleEn="Al-Amali (Tusi)", authorAr="الطوسي", authorEn="al-Tusi"),
    ]


@pytest.fixture
def catalogue_books():
    return [
        Book(id="kafi", title_ar="الكافي", title_en="Kafi", author_ar="الكليني", author_en="al-Kulayni"),
        Book(id="bihar", title_ar="بحار الانوار", title_en="Bihar al-Anwar", author_ar="المجلسي", author_en="al-Majlisi"),
        Book(id="amali", title_ar="الأمالي", title_en="Amali"),
        Book(id="tuhaf", title_ar="تحف العقول", title_en="Tuhaf al-Uqul"),
    ]


@pytest.fixture
def mapping_file(tmp_path, mapping_records):
    path = tmp_path / "book-names-mapping.json"
    path.write_text(
        json.dumps([r.to_mapping() for r in mapping_records], ensure_ascii=False),
        encoding="utf-8",
    )
    return path


class FakePool:
    """Stands in for asyncpg.Pool: canned fetch rows, records writes."""

    def __init__(self, rows=None, fail_ids=(), error=None):
        self.rows = rows or []
        self.fail_ids = set(fail_ids)
        self.error = error
        self.batches = []
        self.executed = []
        self.closed = False

    async def fetch(self, sql, *args):
        return self.rows

    async def executemany(self, sql, args):
        self.batches.append((sql, list(args)))

    async def execute(self, sql, *args):
        import asyncpg

        if args and args[-1] in self.fail_ids:
            raise (self.error or asyncpg.PostgresError)(f"cannot update {args[-1]}")
        self.executed.append((sql, args))

    async def close(self):
        self.closed = True


@pytest.fixture
def book_rows(catalogue_books):
    return [b.model_dump() for b in catalogue_books]


@pytest.fixture
def fake_pool():
    return FakePool
