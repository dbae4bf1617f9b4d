"""Reconcile catalogue books against the book-names spreadsheet.

A book is only corrected when exactly one spreadsheet row shares its
normalized Arabic title. Ambiguous keys are reported and left alone.
"""

from __future__ import annotations

from collections.abc import Iterable

from hadith_hub.models import (
    AlignmentReport,
    AlignmentRow,
    Book,
    ReconcileReport,
    TitleRecord,
    TitleUpdate,
)
from hadith_hub.text.matching import TitleIndex, classify
from hadith_hub.text.normalize import normalize_title


def _same(book: Book, record: TitleRecord) -> bool:
    return (
        book.title_ar == record.title_ar
        and book.title_en == record.title_en
        and book.author_ar == record.author_ar
        and book.author_en == record.author_en
    )


def plan_title_updates(books: Iterable[Book], index: TitleIndex) -> ReconcileReport:
    """Sort every book into updates / unchanged / ambiguous / unmatched.

    Books without an Arabic title are unmatched. Nothing is written;
    ``db.apply_title_updates`` takes ``report.updates``.
    """
    report = ReconcileReport()
    for book in books:
        key = normalize_title(book.title_ar)
        # An untitled book has nothing to match on; never pair it with untitled sheet rows
        matches = index.lookup(key) if key else []
        kind = classify(matches)

        if kind == "none":
            report.unmatched.append(book)
        elif kind == "ambiguous":
            report.ambiguous.append(book)
        elif _same(book, matches[0]):
            report.unchanged.append(book)
        else:
            match = matches[0]
            report.updates.append(
                TitleUpdate(
                    book_id=book.id,
                    title_ar=match.title_ar,
                    title_en=match.title_en,
                    author_ar=match.author_ar,
                    author_en=match.author_en,
                    old_title_en=book.title_en,
                )
            )
    return report


def check_alignment(
    records: Iterable[TitleRecord],
    books: Iterable[Book],
    limit: int | None = None,
) -> AlignmentReport:
    """For each spreadsheet row, find the book carrying the same title.

    Books are keyed by normalized title; if two books share a key the later
    one is used. Untitled rows and books never align.
    """
    by_key = {k: b for b in books if (k := normalize_title(b.title_ar))}

    report = AlignmentReport()
    for i, record in enumerate(records):
        if limit is not None and i >= limit:
            break
        report.rows.append(AlignmentRow(record=record, book=by_key.get(normalize_title(record.title_ar))))
    return report
