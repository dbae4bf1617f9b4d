"""Book-names spreadsheet loading and the JSON mapping file.

The spreadsheet (List_of_books.xlsx) has a header row followed by one row per
book: index, Arabic/Persian title, English title, Arabic author, English
author. ``parse-sheet`` converts it to ``book-names-mapping.json`` once; every
other command reads the mapping.
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from hadith_hub.models import TitleRecord
from hadith_hub.text.matching import InvalidCandidatesError
from hadith_hub.utils.logging import DIM, RESET, YELLOW, get_logger

log = get_logger()

COLUMNS = ["index", "title_ar", "title_en", "author_ar", "author_en"]
_EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def _cell(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    # Excel stores row numbers as floats
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def read_table(path: str | Path, sheet: str | int = 0) -> pd.DataFrame:
    """Read a spreadsheet or CSV as raw cells, header row included."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Spreadsheet not found: {path}")

    suffix = path.suffix.lower()
    if suffix in _EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=sheet, header=None, dtype=object)
    if suffix == ".csv":
        return pd.read_csv(path, header=None, dtype=object, keep_default_na=False)
    raise ValueError(f"Unsupported spreadsheet format: {path.suffix or path.name}")


def records_from_frame(df: pd.DataFrame) -> list[TitleRecord]:
    """Turn raw rows into TitleRecords.

    The first row is the header. Rows without an index in the first column
    are blank or notes and are skipped.
    """
    if df.shape[1] < len(COLUMNS):
        log.warning(
            f"{YELLOW}Expected {len(COLUMNS)} columns, found {df.shape[1]}, no rows loaded{RESET}"
        )
        return []

    records: list[TitleRecord] = []
    for pos, values in enumerate(df.iloc[1:, : len(COLUMNS)].itertuples(index=False), start=2):
        cells = [_cell(v) for v in values]
        if not cells[0]:
            continue
        records.append(TitleRecord(**dict(zip(COLUMNS, cells)), row=pos))
    return records


def load_title_records(path: str | Path, sheet: str | int = 0) -> list[TitleRecord]:
    records = records_from_frame(read_table(path, sheet))
    log.info(f"Loaded {len(records)} entries from {Path(path).name}")
    for r in records[:5]:
        log.debug(f"  {DIM}row {r.row}:{RESET} {r.index} | {r.title_ar} | {r.title_en}")
    return records


def write_mapping(records: list[TitleRecord], path: str | Path) -> Path:
    path = Path(path)
    data = [r.to_mapping() for r in records]
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def read_mapping(path: str | Path) -> list[TitleRecord]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Mapping file not found: {path}")

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise InvalidCandidatesError(f"{path.name}: expected a JSON list of books")
    try:
        return [TitleRecord.model_validate(item) for item in data]
    except ValidationError as e:
        raise InvalidCandidatesError(f"{path.name}: malformed book entry: {e}") from e
