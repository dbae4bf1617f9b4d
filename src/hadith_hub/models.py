from pydantic import BaseModel, ConfigDict, Field, field_validator


class TitleRecord(BaseModel):
    """One row of the book-names spreadsheet (or its JSON mapping)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: str
    title_ar: str = Field(default="", alias="titleAr")
    title_en: str = Field(default="", alias="titleEn")
    author_ar: str = Field(default="", alias="authorAr")
    author_en: str = Field(default="", alias="authorEn")
    row: int | None = None  # 1-based spreadsheet row, None when loaded from JSON

    @field_validator("index", mode="before")
    @classmethod
    def _index_to_str(cls, v):
        v = "" if v is None else str(v).strip()
        if not v:
            raise ValueError("index must not be empty")
        return v

    @field_validator("title_ar", "title_en", "author_ar", "author_en", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    def to_mapping(self) -> dict:
        return self.model_dump(by_alias=True, exclude={"row"})


class Book(BaseModel):
    """Catalogue row from the ``books`` table."""

    id: str
    title_ar: str = ""
    title_en: str = ""
    author_ar: str = ""
    author_en: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        return str(v)

    @field_validator("title_ar", "title_en", "author_ar", "author_en", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class TitleUpdate(BaseModel):
    book_id: str
    title_ar: str
    title_en: str
    author_ar: str
    author_en: str
    old_title_en: str = ""


class ReconcileReport(BaseModel):
    updates: list[TitleUpdate] = []
    unchanged: list[Book] = []
    ambiguous: list[Book] = []  # more than one spreadsheet row for the same key
    unmatched: list[Book] = []

    def summary(self) -> dict:
        return {
            "updated": len(self.updates),
            "skipped_duplicate": len(self.ambiguous),
            "no_match": len(self.unmatched),
            "unchanged": len(self.unchanged),
        }


class AlignmentRow(BaseModel):
    record: TitleRecord
    book: Book | None = None


class AlignmentReport(BaseModel):
    rows: list[AlignmentRow] = []

    @property
    def aligned(self) -> int:
        return sum(1 for r in self.rows if r.book is not None)

    @property
    def not_found(self) -> int:
        return sum(1 for r in self.rows if r.book is None)
