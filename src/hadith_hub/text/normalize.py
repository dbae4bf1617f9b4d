"""Arabic/Persian title normalization for catalogue matching.

The spreadsheet of book names and the ``books`` table disagree on diacritics,
letter-variant spelling (Arabic vs Persian kaf/ya, hamza carriers) and
punctuation. Both sides go through ``normalize_title`` and are compared by
plain string equality.

Rules run in a fixed order; later rules assume earlier ones already ran.
"""

import re

# Harakat, small high marks, superscript alef
_DIACRITICS = re.compile(r"[\u064B-\u065F\u0670]")

# Whitespace, hyphen, brackets, slashes, commas, stops, colons, guillemets, quotes
_PUNCTUATION = re.compile(
    r"[\s\-()\[\]/\\,،.۔:؛«»\"'“”‘’]"
)

_RULES: list[tuple[re.Pattern[str], str]] = [
    (_DIACRITICS, ""),
    (re.compile(r"[أإآء]"), "ا"),  # أ إ آ ء → ا
    (re.compile(r"ى"), "ي"),  # ى → ي
    (re.compile(r"ة"), "ه"),  # ة → ه
    (re.compile(r"ـ"), ""),  # tatweel
    (re.compile(r"ک"), "ك"),  # ک → ك
    (re.compile(r"ی"), "ي"),  # ی → ي
    (_PUNCTUATION, ""),
]


def normalize_title(text: str | None) -> str:
    """Map a raw title to its comparison key.

    Total: ``None`` and ``""`` give ``""``, spreadsheet numbers are stringified.
    Idempotent, so keys can be normalized again without changing.
    """
    if text is None or text == "":
        return ""
    if not isinstance(text, str):
        text = str(text)

    for pattern, replacement in _RULES:
        text = pattern.sub(replacement, text)

    return text.lower().strip()
