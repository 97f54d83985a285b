"""Shared utilities."""
import re
import unicodedata
from collections.abc import Iterable


def normalize_text(text: str) -> str:
    """Normalize text for comparison: lowercase, strip accents, collapse spaces."""
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"\s+", " ", text).strip().lower()
    return text


def normalize_keywords(values: Iterable[str] | None) -> list[str]:
    """Normalize a keyword list, dropping blanks and duplicates (order kept)."""
    seen: list[str] = []
    for value in values or []:
        if not isinstance(value, str):
            continue
        key = normalize_text(value)
        if key and key not in seen:
            seen.append(key)
    return seen


def truncate(text: str, max_len: int = 200) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
