"""
Subdomain slug generation for store names.
"""

import re
import time
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str) -> str:
    """
    Turn a human-entered store name into a URL-safe subdomain token.

    Accented Latin letters are folded to ASCII, every run of other
    characters becomes a single "-", and edge dashes are stripped.
    Names with nothing transliterable (Arabic, emoji, punctuation only)
    get a timestamp token so the result is never empty.
    """
    ascii_name = (
        unicodedata.normalize("NFKD", name or "")
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    slug = _NON_ALNUM.sub("-", ascii_name).strip("-")
    if not slug:
        slug = f"store-{int(time.time() * 1000)}"
    return slug


def with_suffix(slug: str, attempt: int) -> str:
    """Candidate subdomain for the given 1-based attempt: slug, slug-2, slug-3..."""
    if attempt <= 1:
        return slug
    return f"{slug}-{attempt}"
