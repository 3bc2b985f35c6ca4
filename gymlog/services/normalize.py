"""Name normalization for exercise search keys."""

import re
import unicodedata

_APOSTROPHES = re.compile(r"['’‘`]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_name(value: str) -> str:
    """Lower-case, fold diacritics, drop apostrophes, collapse everything else to single spaces.

    Idempotent: normalize_name(normalize_name(x)) == normalize_name(x).
    """
    folded = unicodedata.normalize("NFKD", value)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch)).lower()
    folded = _APOSTROPHES.sub("", folded)
    return _NON_ALNUM.sub(" ", folded).strip()
