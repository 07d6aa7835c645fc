"""
Name normalization
- case, diacritics and whitespace folding for athlete names
"""
import re
import unicodedata
from typing import Optional

# Combining diacritical marks block
_DIACRITICS = re.compile(r"[\u0300-\u036f]")


def normalize_name(name: Optional[str]) -> str:
    """
    Canonical form for comparison: "Käslin " -> "kaslin"

    lowercase, NFD + strip combining marks, ß -> ss, trim.
    Idempotent.
    """
    if not name:
        return ""
    folded = unicodedata.normalize("NFD", name.lower())
    folded = _DIACRITICS.sub("", folded)
    folded = folded.replace("ß", "ss")
    return folded.strip()


def names_match(name1: Optional[str], name2: Optional[str]) -> bool:
    """Equal after normalization"""
    return normalize_name(name1) == normalize_name(name2)


def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """Roster display name "First Last" """
    return f"{(first_name or '').strip()} {(last_name or '').strip()}".strip()
