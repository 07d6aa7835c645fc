"""
Category type classification

Maps a free-text category name ("Junior Boys 70kg Left", "Frauen 55kg")
to a canonical category type. The first matching rule wins.
"""
import re
from enum import Enum
from typing import Callable, List, Sequence, Tuple


class CategoryType(str, Enum):
    """Canonical category types"""
    JUNIOR_BOYS = "junior_boys"
    JUNIOR_GIRLS = "junior_girls"
    JUNIOR = "junior"
    AMATEUR = "amateur"
    MEN = "men"
    WOMEN = "women"
    MASTER = "master"
    OTHER = "other"


CategoryRule = Tuple[Callable[[str], bool], CategoryType]


def contains_any(*keywords: str) -> Callable[[str], bool]:
    """Substring predicate over a lowercased name"""
    def predicate(name: str) -> bool:
        return any(k in name for k in keywords)
    return predicate


def has_word(*words: str) -> Callable[[str], bool]:
    """Whole-word predicate; "women" does not count as "men" """
    pattern = re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b")

    def predicate(name: str) -> bool:
        return pattern.search(name) is not None
    return predicate


# Historical order. "women" contains "men", so "Women 80kg" and
# "Master Men 90kg" land in MEN. Published standings were computed with it.
LEGACY_CATEGORY_RULES: List[CategoryRule] = [
    (contains_any("junior boy"), CategoryType.JUNIOR_BOYS),
    (contains_any("junior girl"), CategoryType.JUNIOR_GIRLS),
    (contains_any("junior"), CategoryType.JUNIOR),
    (contains_any("amateur"), CategoryType.AMATEUR),
    (contains_any("men", "männer"), CategoryType.MEN),
    (contains_any("women", "frauen", "senior women"), CategoryType.WOMEN),
    (contains_any("master"), CategoryType.MASTER),
]

# Word-based matching, women and master ahead of men
CORRECTED_CATEGORY_RULES: List[CategoryRule] = [
    (contains_any("junior boy"), CategoryType.JUNIOR_BOYS),
    (contains_any("junior girl"), CategoryType.JUNIOR_GIRLS),
    (contains_any("junior"), CategoryType.JUNIOR),
    (contains_any("amateur"), CategoryType.AMATEUR),
    (contains_any("master"), CategoryType.MASTER),
    (has_word("women", "woman", "frauen", "ladies"), CategoryType.WOMEN),
    (has_word("men", "man", "männer"), CategoryType.MEN),
]

CATEGORY_RULE_SETS = {
    "legacy": LEGACY_CATEGORY_RULES,
    "corrected": CORRECTED_CATEGORY_RULES,
}


def get_category_rules(name: str) -> List[CategoryRule]:
    """Rule chain by name ("legacy" / "corrected"); unknown names fall back to legacy"""
    return CATEGORY_RULE_SETS.get((name or "").lower(), LEGACY_CATEGORY_RULES)


def classify_category(
    category_name: str,
    rules: Sequence[CategoryRule] = LEGACY_CATEGORY_RULES,
) -> CategoryType:
    """Category name -> category type (case-insensitive, first match wins)"""
    if not category_name:
        return CategoryType.OTHER

    name = category_name.lower()
    for predicate, category_type in rules:
        if predicate(name):
            return category_type
    return CategoryType.OTHER
