"""
Way categorization

Sorts ways into rendering categories using an ordered tag rule table
"""

from typing import Callable, Dict, Iterable, List, Tuple
from loguru import logger

from .models import Category, OSMWay

TagPredicate = Callable[[Dict[str, str]], bool]


def _has(key: str) -> TagPredicate:
    return lambda tags: bool(tags.get(key))


def _is(key: str, *values: str) -> TagPredicate:
    return lambda tags: tags.get(key) in values


def _any(*predicates: TagPredicate) -> TagPredicate:
    return lambda tags: any(p(tags) for p in predicates)


# Evaluated top-down, first match wins
CATEGORY_RULES: List[Tuple[Category, TagPredicate]] = [
    (Category.HIGHWAY, _has("highway")),
    (Category.BUILDING, _has("building")),
    (Category.PARK, _any(
        _is("leisure", "park"),
        _is("landuse", "recreation_ground", "park", "grass"),
        _is("natural", "wood", "tree_row"),
    )),
    (Category.WATER, _any(
        _is("natural", "water"),
        _has("waterway"),
        _is("landuse", "water"),
        _is("amenity", "fountain"),
    )),
]


def categorize_way(way: OSMWay) -> Category:
    """Return the single category a way belongs to"""
    for category, predicate in CATEGORY_RULES:
        if predicate(way.tags):
            return category
    return Category.OTHER


def categorize(ways: Iterable[OSMWay]) -> Dict[Category, List[OSMWay]]:
    """
    Categorize ways by type for rendering

    Args:
        ways: Ways in document order

    Returns:
        Dict with a list for every Category, each keeping the input order
    """
    categories = {category: [] for category in Category}
    for way in ways:
        categories[categorize_way(way)].append(way)

    logger.info(f"Categorized ways: {category_counts(categories)}")
    return categories


def category_counts(categorized: Dict[Category, List[OSMWay]]) -> Dict[str, int]:
    """Number of ways per category, keyed by category name"""
    return {category.value: len(categorized.get(category, [])) for category in Category}
