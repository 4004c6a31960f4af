import pytest

from osmcanvas.osm.categorizer import categorize, categorize_way, category_counts
from osmcanvas.osm.models import Category

from tests.conftest import make_way


@pytest.mark.parametrize("tags, expected", [
    ({"highway": "residential"}, Category.HIGHWAY),
    ({"building": "yes"}, Category.BUILDING),
    ({"leisure": "park"}, Category.PARK),
    ({"landuse": "recreation_ground"}, Category.PARK),
    ({"landuse": "park"}, Category.PARK),
    ({"landuse": "grass"}, Category.PARK),
    ({"natural": "wood"}, Category.PARK),
    ({"natural": "tree_row"}, Category.PARK),
    ({"natural": "water"}, Category.WATER),
    ({"waterway": "stream"}, Category.WATER),
    ({"landuse": "water"}, Category.WATER),
    ({"amenity": "fountain"}, Category.WATER),
    ({"landuse": "forest"}, Category.OTHER),
    ({"amenity": "parking"}, Category.OTHER),
    ({}, Category.OTHER),
])
def test_single_rule(tags, expected):
    assert categorize_way(make_way("1", [], **tags)) == expected


@pytest.mark.parametrize("tags, expected", [
    ({"highway": "footway", "building": "yes"}, Category.HIGHWAY),
    ({"building": "yes", "leisure": "park"}, Category.BUILDING),
    ({"leisure": "park", "natural": "water"}, Category.PARK),
    ({"landuse": "grass", "waterway": "ditch"}, Category.PARK),
    ({"highway": "path", "waterway": "river"}, Category.HIGHWAY),
])
def test_precedence(tags, expected):
    assert categorize_way(make_way("1", [], **tags)) == expected


def test_empty_tag_value_does_not_match():
    assert categorize_way(make_way("1", [], highway="", building="yes")) == Category.BUILDING


def test_total_and_exclusive():
    ways = [
        make_way("a", [], highway="primary", building="yes"),
        make_way("b", [], building="house"),
        make_way("c", [], natural="wood"),
        make_way("d", [], waterway="canal"),
        make_way("e", [], barrier="wall"),
        make_way("f", [], highway="service"),
    ]
    categorized = categorize(ways)

    assert set(categorized) == set(Category)
    assigned = [w.id for lst in categorized.values() for w in lst]
    assert sorted(assigned) == sorted(w.id for w in ways)


def test_preserves_order_within_category():
    ways = [
        make_way("h1", [], highway="primary"),
        make_way("b1", [], building="yes"),
        make_way("h2", [], highway="path"),
        make_way("h3", [], highway="service"),
    ]
    categorized = categorize(ways)
    assert [w.id for w in categorized[Category.HIGHWAY]] == ["h1", "h2", "h3"]


def test_category_counts():
    categorized = categorize([make_way("1", [], highway="path"), make_way("2", [])])
    assert category_counts(categorized) == {
        "water": 0, "park": 0, "building": 0, "highway": 1, "other": 1
    }
