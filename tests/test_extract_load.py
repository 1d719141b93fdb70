"""Tests for load extraction from free-text freight requests."""

import pytest

from load_planner.domain import LOAD_FIELDS, ParsedLoad
from load_planner.nlp import extract_items, extract_load, validate_parsed_load
from load_planner.nlp.dates import normalize_date
from load_planner.nlp.extract_load import score_confidence


def test_reference_sentence():
    load = extract_load("48 x 8 x 9, 42000 lbs")

    assert (load.length, load.width, load.height) == (48, 8, 9)
    assert load.weight == 42000
    assert load.confidence == 1.0
    assert validate_parsed_load(load).missing_fields == ()


def test_all_zero_load_misses_every_field():
    result = validate_parsed_load(ParsedLoad.empty())

    assert result.missing_fields == LOAD_FIELDS
    assert not result.is_valid


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "Please send a quote for moving our equipment next week.",
        "Hello, can you haul this for us? Thanks!",
    ],
)
def test_text_without_numbers_yields_zero_confidence(text):
    load = extract_load(text)

    assert load.confidence == 0
    assert (load.length, load.width, load.height, load.weight) == (0, 0, 0, 0)


@pytest.mark.parametrize(
    "text",
    [
        "x x x 12 x",
        "999999999999 x 1 x 0 lbs",
        "Weight: , lbs lbs 12k",
        "L: W: H: ' \" ''",
        "0 x 0 x 0, 0 lbs",
        "Dims 1.2.3 x 4..5 x 6,,7 ft",
        "\n\n- \n* 3 x \n",
    ],
)
def test_extraction_never_raises_and_confidence_is_bounded(text):
    load = extract_load(text)

    assert 0.0 <= load.confidence <= 1.0


def test_trailing_unit_applies_to_all_dimensions():
    load = extract_load("Dimensions: 20 x 8.5 x 10 ft\nWeight: 45,000 lbs")

    assert (load.length, load.width, load.height) == (240, 102, 120)
    assert load.weight == 45000
    assert load.confidence == 1.0


def test_feet_and_inches_with_suffix_labels():
    text = (
        "Subject: RE: Quote request - CAT 320 Excavator\n\n"
        "Dimensions: 32' 6\" L x 10' 6\" W x 10' 2\" H\n"
        "Weight: 52,000 lbs\n"
    )
    load = extract_load(text)

    assert (load.length, load.width, load.height) == (390, 126, 122)
    assert load.weight == 52000
    assert load.description == "CAT 320 Excavator"


def test_labels_reorder_triple_values():
    load = extract_load("Dims: width 8 ft x length 40 ft x height 10 ft")

    assert (load.length, load.width, load.height) == (480, 96, 120)
    assert load.confidence == pytest.approx(0.75)


def test_labeled_dimension_lines():
    text = "Length: 18 feet\nWidth: 12 feet\nHeight: 14 feet\nWeight: 38000 lbs"
    load = extract_load(text)

    assert (load.length, load.width, load.height) == (216, 144, 168)
    assert load.weight == 38000
    assert load.confidence == 1.0


def test_metric_units_are_normalized():
    load = extract_load("Dimensions: 6 m x 2.4 m x 2.6 m\nWeight: 12 tonnes")

    assert load.length == pytest.approx(236.22)
    assert load.width == pytest.approx(94.49)
    assert load.height == pytest.approx(102.36)
    assert load.weight == pytest.approx(26455.44)


def test_thousands_shorthand_weight():
    load = extract_load("Load is 40 x 8 x 10 ft, about 52k lbs")

    assert load.weight == 52000
    assert load.length == 480


def test_partial_extraction_reports_missing_fields():
    load = extract_load("Width: 12 feet, weight 30,000 lbs")

    assert load.width == 144
    assert load.weight == 30000
    assert validate_parsed_load(load).missing_fields == ("length", "height")
    assert load.confidence == pytest.approx(0.5)


def test_later_dimensions_win_and_disagreement_lowers_confidence():
    text = "Dimensions: 40 x 8 x 10 ft\nSorry, correct dimensions: 45 x 8 x 10 ft"
    load = extract_load(text)

    assert load.length == 540
    assert load.confidence == pytest.approx((0.95 + 1 + 1) / 4)


def test_explicit_units_beat_bare_numbers():
    load = extract_load("Dims 40 x 8 x 10 ft. Ref 12 x 34 x 56")

    assert (load.length, load.width, load.height) == (480, 96, 120)


ITEMIZED = """Quote request
Items:
- 2 x Crate: 48 x 40 x 36 in, 800 lbs
- Pallet of parts: 96 x 48 x 60 in, 1,200 lbs
- Glass panels: 60 x 40 x 20 in, 300 lbs, fragile, do not stack
"""


def test_itemized_lines_become_cargo_items():
    items, spans = extract_items(ITEMIZED)

    assert [item.id for item in items] == ["item-1", "item-2", "item-3"]
    assert [item.name for item in items] == ["Crate", "Pallet of parts", "Glass panels"]
    assert items[0].quantity == 2
    assert (items[1].length, items[1].width, items[1].height) == (96, 48, 60)
    assert items[1].weight == 1200
    assert items[2].fragile and not items[2].stackable
    assert items[0].stackable and not items[0].fragile
    assert len(spans) == 3


def test_items_feed_the_load_when_nothing_else_is_stated():
    load = extract_load(ITEMIZED)

    assert (load.length, load.width, load.height) == (96, 48, 60)
    assert load.weight == 2 * 800 + 1200 + 300
    assert load.total_item_weight == load.weight
    assert load.confidence == 1.0


def test_shipment_details():
    text = (
        "Subject: FWD: Quote request - Transformer move\n"
        "Pickup: Denver, CO\n"
        "Delivery: Salt Lake City, UT\n"
        "Pickup date: 11/04\n"
        "Delivery date: 11/08\n"
        "Dimensions: 20 x 10 x 12 ft, 60,000 lbs\n"
    )
    load = extract_load(text)

    assert load.description == "Transformer move"
    assert load.origin == "Denver, CO"
    assert load.destination == "Salt Lake City, UT"
    assert load.pickup_date == "11/04"
    assert load.delivery_date == "11/08"


def test_inline_route_is_used_without_labels():
    load = extract_load("Need a lowboy from Houston, TX to Tulsa, OK for a 30 x 10 x 11 ft dozer")

    assert load.origin == "Houston, TX"
    assert load.destination == "Tulsa, OK"


def test_score_confidence():
    assert score_confidence({}, has_items=True) == 0.0
    assert score_confidence({"length": 1.0, "width": 1.0}, has_items=False) == 0.5
    assert score_confidence({"length": 1.0}, has_items=True, item_bonus=0.1) == pytest.approx(0.35)
    assert score_confidence({f: 1.0 for f in LOAD_FIELDS}, has_items=True) == 1.0


@pytest.mark.parametrize(
    "text, dimensions, weight",
    [
        ("Dimensions: 30 x 10 x 11 ft 50000 lbs", (360, 120, 132), 50000),
        ("Load 20' x 8' x 9' 42000 lbs", (240, 96, 108), 42000),
        ("Dims 40 x 8 x 10 ft. 2 pieces, 45000 lbs total", (480, 96, 120), 45000),
    ],
)
def test_number_after_feet_is_not_read_as_inches(text, dimensions, weight):
    load = extract_load(text)

    assert (load.length, load.width, load.height) == dimensions
    assert load.weight == weight


def test_labeled_feet_followed_by_weight():
    load = extract_load("Height: 12 ft 45000 lbs")

    assert load.height == 144
    assert load.weight == 45000


@pytest.mark.parametrize(
    "text",
    [
        "Dims: 40' L, 10' W, 12' H. 50,000 lbs",
        "L: 40 ft  W: 10 ft  H: 12 ft, 50,000 lbs",
    ],
)
def test_single_letter_dimension_labels(text):
    load = extract_load(text)

    assert (load.length, load.width, load.height) == (480, 120, 144)
    assert load.weight == 50000
    assert load.confidence == 1.0


def test_grouped_metric_dimensions():
    load = extract_load("Dimensions: 1,200 x 2,400 x 3,000 mm, 5,000 kg")

    assert load.length == pytest.approx(47.24)
    assert load.width == pytest.approx(94.49)
    assert load.height == pytest.approx(118.11)
    assert load.weight == pytest.approx(11023.1)


@pytest.mark.parametrize(
    "text, dimensions, weight",
    [
        ("We need 3 units at 20 x 8 x 8 ft, 10000 lbs each", (240, 96, 96), 10000),
        ("Please quote 48 x 8 x 9, 42000 lbs", (48, 8, 9), 42000),
    ],
)
def test_request_prose_is_not_an_item(text, dimensions, weight):
    load = extract_load(text)

    assert load.items == ()
    assert (load.length, load.width, load.height) == dimensions
    assert load.weight == weight


def test_hyphenated_item_names_are_kept():
    items, _ = extract_items("Re-bar bundle: 40 x 2 x 2 ft, 4,000 lbs")

    assert [item.name for item in items] == ["Re-bar bundle"]
    assert items[0].weight == 4000


def test_values_rounding_to_zero_earn_no_confidence():
    load = extract_load("0.001 x 0.001 x 0.001 in, 0.001 lbs")

    assert load.confidence == 0
    assert validate_parsed_load(load).missing_fields == LOAD_FIELDS


def test_dates_are_normalized():
    text = (
        "Pickup date: 2025-11-04\n"
        "Delivery date: Nov 8, 2025\n"
        "Dimensions: 20 x 10 x 12 ft, 60,000 lbs\n"
    )
    load = extract_load(text)

    assert load.pickup_date == "2025-11-04"
    assert load.pickup_date_iso == "2025-11-04"
    assert load.delivery_date == "Nov 8, 2025"
    assert load.delivery_date_iso == "2025-11-08"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("11/04/2025", "2025-11-04"),
        ("November 4th, 2025", "2025-11-04"),
        (None, None),
        ("", None),
    ],
)
def test_normalize_date(raw, expected):
    assert normalize_date(raw) == expected
