import pandas as pd
import pytest

from upgrade_tracker.aggregator import build_trip
from upgrade_tracker.models import OfferEvent, SheetRow, Trip
from upgrade_tracker.series import (
    DEFAULT_COLOR,
    color_for_key,
    has_numeric_data,
    offer_price_series,
    ordered_segments,
    parse_price,
    parse_snapshot_line,
    seat_series,
    series_by_category,
    split_mc,
)


def make_trip(history="", seats="", segments=""):
    row = SheetRow(
        confirmation="ABC",
        destination="Frankfurt",
        offer_history=history,
        seat_history=seats,
        segments=segments,
    )
    return build_trip("ABC", [row])


def test_parse_price():
    assert parse_price("$1,234.50").value == pytest.approx(1234.5)
    assert not parse_price("n/a").valid
    assert not parse_price("").valid


def test_parse_snapshot_line():
    readings = parse_snapshot_line("D1: 18/34, PS: --/21, bogus (2025-01-01 10:00)")
    assert [(r.category, r.numerator, r.valid) for r in readings] == [
        ("D1", 18.0, True),
        ("PS", None, False),
    ]
    assert readings[0].timestamp == "2025-01-01 10:00"


def test_snapshot_line_without_timestamp_is_skipped():
    assert parse_snapshot_line("D1: 18/34") == []


def test_offer_price_series_sorted_by_timestamp():
    trip = make_trip(
        "(ATL-FRA)(D1)($900)(0)(2025-01-03)\n"
        "(ATL-FRA)(D1)($1,000)(0)(2025-01-01)\n"
        "(FRA-ATL)(D1)($5)(0)(2025-01-02)\n"
        "(ATL-FRA)(PS)(sold out)(0)(2025-01-02)"
    )
    df = offer_price_series(trip, "ATL-FRA")
    assert list(df.columns) == ["category", "timestamp", "value", "valid"]
    assert list(df["timestamp"]) == list(
        pd.to_datetime(["2025-01-01", "2025-01-02", "2025-01-03"])
    )
    assert df["valid"].tolist() == [True, False, True]
    assert df["value"].iloc[0] == pytest.approx(1000.0)
    assert pd.isna(df["value"].iloc[1])


def test_unparsable_timestamps_sort_last():
    trip = make_trip(
        "(R)(D1)($1)(0)(whenever)\n(R)(D1)($2)(0)(2025-01-01)"
    )
    df = offer_price_series(trip, "R")
    assert df["value"].tolist() == [2.0, 1.0]
    assert pd.isna(df["timestamp"].iloc[1])


def test_seat_series_and_mc_split():
    trip = make_trip(
        seats=(
            "ATL-FRA:\n"
            "D1: 18/34, MC: 137/203 (2025-01-02)\n"
            "D1: 20/34, MC: 140/203 (2025-01-01)\n"
        )
    )
    df = seat_series(trip, "ATL-FRA")
    assert len(df) == 4
    mc, other = split_mc(df)
    assert mc["value"].tolist() == [140.0, 137.0]
    assert other["value"].tolist() == [20.0, 18.0]


def test_series_by_category_labels_no_data():
    trip = make_trip(
        "(R)(D1)($1)(0)(2025-01-01)\n(R)(PS)(x)(0)(2025-01-02)\n(R)(D1)(y)(0)(2025-01-03)"
    )
    groups = series_by_category(offer_price_series(trip, "R"))
    assert list(groups) == ["D1", "PS (No Data)", "D1 (No Data)"]
    assert len(groups["D1"]) == 1


def test_has_numeric_data():
    assert not has_numeric_data(offer_price_series(make_trip(), "R"))
    assert not has_numeric_data(offer_price_series(make_trip("(R)(D1)(x)"), "R"))
    assert has_numeric_data(offer_price_series(make_trip("(R)(D1)($3)"), "R"))


def test_color_for_key():
    assert color_for_key("D1") == "rgba(156, 21, 177, 1)"
    assert color_for_key("nope") == DEFAULT_COLOR


def test_ordered_segments_prefers_detailed_segments():
    trip = make_trip(
        history="(ZZZ-YYY)(D1)($1)",
        segments=(
            "DL2: FRA-ATL, 1p-4p, 9 hours, 1 nm, 339\n"
            "DL1: ATL-FRA, 1p-4p, 9 hours, 1 nm, 339\n"
        ),
    )
    assert ordered_segments(trip) == ["FRA-ATL", "ATL-FRA"]


def test_ordered_segments_fallback_to_history_routes():
    trip = make_trip(
        history="(B-C)(D1)($1)\n()(D1)($1)\n(A-B)(D1)($1)\n(B-C)(PS)($2)",
        seats="A-B:\nx\nD-E:\ny",
    )
    assert ordered_segments(trip) == ["B-C", "A-B", "D-E"]
