from upgrade_tracker.models import OfferEvent
from upgrade_tracker.offer_history import parse_offer_history, parse_offer_line


def test_parse_offer_history_example():
    events = parse_offer_history("(ATL-FRA)(D1S)($1,234)(5000)(2025-01-01)\n")
    assert events == [
        OfferEvent(
            route="ATL-FRA",
            service="D1S",
            price="$1,234",
            amount="5000",
            timestamp="2025-01-01",
        )
    ]


def test_missing_groups_default_to_empty():
    event = parse_offer_line("(ATL-FRA) (PS)")
    assert event.route == "ATL-FRA"
    assert event.service == "PS"
    assert event.price == ""
    assert event.amount == ""
    assert event.timestamp == ""


def test_extra_groups_and_text_are_ignored():
    event = parse_offer_line("offer: (A)(B)(C)(D)(E)(F) trailing")
    assert (event.route, event.timestamp) == ("A", "E")


def test_line_order_is_preserved_and_blank_lines_dropped():
    raw = "(X)(D1)($9)(1)(2025-02-01)\n\n   \n(Y)(PS)($5)(2)(2025-01-01)"
    events = parse_offer_history(raw)
    assert [e.route for e in events] == ["X", "Y"]


def test_empty_history():
    assert parse_offer_history("") == []
    assert parse_offer_history(None) == []
