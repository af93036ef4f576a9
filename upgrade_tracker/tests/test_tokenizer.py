from upgrade_tracker.tokenizer import (
    paren_groups,
    split_fields,
    split_lines,
    split_once,
    split_route_sections,
)


def test_split_lines_strips_windows_endings_and_blanks():
    raw = "  first \r\n\r\n second\r\n   \n"
    assert split_lines(raw) == ["first", "second"]


def test_empty_cells_give_no_tokens():
    assert split_lines("") == []
    assert split_lines(None) == []
    assert split_fields(None) == []
    assert split_route_sections("") == []
    assert paren_groups(None) == []


def test_split_fields_drops_empty_tokens():
    assert split_fields(" a, ,b ,, c ") == ["a", "b", "c"]
    assert split_fields("x/y/", sep="/") == ["x", "y"]


def test_split_once_keeps_remaining_separators():
    assert split_once("DL0014: ATL-FRA", ":") == ("DL0014", "ATL-FRA")
    assert split_once("9:10a-11:26a", "-") == ("9:10a", "11:26a")
    assert split_once("no separator", ":") == ("no separator", "")


def test_route_sections_split_only_before_city_pairs():
    text = "ATL-FRA: D1 2, PS: 4 FRA-ATL: C+: 1, MC: 10"
    assert split_route_sections(text) == [
        "ATL-FRA: D1 2, PS: 4",
        "FRA-ATL: C+: 1, MC: 10",
    ]


def test_route_sections_keep_leading_text():
    assert split_route_sections("Nonstop ATL-FRA: 5h") == ["Nonstop", "ATL-FRA: 5h"]


def test_paren_groups_are_non_greedy_and_trimmed():
    assert paren_groups("( a )(b) x (c d)") == ["a", "b", "c d"]
