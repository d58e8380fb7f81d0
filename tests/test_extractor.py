"""Tests for candidate line extraction."""

import re

import pytest

from ledgernotes.domain.extractor import extract_candidate_lines, is_candidate_line


def test_extracts_dash_list_item():
    """A dash list item with date and arrow is returned without its marker."""
    lines = extract_candidate_lines("- 2023-04-01 Coffee Shop > food: 150")
    assert lines == ["2023-04-01 Coffee Shop > food: 150"]


def test_extracts_star_list_item():
    """Star list markers are removed as well."""
    lines = extract_candidate_lines("* 2023-04-01 Lunch 12 cash > food")
    assert lines == ["2023-04-01 Lunch 12 cash > food"]


def test_indented_items_are_trimmed():
    """Nested list items are found and trimmed."""
    markdown = "- April\n    - 2023-04-01 Lunch 12 cash > food   \n\t* 2023-04-02 Bus 2 cash > travel"
    assert extract_candidate_lines(markdown) == [
        "2023-04-01 Lunch 12 cash > food",
        "2023-04-02 Bus 2 cash > travel",
    ]


@pytest.mark.parametrize(
    "line",
    [
        "2023-04-01 Lunch 12 cash > food",  # not a list item
        "- Lunch 12 cash > food",  # no date
        "- 2023-04-01 Lunch 12 cash to food",  # no arrow
        "-2023-04-01 Lunch 12 cash > food",  # no space after marker
        "+ 2023-04-01 Lunch 12 cash > food",  # unsupported marker
        "- 23-04-01 Lunch 12 cash > food",  # short year
        "> - 2023-04-01 quoted list item",  # arrow before the marker
    ],
)
def test_non_candidates_are_dropped(line):
    """Lines without the list/date/arrow shape are ignored."""
    assert not is_candidate_line(line)
    assert extract_candidate_lines(line) == []


def test_file_order_is_preserved():
    """Candidates come back in the order they appear."""
    markdown = "\n".join(
        [
            "# Ledger",
            "- 2023-04-03 C 1 cash > food",
            "some prose > with an arrow",
            "- 2023-04-01 A 1 cash > food",
            "",
            "- 2023-04-02 B 1 cash > food",
        ]
    )
    assert [line.split()[1] for line in extract_candidate_lines(markdown)] == ["C", "A", "B"]


def test_output_shape():
    """Every extracted line starts with a date, has an arrow and no marker."""
    markdown = "\n".join(
        [
            "- 2023-04-01 A 1 cash > food",
            "  * 2023-04-02 B > C",
            "* - 2023-04-03 nested marker > x",
            "- 2023-04-04 - dash inside > x",
        ]
    )
    lines = extract_candidate_lines(markdown)

    assert len(lines) == 3
    for line in lines:
        assert re.match(r"^\d{4}-\d{2}-\d{2}", line)
        assert ">" in line
        assert line[0] not in "-*"


def test_empty_input():
    """Empty markdown yields no candidates."""
    assert extract_candidate_lines("") == []
