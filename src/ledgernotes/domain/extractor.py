"""Candidate ledger line extraction from markdown notes."""

import re

# List item that starts with an ISO date and has a '>' somewhere after it.
CANDIDATE_LINE = re.compile(r"^\s*[-*]\s+\d{4}-\d{2}-\d{2}.*>")
LIST_MARKER = re.compile(r"^[-*]")


def is_candidate_line(line: str) -> bool:
    """Return True if a markdown line looks like a ledger entry."""
    return CANDIDATE_LINE.match(line) is not None


def extract_candidate_lines(markdown: str) -> list[str]:
    """Return the ledger lines of a markdown document in file order.

    The list marker is removed and the surrounding whitespace trimmed, so
    ``"  - 2024-01-15 Lunch 12 cash > food"`` becomes
    ``"2024-01-15 Lunch 12 cash > food"``. Lines that do not match are
    dropped without any further validation.

    Args:
        markdown: Full text of a markdown file

    Returns:
        List of candidate lines
    """
    lines = []
    for line in markdown.splitlines():
        if is_candidate_line(line):
            lines.append(LIST_MARKER.sub("", line.strip(), count=1).strip())
    return lines
