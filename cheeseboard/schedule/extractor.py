"""
Entry Extractor - dated pizzas from schedule page text.

The page text is loosely structured markdown. A pizza looks like:

    Tue Mar 4

    ### Pizza

    Mozzarella, tomatoes, and fresh basil

A date line not followed by the section marker is a false match and is
skipped. Nothing here raises: odd input just yields fewer entries.
"""

import logging
import re
from typing import Optional

from .models import MenuEntry

logger = logging.getLogger(__name__)

# "Tue Mar 4": weekday abbreviation, month abbreviation, day number
DATE_LINE_RE = re.compile(r"^[A-Z][a-z]{2}\s+[A-Z][a-z]{2}\s+\d{1,2}$")

DEFAULT_SECTION_MARKER = "### Pizza"
SECTION_PREFIX = "### "


def is_date_line(line: str) -> bool:
    """Check if a (stripped) line looks like "Tue Mar 4"."""
    return bool(DATE_LINE_RE.match(line))


def _skip_blank(lines: list[str], cursor: int) -> int:
    while cursor < len(lines) and lines[cursor] == "":
        cursor += 1
    return cursor


def extract_pairs(
    text: Optional[str],
    section_marker: str = DEFAULT_SECTION_MARKER,
) -> list[tuple[str, str]]:
    """
    Extract (date, description) pairs from page text.

    Args:
        text: Raw page content (None is treated as empty)
        section_marker: Exact line that must follow a date line

    Returns:
        Pairs in page order, one per distinct date
    """
    if not text:
        return []

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [line.strip() for line in normalized.split("\n")]

    pairs: list[tuple[str, str]] = []
    seen_dates: set[str] = set()

    i = 0
    while i < len(lines):
        date_line = lines[i]
        if not is_date_line(date_line):
            i += 1
            continue

        cursor = _skip_blank(lines, i + 1)
        if cursor >= len(lines) or lines[cursor] != section_marker:
            logger.debug(f"Date line without section marker, skipping: {date_line!r}")
            i += 1
            continue

        cursor = _skip_blank(lines, cursor + 1)

        description_lines = []
        while cursor < len(lines):
            current = lines[cursor]
            if current == "" or current.startswith(SECTION_PREFIX) or is_date_line(current):
                break
            description_lines.append(current)
            cursor += 1

        if not description_lines:
            logger.debug(f"Empty description for {date_line!r}")
            # Resume at whatever stopped the scan; it may be the next date line
            i = max(cursor, i + 1)
            continue

        if date_line in seen_dates:
            logger.debug(f"Duplicate date {date_line!r}, keeping first entry")
        else:
            seen_dates.add(date_line)
            pairs.append((date_line, " ".join(description_lines)))

        i = cursor

    return pairs


def extract_entries(
    text: Optional[str],
    section_marker: str = DEFAULT_SECTION_MARKER,
) -> list[MenuEntry]:
    """
    Extract dated menu entries from page text.

    Ingredients are left empty; run the parser over each description
    (see pipeline.build_menu) to fill them in.

    Args:
        text: Raw page content
        section_marker: Exact line that must follow a date line

    Returns:
        List of MenuEntry in page order, empty if nothing matched
    """
    entries = [
        MenuEntry(date=date, description=description)
        for date, description in extract_pairs(text, section_marker)
    ]
    logger.debug(f"Extracted {len(entries)} entries")
    return entries
