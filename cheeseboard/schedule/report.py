"""
Report Generator - Format scored pizzas for human consumption.

Produces console output, CSV export and a JSON-ready dict.
"""

import csv
import io
from datetime import datetime
from typing import Mapping, Optional, TextIO

from .models import ScoredEntry, Sentiment
from .scorer import summarize_scores

SENTIMENT_MARKS = {
    Sentiment.LIKED: "+",
    Sentiment.DISLIKED: "-",
}


def format_console(
    scored: list[ScoredEntry],
    preferences: Optional[Mapping[str, Sentiment]] = None,
) -> str:
    """
    Format scored entries for console display.

    Ingredients carry a +/- mark when the user has a preference for them.

    Args:
        scored: Scored entries, in the order to print
        preferences: Snapshot used to mark ingredients (optional)

    Returns:
        Formatted string for console output
    """
    if not scored:
        return "No pizzas found on the schedule.\n"

    preferences = preferences or {}
    lines = []

    for item in scored:
        entry, score = item.entry, item.score
        lines.append(f"\n{entry.date:<12} [{score.bucket.value.upper():<7}] score {score.total:+d}")
        lines.append("-" * 70)
        lines.append(f"  {entry.description}")

        marked = []
        for ingredient in entry.ingredients:
            mark = SENTIMENT_MARKS.get(preferences.get(ingredient.normalized), "")
            marked.append(f"{mark}{ingredient.raw}")
        if marked:
            lines.append(f"  Ingredients: {', '.join(marked)}")

        why = explain(item)
        if why:
            lines.append(f"  Why: {why}")

    summary = summarize_scores(scored)
    lines.append("\n" + "=" * 70)
    lines.append("SUMMARY")
    lines.append(f"  Pizzas:       {summary['total']}")
    lines.append(f"  Great:        {summary['great']}")
    lines.append(f"  Good:         {summary['good']}")
    lines.append(f"  Neutral:      {summary['neutral']}")
    lines.append(f"  Poor:         {summary['poor']}")
    lines.append(f"  Avoid:        {summary['avoid']}")
    lines.append("=" * 70)

    return "\n".join(lines)


def explain(item: ScoredEntry) -> str:
    """One-line reason for a score, e.g. "likes basil; dislikes olive"."""
    parts = []
    if item.score.liked:
        parts.append("likes " + ", ".join(dict.fromkeys(item.score.liked)))
    if item.score.disliked:
        parts.append("dislikes " + ", ".join(dict.fromkeys(item.score.disliked)))
    return "; ".join(parts)


def to_dict(item: ScoredEntry, preferences: Optional[Mapping[str, Sentiment]] = None) -> dict:
    """JSON-ready representation of a scored entry."""
    preferences = preferences or {}
    return {
        "date": item.entry.date,
        "description": item.entry.description,
        "ingredients": [
            {
                "raw": ingredient.raw,
                "normalized": ingredient.normalized,
                "sentiment": (
                    preferences[ingredient.normalized].value
                    if ingredient.normalized in preferences else None
                ),
            }
            for ingredient in item.entry.ingredients
        ],
        "score": item.score.total,
        "bucket": item.score.bucket.value,
    }


def export_csv(scored: list[ScoredEntry], output: TextIO | None = None) -> str:
    """
    Export scored entries to CSV format.

    Args:
        scored: Scored entries to export
        output: Optional file handle to write to

    Returns:
        CSV string (also writes to output if provided)
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer)

    writer.writerow([
        "date",
        "bucket",
        "score",
        "description",
        "ingredients",
        "liked",
        "disliked",
    ])

    for item in scored:
        writer.writerow([
            item.entry.date,
            item.score.bucket.value,
            item.score.total,
            item.entry.description,
            "; ".join(i.normalized for i in item.entry.ingredients),
            "; ".join(item.score.liked),
            "; ".join(item.score.disliked),
        ])

    csv_content = buffer.getvalue()

    if output:
        output.write(csv_content)

    return csv_content


def generate_report_filename(extension: str = "csv") -> str:
    """
    Generate a filename for the report.

    Returns:
        Filename like "pizza_schedule_2026-01-08.csv"
    """
    date_str = datetime.now().strftime("%Y-%m-%d")
    return f"pizza_schedule_{date_str}.{extension}"
