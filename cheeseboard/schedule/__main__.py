"""
CLI entry point for the pizza schedule.

Usage:
    python -m cheeseboard.schedule --source schedule.md --prefs prefs.json
    python -m cheeseboard.schedule --prefs prefs.json --like basil --dislike olives --ranked
    python -m cheeseboard.schedule --source schedule.md --output-csv
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_config
from .normalizer import normalize
from .pipeline import build_menu, score_menu
from .preferences import open_store
from .providers import ContentFetchError, FileContentProvider, WebReadContentProvider
from .report import export_csv, format_console, generate_report_filename, to_dict


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cheeseboard-schedule",
        description="Cheeseboard pizza schedule - score upcoming pizzas by your ingredient preferences",
    )

    parser.add_argument(
        "--source",
        metavar="FILE",
        help="Saved schedule page (markdown). Default: fetch via the web-read service",
    )

    parser.add_argument(
        "--web-read-url",
        metavar="URL",
        help="Override the web-read service endpoint from the config",
    )

    parser.add_argument(
        "--prefs",
        metavar="FILE",
        help="Preferences file (.json, or .db/.sqlite). Default: in-memory only",
    )

    parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help="Schedule config file (default: module's schedule_config.yaml)",
    )

    parser.add_argument(
        "--like",
        action="append",
        default=[],
        metavar="INGREDIENT",
        help="Toggle a thumbs up on an ingredient (repeatable)",
    )

    parser.add_argument(
        "--dislike",
        action="append",
        default=[],
        metavar="INGREDIENT",
        help="Toggle a thumbs down on an ingredient (repeatable)",
    )

    parser.add_argument(
        "--ranked",
        action="store_true",
        help="Show best pizzas first instead of schedule order",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of the console report",
    )

    parser.add_argument(
        "--output-csv",
        nargs="?",
        const="",
        metavar="FILE",
        help="Write a CSV report (default name if FILE omitted)",
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress console output (only output CSV)",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        rules = config.normalization.to_rules()
        store = open_store(args.prefs)

        # Apply toggles before scoring
        for raw, sentiment in [(i, "liked") for i in args.like] + [(i, "disliked") for i in args.dislike]:
            key = normalize(raw, rules)
            if not key:
                print(f"Warning: ignoring empty ingredient {raw!r}", file=sys.stderr)
                continue
            new_sentiment = store.toggle(key, sentiment)
            if not args.quiet and not args.json:
                print(f"{key}: {new_sentiment.value if new_sentiment else 'cleared'}")

        if args.source:
            provider = FileContentProvider(args.source)
        else:
            provider = WebReadContentProvider.from_config(config.source)
            if args.web_read_url:
                provider.endpoint = args.web_read_url

        result = provider.fetch()
        preferences = store.snapshot()
        entries = build_menu(result.content, config)
        scored = score_menu(entries, preferences, config, ranked=args.ranked)

        if not scored:
            print("Warning: No pizzas found on the schedule", file=sys.stderr)

        if not args.quiet:
            if args.json:
                print(json.dumps([to_dict(item, preferences) for item in scored], indent=2))
            else:
                print(format_console(scored, preferences))

        if args.output_csv is not None:
            output_path = Path(args.output_csv or generate_report_filename())
            with open(output_path, "w", newline="") as f:
                export_csv(scored, output=f)
            if not args.quiet:
                print(f"\nCSV exported to: {output_path}")

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ContentFetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
