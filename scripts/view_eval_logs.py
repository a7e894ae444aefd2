"""Quick viewer for eval logs (CSV or JSONL).

Shows aggregate accuracy, sample totals, and detected-format counts in a Rich table.
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.table import Table

from b64kit.eval.summarize import iter_log_entries, summarize_log


def main() -> None:
    parser = argparse.ArgumentParser(description="View eval logs.")
    parser.add_argument("log", type=Path, help="CSV or JSONL log file.")
    args = parser.parse_args()

    console = Console()
    summary = summarize_log(args.log)

    console.print("[bold]Aggregate[/]")
    console.print(
        f"- entries: {summary['entries']}, samples: {summary['samples_total']}, "
        f"avg accuracy: {summary['average_accuracy']}, "
        f"conversion failures: {summary['conversion_failures_total']}"
    )

    fmt_table = Table(title="Detected Formats")
    fmt_table.add_column("Format")
    fmt_table.add_column("Count", justify="right")
    counts = summary.get("format_counts", {}) or {}
    for fmt, count in sorted(counts.items(), key=lambda kv: kv[1], reverse=True):
        fmt_table.add_row(fmt, str(count))
    console.print(fmt_table)

    tag_counts: Counter[str] = Counter()
    tag_accuracy: Counter[str] = Counter()
    for entry in iter_log_entries(args.log):
        tag = str(entry.get("tag") or "")
        if tag and "accuracy" in entry:
            tag_counts[tag] += 1
            tag_accuracy[tag] += float(entry["accuracy"])
    if tag_counts:
        tag_table = Table(title="Tags")
        tag_table.add_column("Tag")
        tag_table.add_column("Entries", justify="right")
        tag_table.add_column("Avg Accuracy", justify="right")
        for tag, count in tag_counts.most_common():
            tag_table.add_row(tag, str(count), f"{tag_accuracy[tag] / count:.4f}")
        console.print(tag_table)


if __name__ == "__main__":
    main()
