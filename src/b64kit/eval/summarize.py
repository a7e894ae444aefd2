"""Summaries over eval logs (CSV or JSONL)."""

from __future__ import annotations

import csv
import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any


def _iter_csv(path: Path) -> Iterator[dict[str, str]]:
    with path.open(newline="") as f:
        reader = csv.DictReader(f)
        yield from reader


def _iter_jsonl(path: Path) -> Iterator[dict[str, Any]]:
    with path.open(encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            yield json.loads(line)


def iter_log_entries(path: Path) -> Iterator[dict[str, Any]]:
    """Yield flat entries; JSONL payloads nest the summary under ``evaluation``."""
    iterator = _iter_csv(path) if path.suffix.lower() == ".csv" else _iter_jsonl(path)
    for entry in iterator:
        nested = entry.get("evaluation")
        if isinstance(nested, dict):
            yield {**nested, "tag": entry.get("tag") or ""}
        else:
            yield entry


def summarize_log(path: Path) -> dict[str, object]:
    """Compute simple aggregates from a CSV/JSONL log."""
    accuracies: list[float] = []
    samples_total = 0
    failures_total = 0
    format_counts: dict[str, int] = {}

    for entry in iter_log_entries(path):
        # CSV uses string values; JSONL keeps native types.
        if "accuracy" in entry:
            accuracies.append(float(entry["accuracy"]))

        if "samples" in entry:
            samples_total += int(entry["samples"])

        if "conversion_failures" in entry:
            failures_total += int(entry["conversion_failures"])

        if "format_counts" in entry:
            counts_raw = entry["format_counts"]
            counts = json.loads(counts_raw) if isinstance(counts_raw, str) else counts_raw
            for k, v in counts.items():
                format_counts[k] = format_counts.get(k, 0) + int(v)

    avg = sum(accuracies) / len(accuracies) if accuracies else 0.0
    return {
        "entries": len(accuracies),
        "samples_total": samples_total,
        "conversion_failures_total": failures_total,
        "average_accuracy": round(avg, 4),
        "format_counts": format_counts,
    }
