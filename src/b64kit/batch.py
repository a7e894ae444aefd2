"""Line-by-line conversion and result writers (JSONL, Arrow IPC, CSV)."""

from __future__ import annotations

import csv
import json
from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from pathlib import Path

import pyarrow as pa

from b64kit.classifier import is_blank
from b64kit.codec import convert
from b64kit.formats import Selector


@dataclass
class BatchResult:
    line_index: int
    input_chars: int
    resolved_format: str | None
    detection_label: str | None
    result_text: str
    error: str | None = None


def convert_lines(
    lines: Iterable[str],
    selector: Selector | str = Selector.AUTO,
    max_chars: int | None = None,
) -> list[BatchResult]:
    """Convert each non-blank line on its own; line indexes are 0-based source positions."""
    results: list[BatchResult] = []
    for idx, raw in enumerate(lines):
        line = raw.rstrip("\r\n")
        if is_blank(line):
            continue
        outcome = convert(line, selector, max_chars=max_chars)
        results.append(
            BatchResult(
                line_index=idx,
                input_chars=len(line),
                resolved_format=outcome.resolved_format.value if outcome.resolved_format else None,
                detection_label=outcome.detection_label,
                result_text=outcome.result_text,
                error=outcome.message,
            )
        )
    return results


def summarize_results(results: list[BatchResult]) -> dict[str, object]:
    formats = Counter(r.resolved_format or "error" for r in results)
    return {
        "lines": len(results),
        "converted": sum(1 for r in results if r.error is None),
        "failed": sum(1 for r in results if r.error is not None),
        "format_counts": dict(formats),
    }


def results_to_jsonl(results: list[BatchResult], path: Path, gzip_output: bool = False) -> None:
    """Write batch results as JSONL for downstream consumption."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if gzip_output:
        import gzip as gzip_lib

        handle = gzip_lib.open(path, "wt", encoding="utf-8")
    else:
        handle = path.open("w", encoding="utf-8")

    with handle as f:
        for r in results:
            f.write(json.dumps(asdict(r), ensure_ascii=False) + "\n")


def results_to_arrow(results: list[BatchResult], path: Path) -> None:
    """Write batch results to Arrow IPC for analytics-friendly consumption."""
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.table(
        {
            "line_index": pa.array([r.line_index for r in results], type=pa.int64()),
            "input_chars": pa.array([r.input_chars for r in results], type=pa.int64()),
            "resolved_format": pa.array([r.resolved_format for r in results], type=pa.string()),
            "detection_label": pa.array([r.detection_label for r in results], type=pa.string()),
            "result_text": pa.array([r.result_text for r in results], type=pa.string()),
            "error": pa.array([r.error for r in results], type=pa.string()),
        }
    )
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)


def results_to_csv(results: list[BatchResult], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fieldnames = list(BatchResult.__dataclass_fields__)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            writer.writerow(asdict(r))
