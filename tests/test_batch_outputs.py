import json
from pathlib import Path

import pyarrow.ipc as pa_ipc

from b64kit.batch import (
    convert_lines,
    results_to_arrow,
    results_to_csv,
    results_to_jsonl,
    summarize_results,
)

LINES = ["SGVsbG8=\n", "\n", "48656c6c6f", "zz%"]


def test_convert_lines_skips_blank_lines_and_keeps_source_index():
    results = convert_lines(LINES)
    assert [r.line_index for r in results] == [0, 2, 3]
    assert results[0].result_text == "Hello"
    assert results[0].detection_label == "Base64 (95%)"
    assert results[1].resolved_format == "hex"
    assert results[2].error == "Invalid format or corrupted data"
    assert results[2].resolved_format is None


def test_summarize_results_counts_failures():
    summary = summarize_results(convert_lines(LINES))
    assert summary["lines"] == 3
    assert summary["converted"] == 2
    assert summary["failed"] == 1
    assert summary["format_counts"] == {"base64": 1, "hex": 1, "error": 1}


def test_results_to_jsonl_arrow_and_csv(tmp_path: Path) -> None:
    results = convert_lines(["Y2Fmw6k=", "caf%C3%A9"])
    jsonl_path = tmp_path / "out.jsonl"
    arrow_path = tmp_path / "out.arrow"
    csv_path = tmp_path / "out.csv"

    results_to_jsonl(results, jsonl_path)
    rows = [json.loads(line) for line in jsonl_path.read_text(encoding="utf-8").splitlines()]
    assert [row["result_text"] for row in rows] == ["café", "café"]

    results_to_arrow(results, arrow_path)
    with pa_ipc.open_file(arrow_path) as reader:
        table = reader.read_all()
    assert table.num_rows == 2
    assert table.column("resolved_format").to_pylist() == ["base64", "url"]

    results_to_csv(results, csv_path)
    content = csv_path.read_text(encoding="utf-8")
    assert content.startswith("line_index,input_chars,resolved_format")
    assert "café" in content
