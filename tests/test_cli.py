import base64
import json
from pathlib import Path

from typer.testing import CliRunner

from b64kit.cli import app

runner = CliRunner()


def test_convert_auto_decodes_base64():
    result = runner.invoke(app, ["convert", "SGVsbG8gV29ybGQ="])
    assert result.exit_code == 0
    assert "Base64 (95%)" in result.output
    assert "Hello World" in result.output


def test_convert_reads_stdin_and_drops_trailing_newline():
    result = runner.invoke(app, ["convert"], input="Hello%20World\n")
    assert result.exit_code == 0
    assert "URL Encoded (85%)" in result.output
    assert "Hello World" in result.output


def test_convert_json_output_for_manual_text():
    result = runner.invoke(app, ["convert", "--json", "-f", "text", "Hello World"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["result_text"] == "SGVsbG8gV29ybGQ="
    assert payload["detection_label"] == "Plain Text (manual)"
    assert payload["ok"] is True


def test_convert_failure_exits_nonzero():
    result = runner.invoke(app, ["convert", "--format", "hex", "48656c6c6"])
    assert result.exit_code == 1
    assert "Invalid format or corrupted data" in result.output


def test_convert_rejects_unknown_format():
    result = runner.invoke(app, ["convert", "--format", "rot13", "abc"])
    assert result.exit_code == 2


def test_convert_blank_input_reports_nothing_to_do():
    result = runner.invoke(app, ["convert", "   "])
    assert result.exit_code == 0
    assert "Nothing to convert" in result.output


def test_convert_writes_full_result_file(tmp_path: Path):
    source = tmp_path / "in.txt"
    source.write_text("48656c6c6f\n", encoding="utf-8")
    out = tmp_path / "out.txt"
    result = runner.invoke(app, ["convert", "-i", str(source), "-o", str(out)])
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "Hello"


def test_convert_preview_truncates():
    result = runner.invoke(app, ["convert", "-f", "text", "--preview", "4", "Hello World"])
    assert result.exit_code == 0
    assert "SGVs..." in result.output
    assert "SGVsbG8gV29ybGQ=" not in result.output


def test_convert_respects_config_limit(tmp_path: Path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("max_input_chars: 3\n")
    result = runner.invoke(app, ["convert", "-c", str(cfg), "Hello"])
    assert result.exit_code == 2


def test_detect_prints_json():
    result = runner.invoke(app, ["detect", "1234"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["format"] == "base64"
    assert payload["label"] == "Base64 (95%)"


def test_batch_writes_jsonl(tmp_path: Path):
    source = tmp_path / "lines.txt"
    source.write_text("SGVsbG8=\n48656c6c6f\nzz%\n", encoding="utf-8")
    out = tmp_path / "results.jsonl"
    result = runner.invoke(app, ["batch", str(source), "-o", str(out)])
    assert result.exit_code == 0
    rows = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert [row["result_text"] for row in rows] == ["Hello", "Hello", ""]
    assert rows[2]["error"] == "Invalid format or corrupted data"


def test_batch_rejects_unknown_output_format(tmp_path: Path):
    source = tmp_path / "lines.txt"
    source.write_text("SGVsbG8=\n", encoding="utf-8")
    result = runner.invoke(app, ["batch", str(source), "--output-format", "xml"])
    assert result.exit_code == 2


def test_eval_heuristic_logs_and_summarizes(tmp_path: Path):
    log_csv = tmp_path / "eval.csv"
    result = runner.invoke(
        app, ["eval", "heuristic", "--count", "8", "--log-csv", str(log_csv), "--tag", "ci"]
    )
    assert result.exit_code == 0
    assert log_csv.exists()

    summary = runner.invoke(app, ["eval", "summarize", str(log_csv)])
    assert summary.exit_code == 0
    assert json.loads(summary.stdout)["samples_total"] == 8


def test_config_show_applies_env_override():
    result = runner.invoke(app, ["config", "show"], env={"B64KIT_PREVIEW_CHARS": "7"})
    assert result.exit_code == 0
    assert json.loads(result.stdout)["preview_chars"] == 7


def test_config_sample_is_yaml():
    result = runner.invoke(app, ["config", "sample"])
    assert result.exit_code == 0
    assert "default_format: auto" in result.output


def test_convert_keeps_control_characters_in_result():
    payload = "line1\r\nline2\x0cend"
    encoded = base64.b64encode(payload.encode("utf-8")).decode("ascii")
    result = runner.invoke(app, ["convert", "-f", "base64", encoded])
    assert result.exit_code == 0
    # stdout_bytes: Result.stdout normalizes CRLF.
    assert b"line1\r\nline2\x0cend\n" in result.stdout_bytes


def test_convert_json_keeps_escaped_control_characters():
    encoded = base64.b64encode(b"a\rb").decode("ascii")
    result = runner.invoke(app, ["convert", "--json", encoded])
    assert result.exit_code == 0
    assert json.loads(result.stdout_bytes)["result_text"] == "a\rb"


def test_convert_preview_defaults_to_config(tmp_path: Path):
    long_text = "x" * 150
    result = runner.invoke(app, ["convert", "-f", "text", long_text])
    expected = base64.b64encode(long_text.encode()).decode()
    assert result.exit_code == 0
    assert f"{expected[:100]}..." in result.output
    assert expected not in result.output

    full = runner.invoke(app, ["convert", "-f", "text", "--preview", "0", long_text])
    assert expected in full.output

    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("preview_chars: 8\n")
    short = runner.invoke(app, ["convert", "-f", "text", "-c", str(cfg), long_text])
    assert f"{expected[:8]}..." in short.output


def test_malformed_config_is_a_bad_parameter(tmp_path: Path):
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json", encoding="utf-8")
    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("default_format: [auto\n", encoding="utf-8")
    for path in (bad_json, bad_yaml):
        result = runner.invoke(app, ["convert", "-c", str(path), "Hello"])
        assert result.exit_code == 2
        assert not isinstance(result.exception, (ValueError, UnicodeDecodeError))


def test_non_utf8_input_file_is_a_bad_parameter(tmp_path: Path):
    source = tmp_path / "utf16.txt"
    source.write_bytes(b"\xff\xfeH\x00i\x00")
    result = runner.invoke(app, ["convert", "-i", str(source)])
    assert result.exit_code == 2
    assert "not UTF-8" in result.output

    batch_result = runner.invoke(app, ["batch", str(source)])
    assert batch_result.exit_code == 2
