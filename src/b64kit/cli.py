import logging
import sys
from pathlib import Path

import orjson
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from b64kit.batch import (
    convert_lines,
    results_to_arrow,
    results_to_csv,
    results_to_jsonl,
    summarize_results,
)
from b64kit.classifier import classify
from b64kit.codec import convert
from b64kit.config import ConfigError, ToolkitConfig, resolve_config, sample_config
from b64kit.data.generator import load_samples
from b64kit.eval.harness import EvalSummary, evaluate_samples, evaluate_synthetic
from b64kit.eval.report import append_csv, append_jsonl, summary_to_row
from b64kit.eval.summarize import summarize_log
from b64kit.formats import InputTooLargeError, Selector

app = typer.Typer(help="Detect and convert Base64, URL-encoded, hex, and plain text.")
eval_app = typer.Typer(help="Evaluation harness for the format classifier.")
config_app = typer.Typer(help="Inspect runtime configuration.")
console = Console()
err_console = Console(stderr=True)
BATCH_FORMATS = {"jsonl", "arrow", "csv"}

app.add_typer(eval_app, name="eval")
app.add_typer(config_app, name="config")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Base64 toolkit: auto-detect an encoding and convert it."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=err_console, show_path=False)],
            force=True,
        )


def _emit(text: str) -> None:
    """Write user data verbatim; Rich drops control characters and click strips ANSI codes."""
    sys.stdout.write(text + "\n")


def _dumps(payload: object) -> str:
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode()


def _load_config(path: Path | None) -> ToolkitConfig:
    try:
        return resolve_config(path)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _parse_selector(value: str) -> Selector:
    try:
        return Selector.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _read_text_file(path: Path) -> str:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"Input file is not UTF-8 text: {path}") from exc
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read input file {path}: {exc}") from exc


def _strip_newline(text: str) -> str:
    # Files and pipes end with a newline that is not part of the payload.
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def _read_input(text: str | None, input: Path | None) -> str:
    if input is not None:
        return _strip_newline(_read_text_file(input))
    if text is None or text == "-":
        return _strip_newline(sys.stdin.read())
    return text


def _preview(text: str, limit: int | None) -> str:
    if limit is None or len(text) <= limit:
        return text
    return f"{text[:limit]}..."


@app.command("convert")
def convert_cmd(
    text: str | None = typer.Argument(
        None, help="Text to convert. Reads stdin when omitted or '-'."
    ),
    input: Path | None = typer.Option(
        None, "--input", "-i", help="Read the text from a file instead."
    ),
    format: str | None = typer.Option(
        None, "--format", "-f", help="auto | base64 | url | hex | text (default from config)."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the full result text."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
    preview: int | None = typer.Option(
        None,
        "--preview",
        min=0,
        help="Truncate the printed result to this many characters "
        "(default from config; 0 prints it in full).",
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML/JSON config file."),
) -> None:
    """Convert one input: decode Base64/URL/hex, or encode plain text to Base64."""
    cfg = _load_config(config)
    selector = _parse_selector(format or cfg.default_format)
    raw = _read_input(text, input)
    try:
        outcome = convert(raw, selector, max_chars=cfg.max_input_chars)
    except InputTooLargeError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if as_json:
        payload = {"selector": selector.value, "input_chars": len(raw), **outcome.to_dict()}
        _emit(_dumps(payload))
        if not outcome.ok:
            raise typer.Exit(code=1)
        return

    if not outcome.ok:
        err_console.print(f"[bold red]{escape(outcome.message or '')}[/]")
        raise typer.Exit(code=1)
    if outcome.is_empty:
        console.print("[yellow]Nothing to convert.[/]")
        return

    console.print(f"[bold green]Format detected:[/] {escape(outcome.detection_label or '')}")
    if output:
        output.write_text(outcome.result_text, encoding="utf-8")
        console.print(f"[bold green]Wrote result[/] to {output}")
    else:
        limit = cfg.preview_chars if preview is None else preview
        _emit(_preview(outcome.result_text, limit or None))


@app.command()
def detect(
    text: str | None = typer.Argument(None, help="Text to classify. Reads stdin when omitted."),
    input: Path | None = typer.Option(
        None, "--input", "-i", help="Read the text from a file instead."
    ),
) -> None:
    """Classify input without converting it."""
    raw = _read_input(text, input)
    detection = classify(raw)
    _emit(_dumps({**detection.to_dict(), "label": detection.label}))


@app.command()
def batch(
    input: Path = typer.Argument(..., help="Text file; each non-blank line is converted."),
    format: str | None = typer.Option(
        None, "--format", "-f", help="auto | base64 | url | hex | text (default from config)."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write per-line results."
    ),
    output_format: str = typer.Option(
        "jsonl", "--output-format", help="Output file format: jsonl | arrow | csv."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML/JSON config file."),
) -> None:
    """Convert every line of a file independently and summarize the outcomes."""
    fmt = output_format.lower()
    if fmt not in BATCH_FORMATS:
        raise typer.BadParameter(
            f"Unsupported output format '{output_format}'. Choose from {sorted(BATCH_FORMATS)}."
        )
    cfg = _load_config(config)
    selector = _parse_selector(format or cfg.default_format)
    lines = _read_text_file(input).splitlines()
    try:
        results = convert_lines(lines, selector, max_chars=cfg.max_input_chars)
    except InputTooLargeError as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(f"[bold green]Converted[/] {len(results)} lines from {input}")

    if output:
        if fmt == "arrow":
            results_to_arrow(results, output)
        elif fmt == "csv":
            results_to_csv(results, output)
        else:
            results_to_jsonl(results, output)
        console.print(f"[bold green]Wrote batch results[/] to {output}")
    else:
        table = Table(title="Batch results")
        table.add_column("Line", justify="right")
        table.add_column("Format")
        table.add_column("Result")
        for r in results:
            table.add_row(
                str(r.line_index),
                Text(r.detection_label or "-"),
                Text(r.error or _preview(r.result_text, cfg.preview_chars)),
            )
        console.print(table)

    _emit(_dumps(summarize_results(results)))


@eval_app.command("heuristic")
def eval_heuristic(
    input: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="Labeled JSONL samples to evaluate. If omitted, a synthetic set is generated.",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write evaluation JSON."
    ),
    log_csv: Path | None = typer.Option(
        None, "--log-csv", help="Append summary as a CSV row for trend tracking."
    ),
    log_jsonl: Path | None = typer.Option(
        None, "--log-jsonl", help="Append full payload as JSONL for trend tracking."
    ),
    auto_log: bool = typer.Option(
        True,
        "--auto-log/--no-auto-log",
        help=(
            "If set and --output is provided, append logs to <log_dir>/eval.csv and "
            "<log_dir>/eval.jsonl by default."
        ),
    ),
    tag: str | None = typer.Option(None, "--tag", help="Optional tag to mark this run."),
    count: int = typer.Option(16, "--count", help="Samples to generate for synthetic eval."),
    seed: int = typer.Option(1234, "--seed", help="Seed for synthetic generation."),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML/JSON config file."),
) -> None:
    """Score the classifier against labeled samples."""
    cfg = _load_config(config)
    if auto_log and output:
        log_csv = log_csv or cfg.log_dir / "eval.csv"
        log_jsonl = log_jsonl or cfg.log_dir / "eval.jsonl"

    if input:
        if not input.is_file():
            raise typer.BadParameter(f"Input file not found: {input}")
        try:
            samples = load_samples(input)
        except (KeyError, ValueError) as exc:
            raise typer.BadParameter(f"Bad sample file {input}: {exc}") from exc
        payload: dict[str, object] = {
            "source": str(input),
            "evaluation": evaluate_samples(samples),
            "tag": tag,
        }
    else:
        payload = evaluate_synthetic(count=count, seed=seed)
        payload["tag"] = tag

    evaluation = payload["evaluation"]
    if log_csv and isinstance(evaluation, EvalSummary):
        row = summary_to_row(evaluation, source=str(input or "synthetic"), tag=tag)
        append_csv(log_csv, row)
        console.print(f"[bold green]Appended CSV log[/] to {log_csv}")

    if log_jsonl:
        append_jsonl(log_jsonl, payload)
        console.print(f"[bold green]Appended JSONL log[/] to {log_jsonl}")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(orjson.dumps(payload))
        console.print(f"[bold green]Wrote evaluation report[/] to {output}")
    else:
        _emit(_dumps(payload))


@eval_app.command("summarize")
def eval_summarize(
    log: Path = typer.Argument(..., help="CSV or JSONL log file produced by eval."),
) -> None:
    """Summarize log(s) produced by eval logging."""
    if not log.is_file():
        raise typer.BadParameter(f"Log file not found: {log}")
    _emit(_dumps(summarize_log(log)))


@config_app.command("show")
def config_show(
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML/JSON config file."),
) -> None:
    """Print the effective configuration (file plus B64KIT_* environment overrides)."""
    _emit(_dumps(_load_config(config).to_dict()))


@config_app.command("sample")
def config_sample() -> None:
    """Print a sample YAML configuration."""
    _emit(yaml.safe_dump(sample_config(), sort_keys=False))


if __name__ == "__main__":
    app()
