from pathlib import Path

from b64kit.codec import convert
from b64kit.data.generator import generate_samples, load_samples
from b64kit.formats import FormatKind


def test_generate_samples_cycles_formats_reproducibly():
    samples = generate_samples(count=8, seed=1)
    assert len(samples) == 8
    assert [s.expected for s in samples[:4]] == list(FormatKind)
    again = generate_samples(count=8, seed=1)
    assert [s.text for s in samples] == [s.text for s in again]


def test_samples_decode_back_to_their_source_phrase():
    for sample in generate_samples(count=12, seed=7):
        if sample.expected is FormatKind.TEXT:
            assert sample.text == sample.source
        else:
            outcome = convert(sample.text, sample.expected)
            assert outcome.result_text == sample.source


def test_load_samples_from_jsonl(tmp_path: Path) -> None:
    path = tmp_path / "samples.jsonl"
    path.write_text(
        '{"text": "SGVsbG8=", "expected": "BASE64"}\n\n{"text": "hi", "expected": "text"}\n',
        encoding="utf-8",
    )
    samples = load_samples(path)
    assert [s.expected for s in samples] == [FormatKind.BASE64, FormatKind.TEXT]
    assert samples[0].source == ""
