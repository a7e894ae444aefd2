"""Synthetic labeled samples for classifier evaluation.

Each sample starts from a plain phrase assembled from a small vocabulary and
is rendered in one of the four formats:
- base64: standard padded Base64 of the UTF-8 bytes
- url: percent-encoded with ``quote`` (spaces become %20)
- hex: lowercase or uppercase hex digits, optionally space-separated per byte
- text: the phrase itself

Used for fixtures and regression tests of the heuristic rules.
"""

from __future__ import annotations

import base64
import json
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from b64kit.formats import FormatKind

WORDS: Sequence[str] = (
    "hello",
    "world",
    "token",
    "café",
    "naïve",
    "payload",
    "user=alice",
    "id:42",
    "über",
    "path/to/file",
    "snowman ☃",
    "query?x=1&y=2",
)


@dataclass
class Sample:
    text: str
    expected: FormatKind
    source: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "expected": self.expected.value, "source": self.source}


def _phrase(rng: random.Random) -> str:
    return " ".join(rng.choice(WORDS) for _ in range(rng.randint(2, 4)))


def render_sample(phrase: str, fmt: FormatKind, rng: random.Random) -> str:
    """Encode ``phrase`` into ``fmt``."""
    data = phrase.encode("utf-8")
    if fmt is FormatKind.BASE64:
        return base64.b64encode(data).decode("ascii")
    if fmt is FormatKind.URL:
        return quote(phrase, safe="")
    if fmt is FormatKind.HEX:
        digits = data.hex()
        if rng.random() < 0.5:
            digits = digits.upper()
        if rng.random() < 0.3:
            digits = " ".join(digits[i : i + 2] for i in range(0, len(digits), 2))
        return digits
    return phrase


def generate_samples(count: int = 16, *, seed: int = 1234) -> list[Sample]:
    """Generate ``count`` samples cycling through the formats, reproducibly."""
    rng = random.Random(seed)
    formats = list(FormatKind)
    samples: list[Sample] = []
    for i in range(count):
        fmt = formats[i % len(formats)]
        phrase = _phrase(rng)
        samples.append(Sample(text=render_sample(phrase, fmt, rng), expected=fmt, source=phrase))
    return samples


def iter_samples_jsonl(lines: Iterable[str]) -> Iterable[Sample]:
    for line in lines:
        line = line.strip()
        if not line:
            continue
        payload = json.loads(line)
        yield Sample(
            text=str(payload["text"]),
            expected=FormatKind(str(payload["expected"]).lower()),
            source=str(payload.get("source", "")),
        )


def load_samples(path: Path) -> list[Sample]:
    with path.open(encoding="utf-8") as f:
        return list(iter_samples_jsonl(f))
