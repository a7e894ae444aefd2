"""Micro-benchmarks for classify/convert on synthetic samples."""

from __future__ import annotations

import time

from b64kit.codec import convert
from b64kit.data.generator import generate_samples


def benchmark_convert(samples: int = 1000, runs: int = 3) -> dict[str, float]:
    texts = [s.text for s in generate_samples(count=samples)]
    total_chars = sum(len(t) for t in texts)
    best = None
    for _ in range(runs):
        start = time.perf_counter()
        for text in texts:
            convert(text)
        elapsed = time.perf_counter() - start
        best = elapsed if best is None or elapsed < best else best
    mcps = (total_chars / 1_000_000) / best if best else 0.0
    return {
        "samples": samples,
        "chars": total_chars,
        "best_seconds": best or 0.0,
        "mchars_per_s": mcps,
    }


if __name__ == "__main__":
    result = benchmark_convert()
    print(result)
