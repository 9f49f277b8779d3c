"""Benchmark: linearization latency (p50/p95/mean).

Measures per-call latency of a cold ``Linearizer`` on a deep single
inheritance chain and on a wide layered lattice of diamonds.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from c3mro.hierarchy import load
from c3mro.hierarchy.nodes import Hierarchy
from c3mro.linearizer import Linearizer

_WARMUP: int = 2
_ITERATIONS: int = 20

_CHAIN_DEPTH: int = 1_200
_LATTICE_LAYERS: int = 8
_LATTICE_WIDTH: int = 6


def deep_chain(depth: int = _CHAIN_DEPTH) -> Hierarchy:
    """``C0 <- C1 <- ... <- C{depth-1}``, deeper than the recursion limit."""
    classes: dict[str, list[str]] = {"C0": []}
    for index in range(1, depth):
        classes[f"C{index}"] = [f"C{index - 1}"]
    return load({"root": "object", "classes": classes})


def lattice(layers: int = _LATTICE_LAYERS, width: int = _LATTICE_WIDTH) -> Hierarchy:
    """Every class of a layer inherits from every class of the layer above."""
    classes: dict[str, list[str]] = {}
    previous: list[str] = []
    for layer in range(layers):
        current = [f"L{layer}_{col}" for col in range(width)]
        for name in current:
            classes[name] = list(previous)
        previous = current
    classes["Bottom"] = list(previous)
    return load({"root": "object", "classes": classes})


def _measure(hierarchy: Hierarchy, target: str, operation: str) -> dict[str, object]:
    for _ in range(_WARMUP):
        Linearizer(hierarchy).linearize(target)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        Linearizer(hierarchy).linearize(target)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_deep_chain_latency() -> dict[str, object]:
    """Benchmark a cold linearization of the deepest class of a long chain."""
    return _measure(deep_chain(), f"C{_CHAIN_DEPTH - 1}", "linearize_deep_chain")


def bench_lattice_latency() -> dict[str, object]:
    """Benchmark a cold linearization of the bottom of a diamond lattice."""
    return _measure(lattice(), "Bottom", "linearize_lattice")


if __name__ == "__main__":
    results = [bench_deep_chain_latency(), bench_lattice_latency()]
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
