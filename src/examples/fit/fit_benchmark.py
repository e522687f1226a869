"""Benchmark of fitting and sampling curves through a growing number of anchors.

Reports the average time per fit (solve + segment construction + sampling),
comparing the banded and the dense solver.
"""

import timeit
from typing import Dict

import numpy as np

from bezfit.common import SolveMethod
from bezfit.consts import SAMPLES_PER_SEGMENT, FitSettings
from bezfit.curve import FittedCurve

ANCHOR_COUNTS = [3, 10, 30, 100, 300, 1_000]


def random_anchors(count: int, seed: int = 42) -> np.ndarray:
    """Anchors spread over a 800 x 600 window like accumulated mouse clicks."""
    rng = np.random.default_rng(seed)
    return rng.uniform((0.0, 0.0), (800.0, 600.0), size=(count, 2))


def time_fit(count: int, method: SolveMethod, repeats: int) -> float:
    """Average time of one fit in ms."""
    anchors = random_anchors(count)
    settings = FitSettings(method=method, samples_per_segment=SAMPLES_PER_SEGMENT)
    dt = timeit.timeit(lambda: FittedCurve.fit(anchors, settings).polygonize(), number=repeats)
    return dt * 1000 / repeats


def main(anchor_counts=None, repeats: int = 0) -> Dict[int, Dict[str, float]]:
    """Main"""
    counts = ANCHOR_COUNTS if anchor_counts is None else anchor_counts

    print("Curve fit benchmark (average ms per fit, lower = better)")
    print("Anchors |     banded    |     dense     | Fastest")
    print("-" * 52)

    results: Dict[int, Dict[str, float]] = {}
    for count in counts:
        # Auto-scale repeats so each test takes reasonable time
        number = repeats if repeats > 0 else max(1, 3_000 // count)
        timings = {method.value: time_fit(count, method, number) for method in SolveMethod}
        fastest = min(timings, key=timings.get)
        results[count] = timings
        print(f"{count:7} |  {timings['banded']:9.3f} ms |  {timings['dense']:9.3f} ms | {fastest}")

    return results


if __name__ == "__main__":
    main()
