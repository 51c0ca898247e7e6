
import sys
import os
import time
import csv
import random
import argparse
import logging
from typing import Dict, Any, List, Callable

import numpy as np

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from qpxt.comparison import natural_order
from qpxt.sorting.merge_sort import sort_by
from qpxt.sorting.sort_errors import DEFAULT_INSERTION_THRESHOLD
from qpxt.validators import validate_sort

SHAPES = ("random", "sorted", "reversed", "few_unique")
DEFAULT_THRESHOLDS = (2, 8, 16, DEFAULT_INSERTION_THRESHOLD, 64, 128)
DEFAULT_SIZES = (100, 1000, 10000)


def make_input(shape: str, size: int, rng: random.Random) -> List[tuple]:
    """
    Builds (key, id) records of the given shape. The id makes stability
    observable when the result is validated.
    """
    if shape == "random":
        keys = [rng.randint(0, size) for _ in range(size)]
    elif shape == "sorted":
        keys = list(range(size))
    elif shape == "reversed":
        keys = list(range(size, 0, -1))
    elif shape == "few_unique":
        keys = [rng.randint(0, 7) for _ in range(size)]
    else:
        raise ValueError(f"Unknown input shape: {shape}")
    return [(k, i) for i, k in enumerate(keys)]


def time_call(fn: Callable[[], Any], repeats: int) -> List[float]:
    """Wall-clock seconds for each of `repeats` runs of fn."""
    timings = []
    for _ in range(repeats):
        start = time.perf_counter()
        fn()
        timings.append(time.perf_counter() - start)
    return timings


def run_single_case(shape: str, size: int, threshold: int, repeats: int, seed: int) -> Dict[str, Any]:
    """
    Runs sort_by on one input with one insertion threshold, plus the
    built-in sorted() as a baseline, on identical copies of the input.
    """
    rng = random.Random(seed)
    data = make_input(shape, size, rng)
    key_of = lambda record: record[0]

    result = sort_by(data, key_of, natural_order, insertion_threshold=threshold)
    valid, reason = validate_sort(data, result, key_of, natural_order)
    if not valid:
        print(f"Invalid result for {shape}/{size}/t={threshold}: {reason}")

    merge_times = time_call(
        lambda: sort_by(data, key_of, natural_order, insertion_threshold=threshold),
        repeats,
    )
    builtin_times = time_call(lambda: sorted(data, key=key_of), repeats)

    return {
        "shape": shape,
        "size": size,
        "threshold": threshold,
        "valid": valid,
        "merge_time": float(np.median(merge_times)),
        "merge_time_std": float(np.std(merge_times)),
        "builtin_time": float(np.median(builtin_times)),
    }


def run_benchmark(sizes, thresholds, shapes, repeats: int, seed: int) -> List[Dict[str, Any]]:
    """Run every (shape, size, threshold) combination."""
    results = []
    total = len(sizes) * len(thresholds) * len(shapes)
    done = 0
    for shape in shapes:
        for size in sizes:
            for threshold in thresholds:
                done += 1
                print(f"  [{done}/{total}] {shape} n={size} threshold={threshold} ...", end="\r")
                results.append(run_single_case(shape, size, threshold, repeats, seed))
    print()
    return results


def save_csv(results: List[Dict[str, Any]], path: str):
    keys = results[0].keys()
    with open(path, "w", newline="") as f:
        dict_writer = csv.DictWriter(f, fieldnames=keys)
        dict_writer.writeheader()
        dict_writer.writerows(results)


def print_summary(results: List[Dict[str, Any]]):
    """Per-threshold averages across shapes, for each size."""
    print("\nSummary Statistics:")
    print(f"{'Size':<8} | {'Threshold':<9} | {'Avg Time (ms)':<13} | {'vs sorted()':<11}")
    print("-" * 52)

    sizes = sorted({r["size"] for r in results})
    thresholds = sorted({r["threshold"] for r in results})
    for size in sizes:
        best = None
        for threshold in thresholds:
            rows = [r for r in results if r["size"] == size and r["threshold"] == threshold]
            avg_time = np.mean([r["merge_time"] for r in rows])
            ratio = avg_time / max(np.mean([r["builtin_time"] for r in rows]), 1e-9)
            if best is None or avg_time < best[1]:
                best = (threshold, avg_time)
            print(f"{size:<8} | {threshold:<9} | {avg_time * 1000:>13.3f} | {ratio:>10.1f}x")
        print(f"{'':<8}   best threshold for n={size}: {best[0]}")

    invalid = sum(1 for r in results if not r["valid"])
    print(f"\nInvalid results: {invalid}/{len(results)}")


def parse_int_list(raw: str) -> List[int]:
    return [int(part) for part in raw.split(",") if part.strip()]


def main():
    parser = argparse.ArgumentParser(description="Benchmark merge sort insertion thresholds")
    parser.add_argument("--sizes", type=parse_int_list, default=list(DEFAULT_SIZES),
                        help="Comma-separated input sizes")
    parser.add_argument("--thresholds", type=parse_int_list, default=list(DEFAULT_THRESHOLDS),
                        help="Comma-separated insertion thresholds")
    parser.add_argument("--shapes", type=lambda s: s.split(","), default=list(SHAPES),
                        help=f"Comma-separated input shapes ({', '.join(SHAPES)})")
    parser.add_argument("--repeats", type=int, default=5, help="Timed runs per case")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--output", type=str, default="benchmark_results.csv", help="Output CSV file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print(f"Starting Benchmark: sizes={args.sizes} thresholds={args.thresholds} shapes={args.shapes}")

    results = run_benchmark(args.sizes, args.thresholds, args.shapes, args.repeats, args.seed)
    if not results:
        print("Nothing to run.")
        return

    save_csv(results, args.output)
    print(f"Results saved to {args.output}")

    print_summary(results)


if __name__ == "__main__":
    main()
