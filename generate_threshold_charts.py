"""
Threshold Chart Generator
=========================
Generates charts comparing merge sort insertion thresholds.
Run:  python generate_threshold_charts.py --repeats 3
      python generate_threshold_charts.py --from-csv benchmark_results.csv
Output: threshold_charts/ folder with 3 PNG files.
"""

import sys
import os
import csv
import argparse
import logging
import numpy as np
from typing import Dict, Any, List
from collections import defaultdict

# Ensure project root is on the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for file output
import matplotlib.pyplot as plt

from benchmark_sort import run_benchmark, DEFAULT_SIZES, DEFAULT_THRESHOLDS, SHAPES
from qpxt.sorting.sort_errors import DEFAULT_INSERTION_THRESHOLD

# ─────────────────────────────────────────────────────────────
# Color Palette & Styling
# ─────────────────────────────────────────────────────────────
SHAPE_COLORS = {
    "random":     "#FF6B6B",   # Coral Red
    "sorted":     "#51CF66",   # Emerald Green
    "reversed":   "#339AF0",   # Sky Blue
    "few_unique": "#E0AF68",   # Gold
}
BG_COLOR = "#1A1B26"       # Tokyo Night background
CARD_COLOR = "#24283B"     # Card panels
TEXT_COLOR = "#C0CAF5"     # Soft lavender text
GRID_COLOR = "#414868"     # Subtle grid lines
ACCENT_GOLD = "#E0AF68"


def setup_style():
    """Apply a dark, presentation-friendly matplotlib style."""
    plt.rcParams.update({
        "figure.facecolor": BG_COLOR,
        "axes.facecolor": CARD_COLOR,
        "axes.edgecolor": GRID_COLOR,
        "axes.labelcolor": TEXT_COLOR,
        "axes.titleweight": "bold",
        "text.color": TEXT_COLOR,
        "xtick.color": TEXT_COLOR,
        "ytick.color": TEXT_COLOR,
        "grid.color": GRID_COLOR,
        "grid.alpha": 0.3,
        "font.size": 13,
        "axes.titlesize": 16,
        "axes.labelsize": 13,
        "legend.facecolor": CARD_COLOR,
        "legend.edgecolor": GRID_COLOR,
        "legend.fontsize": 11,
        "figure.dpi": 180,
        "savefig.dpi": 180,
        "savefig.bbox": "tight",
        "savefig.facecolor": BG_COLOR,
    })


def load_csv(path: str) -> List[Dict[str, Any]]:
    """Read results written by benchmark_sort.py, restoring column types."""
    results = []
    with open(path, newline="") as f:
        for row in csv.DictReader(f):
            results.append({
                "shape": row["shape"],
                "size": int(row["size"]),
                "threshold": int(row["threshold"]),
                "valid": row["valid"] == "True",
                "merge_time": float(row["merge_time"]),
                "merge_time_std": float(row["merge_time_std"]),
                "builtin_time": float(row["builtin_time"]),
            })
    return results


def group_by(results, *fields) -> Dict[tuple, List[Dict[str, Any]]]:
    grouped = defaultdict(list)
    for r in results:
        grouped[tuple(r[f] for f in fields)].append(r)
    return grouped


def _finish(ax):
    ax.grid(axis="y", zorder=0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)


# ─────────────────────────────────────────────────────────────
# Chart Generators
# ─────────────────────────────────────────────────────────────
def chart_1_threshold_curve(results, out_dir):
    """Line chart: median time vs threshold, one line per size (averaged over shapes)."""
    fig, ax = plt.subplots(figsize=(10, 6))
    thresholds = sorted({r["threshold"] for r in results})
    grouped = group_by(results, "size", "threshold")

    for size in sorted({r["size"] for r in results}):
        times = [np.mean([r["merge_time"] for r in grouped[(size, t)]]) * 1000
                 for t in thresholds]
        # Normalise to the default threshold so sizes share one axis.
        base_rows = grouped.get((size, DEFAULT_INSERTION_THRESHOLD))
        base = np.mean([r["merge_time"] for r in base_rows]) * 1000 if base_rows else times[0]
        ax.plot(thresholds, np.array(times) / base, marker="o", linewidth=2.5,
                label=f"n = {size}", zorder=3)

    ax.axvline(DEFAULT_INSERTION_THRESHOLD, color=ACCENT_GOLD, linestyle="--",
               linewidth=1.5, label=f"default ({DEFAULT_INSERTION_THRESHOLD})")
    ax.set_xscale("log", base=2)
    ax.set_xlabel("Insertion Threshold")
    ax.set_ylabel("Relative Time (default = 1.0)")
    ax.set_title("Sort Time by Insertion Threshold", fontsize=18, pad=15)
    ax.legend(loc="upper left")
    _finish(ax)

    fig.savefig(os.path.join(out_dir, "1_threshold_curve.png"))
    plt.close(fig)
    print("  ✓ Chart 1: Threshold Curve")


def chart_2_shapes(results, out_dir):
    """Bar chart: slowdown vs sorted() per input shape, at the default threshold."""
    fig, ax = plt.subplots(figsize=(10, 6))
    rows = [r for r in results if r["threshold"] == DEFAULT_INSERTION_THRESHOLD] or results
    sizes = sorted({r["size"] for r in rows})
    shapes = [s for s in SHAPES if any(r["shape"] == s for r in rows)]
    grouped = group_by(rows, "shape", "size")
    x = np.arange(len(sizes))
    width = 0.8 / max(len(shapes), 1)

    for i, shape in enumerate(shapes):
        ratios = []
        for size in sizes:
            entries = grouped.get((shape, size), [])
            if entries:
                ratios.append(np.mean([e["merge_time"] / max(e["builtin_time"], 1e-9) for e in entries]))
            else:
                ratios.append(0.0)
        ax.bar(x + i * width, ratios, width, label=shape,
               color=SHAPE_COLORS.get(shape, ACCENT_GOLD), edgecolor="none",
               alpha=0.9, zorder=3)

    ax.set_xticks(x + width * (len(shapes) - 1) / 2)
    ax.set_xticklabels([f"n = {s}" for s in sizes])
    ax.set_ylabel("Time relative to sorted()")
    ax.set_title("Slowdown vs Built-in sorted() by Input Shape", fontsize=18, pad=15)
    ax.legend(loc="upper left")
    _finish(ax)

    fig.savefig(os.path.join(out_dir, "2_shapes.png"))
    plt.close(fig)
    print("  ✓ Chart 2: Input Shapes")


def chart_3_scalability(results, out_dir):
    """Log-log line chart: time vs size for each threshold (random input only)."""
    fig, ax = plt.subplots(figsize=(10, 6))
    rows = [r for r in results if r["shape"] == "random"] or results
    grouped = group_by(rows, "threshold", "size")
    sizes = sorted({r["size"] for r in rows})

    for threshold in sorted({r["threshold"] for r in rows}):
        times = [np.mean([r["merge_time"] for r in grouped[(threshold, s)]]) * 1000
                 for s in sizes]
        style = "-" if threshold == DEFAULT_INSERTION_THRESHOLD else ":"
        ax.plot(sizes, times, style, marker="o", linewidth=2, label=f"t = {threshold}",
                zorder=3)

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Input Size (elements)")
    ax.set_ylabel("Median Time (ms)")
    ax.set_title("Scalability by Threshold", fontsize=18, pad=15)
    ax.legend(loc="upper left", ncol=2)
    _finish(ax)

    fig.savefig(os.path.join(out_dir, "3_scalability.png"))
    plt.close(fig)
    print("  ✓ Chart 3: Scalability")


# ─────────────────────────────────────────────────────────────
# Main
# ─────────────────────────────────────────────────────────────
def main():
    parser = argparse.ArgumentParser(description="Generate Threshold Charts")
    parser.add_argument("--from-csv", type=str, default=None,
                        help="Chart an existing benchmark_sort.py CSV instead of re-running")
    parser.add_argument("--repeats", type=int, default=3,
                        help="Timed runs per case (default: 3)")
    parser.add_argument("--quick", action="store_true",
                        help="Quick mode: fewer sizes and thresholds")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    out_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                           "threshold_charts")
    os.makedirs(out_dir, exist_ok=True)

    setup_style()

    if args.from_csv:
        print(f"Loading results from {args.from_csv}")
        results = load_csv(args.from_csv)
    else:
        if args.quick:
            sizes, thresholds = (100, 1000), (8, DEFAULT_INSERTION_THRESHOLD, 64)
        else:
            sizes, thresholds = DEFAULT_SIZES, DEFAULT_THRESHOLDS
        print("Phase 1/2: Running Benchmarks...")
        results = run_benchmark(sizes, thresholds, SHAPES, args.repeats, seed=0)

    if not results:
        print("No results to chart.")
        return

    print("\nPhase 2/2: Generating Charts...")
    chart_1_threshold_curve(results, out_dir)
    chart_2_shapes(results, out_dir)
    chart_3_scalability(results, out_dir)

    print(f"All 3 charts saved to: {out_dir}")


if __name__ == "__main__":
    main()
