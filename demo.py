"""
OrderedTree Demo -- Insertion traces, rebuild frequency by insertion order,
balance-check cost, and post-rebuild shape against the floor(log2 n) bound.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
import time
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
from ordered_tree import OrderedTree

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

TRACE_SIZE = 128
ORDER_SIZE = 256
TIMING_SIZES = [50, 100, 200, 400, 800]


class TracingTree(OrderedTree):
    """OrderedTree that counts how many times the insert hook rebuilt it."""

    def __init__(self, comparator=None):
        super().__init__(comparator)
        self.rebuilds = 0

    def rebuild(self):
        self.rebuilds += 1
        super().rebuild()


def trace_insertions(values):
    """Insert values one by one; return sizes, heights and rebuild flags."""
    tree = TracingTree()
    sizes, heights, rebuilt = [], [], []
    for value in values:
        before = tree.rebuilds
        tree.insert(value)
        assert tree.is_balanced(), "tree left unbalanced after insert"
        sizes.append(tree.size())
        heights.append(tree.height())
        rebuilt.append(tree.rebuilds > before)
    return np.array(sizes), np.array(heights), np.array(rebuilt, dtype=bool)


# ---------------------------------------------------------------------------
# Example 1: Insertion Trace
# ---------------------------------------------------------------------------
def example_1_insertion_trace():
    """Follow height and rebuilds while inserting an ascending run."""
    print("=" * 60)
    print("Example 1: Insertion Trace (ascending run)")
    print("=" * 60)

    sizes, heights, rebuilt = trace_insertions(range(TRACE_SIZE))
    bound = np.floor(np.log2(sizes))

    print(f"\n  Inserted: {TRACE_SIZE} ascending integers")
    print(f"  Rebuilds triggered: {int(rebuilt.sum())}")
    print(f"  Final height: {heights[-1]} (floor(log2 n) = {int(bound[-1])})")
    print(f"  Max height - floor(log2 n): {int((heights - bound).max())}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].step(sizes, heights, where="post", color=COLORS["blue"],
                 linewidth=2, label="height()")
    axes[0].plot(sizes, bound, "--", color=COLORS["dark"], linewidth=1.5,
                 label="floor(log2 n)")
    axes[0].scatter(sizes[rebuilt], heights[rebuilt], color=COLORS["red"],
                    s=18, zorder=3, label="insert triggered rebuild")
    axes[0].set_xlabel("Size")
    axes[0].set_ylabel("Height")
    axes[0].set_title("Height After Each Insert\nRebuild pulls height back to the bound",
                      fontsize=10, fontweight="bold")
    axes[0].legend(fontsize=9)
    axes[0].grid(True, alpha=0.3)

    gaps = np.diff(np.flatnonzero(rebuilt))
    axes[1].bar(np.arange(len(gaps)), gaps, color=COLORS["orange"], edgecolor="white")
    axes[1].set_xlabel("Rebuild #")
    axes[1].set_ylabel("Inserts since previous rebuild")
    axes[1].set_title("Gap Between Rebuilds\nLarger trees absorb more inserts",
                      fontsize=10, fontweight="bold")
    axes[1].grid(True, alpha=0.3, axis="y")

    plt.tight_layout()
    fig.savefig(VIZ_DIR / "01_insertion_trace.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: {VIZ_DIR / '01_insertion_trace.png'}")


# ---------------------------------------------------------------------------
# Example 2: Rebuild Frequency by Insertion Order
# ---------------------------------------------------------------------------
def example_2_rebuild_frequency():
    """Count rebuilds for sorted, reversed and shuffled insertion orders."""
    print("\n" + "=" * 60)
    print("Example 2: Rebuild Frequency by Insertion Order")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    orders = {
        "Ascending": np.arange(ORDER_SIZE),
        "Descending": np.arange(ORDER_SIZE)[::-1],
    }
    for i in range(3):
        orders[f"Shuffle {i + 1}"] = rng.permutation(ORDER_SIZE)

    print(f"\n  {'Order':>12} {'Rebuilds':>10} {'Final height':>14}")
    print(f"  {'-'*38}")

    names, counts, cumulative = [], [], []
    for name, values in orders.items():
        _, heights, rebuilt = trace_insertions(values.tolist())
        names.append(name)
        counts.append(int(rebuilt.sum()))
        cumulative.append(np.cumsum(rebuilt))
        print(f"  {name:>12} {counts[-1]:>10} {heights[-1]:>14}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    palette = [COLORS["blue"], COLORS["red"], COLORS["green"],
               COLORS["purple"], COLORS["orange"]]
    axes[0].bar(np.arange(len(names)), counts, color=palette, edgecolor="white")
    axes[0].set_xticks(np.arange(len(names)))
    axes[0].set_xticklabels(names, fontsize=9)
    axes[0].set_ylabel("Rebuilds")
    axes[0].set_title(f"Rebuilds Over {ORDER_SIZE} Inserts\nSorted input rebuilds most often",
                      fontsize=10, fontweight="bold")
    axes[0].grid(True, alpha=0.3, axis="y")

    for name, series, color in zip(names, cumulative, palette):
        axes[1].plot(np.arange(1, ORDER_SIZE + 1), series, color=color,
                     linewidth=2, label=name)
    axes[1].set_xlabel("Inserts")
    axes[1].set_ylabel("Cumulative rebuilds")
    axes[1].set_title("Cumulative Rebuilds", fontsize=10, fontweight="bold")
    axes[1].legend(fontsize=9)
    axes[1].grid(True, alpha=0.3)

    plt.tight_layout()
    fig.savefig(VIZ_DIR / "02_rebuild_frequency.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: {VIZ_DIR / '02_rebuild_frequency.png'}")


# ---------------------------------------------------------------------------
# Example 3: Balance-Check Cost
# ---------------------------------------------------------------------------
def example_3_balance_check_cost():
    """Time a full build and a single is_balanced() call at several sizes."""
    print("\n" + "=" * 60)
    print("Example 3: Balance-Check Cost")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    build_ms, check_us = [], []

    print(f"\n  {'Size':>8} {'Build (ms)':>12} {'ms/insert':>12} {'Check (us)':>12}")
    print(f"  {'-'*48}")

    for n in TIMING_SIZES:
        values = rng.permutation(n).tolist()

        t0 = time.perf_counter()
        tree = OrderedTree()
        for value in values:
            tree.insert(value)
        build_ms.append((time.perf_counter() - t0) * 1000)

        runs = []
        for _ in range(5):
            t0 = time.perf_counter()
            tree.is_balanced()
            runs.append(time.perf_counter() - t0)
        check_us.append(np.median(runs) * 1e6)

        print(f"  {n:>8} {build_ms[-1]:>12.2f} {build_ms[-1] / n:>12.4f} {check_us[-1]:>12.1f}")

    sizes = np.array(TIMING_SIZES, dtype=float)
    n_log_n = sizes * np.log2(sizes)
    scale = check_us[-1] / n_log_n[-1]

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].plot(sizes, check_us, "o-", color=COLORS["blue"], linewidth=2,
                 markersize=6, label="is_balanced()")
    axes[0].plot(sizes, n_log_n * scale, "--", color=COLORS["dark"],
                 linewidth=1.5, label="c * n log n")
    axes[0].set_xlabel("Size")
    axes[0].set_ylabel("Time (us)")
    axes[0].set_title("Single Balance Check\nHeights recomputed at every node",
                      fontsize=10, fontweight="bold")
    axes[0].legend(fontsize=9)
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(sizes, np.array(build_ms) / sizes, "s-", color=COLORS["red"],
                 linewidth=2, markersize=6)
    axes[1].set_xlabel("Final size")
    axes[1].set_ylabel("Mean ms per insert")
    axes[1].set_title("Per-Insert Cost Grows With Size\nEvery insert runs a full check",
                      fontsize=10, fontweight="bold")
    axes[1].grid(True, alpha=0.3)

    plt.tight_layout()
    fig.savefig(VIZ_DIR / "03_balance_check_cost.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: {VIZ_DIR / '03_balance_check_cost.png'}")


# ---------------------------------------------------------------------------
# Example 4: Shape After Rebuild
# ---------------------------------------------------------------------------
def example_4_rebuild_shape():
    """Explicit rebuild() always lands on height floor(log2 n)."""
    print("\n" + "=" * 60)
    print("Example 4: Shape After Rebuild")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    sizes = np.arange(1, 129)
    before, after = [], []
    for n in sizes:
        tree = OrderedTree()
        for value in rng.permutation(int(n)).tolist():
            tree.insert(value)
        before.append(tree.height())
        tree.rebuild()
        after.append(tree.height())
        assert tree.size() == n
        assert tree.in_order() == list(range(int(n)))

    before = np.array(before)
    after = np.array(after)
    bound = np.floor(np.log2(sizes))
    assert np.array_equal(after, bound), "rebuild missed the minimal height"

    print(f"\n  Sizes checked: 1..{sizes[-1]}")
    print("  rebuild() height == floor(log2 n) for all sizes: YES")
    print(f"  Mean height above bound before rebuild: {np.mean(before - bound):.3f}")

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(sizes, before, color=COLORS["orange"], linewidth=1.5,
            label="height before rebuild()")
    ax.step(sizes, after, where="post", color=COLORS["green"], linewidth=2,
            label="height after rebuild()")
    ax.set_xlabel("Size")
    ax.set_ylabel("Height")
    ax.set_title("Height Before and After rebuild()\nAfter always equals floor(log2 n)",
                 fontsize=10, fontweight="bold")
    ax.legend(fontsize=9)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    fig.savefig(VIZ_DIR / "04_rebuild_shape.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: {VIZ_DIR / '04_rebuild_shape.png'}")


# ---------------------------------------------------------------------------
# PDF Report
# ---------------------------------------------------------------------------
def generate_pdf_report():
    """Bundle a title page and every visualization into report.pdf."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    report_path = Path(__file__).parent / "report.pdf"
    viz_files = sorted(VIZ_DIR.glob("*.png"))

    with PdfPages(str(report_path)) as pdf:
        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")
        ax.text(0.5, 0.78, "OrderedTree", fontsize=28, fontweight="bold",
                ha="center", va="center", transform=ax.transAxes)
        ax.text(0.5, 0.68, "A Binary Search Tree That Rebuilds Itself",
                fontsize=13, ha="center", va="center", transform=ax.transAxes, color="gray")
        info_text = (
            "After every successful insert the tree checks that, at every node,\n"
            "the left and right subtree heights differ by at most one. If not,\n"
            "it flattens itself in order and rebuilds around repeated midpoints,\n"
            "which gives height floor(log2 n).\n\n"
            "This demo covers:\n"
            "  1. Height and rebuilds while inserting an ascending run\n"
            "  2. Rebuild frequency for sorted, reversed and shuffled input\n"
            "  3. Cost of the O(n log n) balance check run on every insert\n"
            "  4. Height before and after an explicit rebuild()\n\n"
            f"Random seed: {SEED}\n"
            f"Number of visualizations: {len(viz_files)}"
        )
        ax.text(0.5, 0.30, info_text, fontsize=11, ha="center", va="center",
                transform=ax.transAxes, linespacing=1.6)
        ax.text(0.5, 0.06, "Generated by demo.py", fontsize=10, ha="center",
                va="center", transform=ax.transAxes, style="italic", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        titles = {
            "01_insertion_trace.png": "Example 1: Insertion Trace",
            "02_rebuild_frequency.png": "Example 2: Rebuild Frequency by Insertion Order",
            "03_balance_check_cost.png": "Example 3: Balance-Check Cost",
            "04_rebuild_shape.png": "Example 4: Shape After Rebuild",
        }

        for viz_file in viz_files:
            fig = plt.figure(figsize=(11, 8.5))
            title = titles.get(viz_file.name, viz_file.stem.replace("_", " ").title())
            fig.suptitle(title, fontsize=14, fontweight="bold", y=0.98)

            img = plt.imread(str(viz_file))
            ax = fig.add_axes([0.02, 0.02, 0.96, 0.92])
            ax.imshow(img)
            ax.axis("off")

            pdf.savefig(fig)
            plt.close(fig)

    print(f"  Report saved: report.pdf ({len(viz_files) + 1} pages)")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    print("OrderedTree Demo")
    print("=" * 60)
    print(f"Seed: {SEED}")
    print()

    example_1_insertion_trace()
    example_2_rebuild_frequency()
    example_3_balance_check_cost()
    example_4_rebuild_shape()
    generate_pdf_report()

    print("\n" + "=" * 60)
    print("All examples completed successfully.")
    print(f"Visualizations: {VIZ_DIR}/")
    print(f"Report: {Path(__file__).parent / 'report.pdf'}")
    print("=" * 60)


if __name__ == "__main__":
    main()
