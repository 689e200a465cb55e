"""
Hash Table Demo -- Bucket occupancy, resize epochs, and load factor threshold sweep.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
from hash_table import HashTable, hash_with_capacity

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


def random_keys(n, length=8, seed=SEED):
    """Distinct lowercase keys drawn from a seeded generator."""
    rng = np.random.RandomState(seed)
    keys = []
    seen = set()
    while len(keys) < n:
        key = "".join(chr(c) for c in rng.randint(ord("a"), ord("z") + 1, size=length))
        if key not in seen:
            seen.add(key)
            keys.append(key)
    return keys


def poisson_pmf(lam, max_k):
    k = np.arange(max_k + 1)
    factorials = np.concatenate([[1.0], np.cumprod(np.arange(1, max_k + 1, dtype=float))])
    return np.exp(-lam) * lam ** k / factorials


# ---------------------------------------------------------------------------
# Example 1: Bucket Occupancy vs Uniform Hashing
# ---------------------------------------------------------------------------
def example_1_bucket_occupancy():
    """Compare chain lengths against the Poisson model of ideal hashing."""
    print("=" * 60)
    print("Example 1: Bucket Occupancy")
    print("=" * 60)

    table = HashTable(initial_capacity=1024, load_factor=1e9)
    for key in random_keys(1024):
        table.set(key, None)

    sizes = np.array(table.bucket_sizes())
    lam = table.load_factor()
    max_k = int(sizes.max())
    observed = np.bincount(sizes, minlength=max_k + 1) / len(sizes)
    expected = poisson_pmf(lam, max_k)

    print(f"\n  Capacity: {table.capacity()}, entries: {table.length()}, load: {lam:.2f}")
    print(f"  Empty buckets: {np.mean(sizes == 0):.1%} (Poisson: {expected[0]:.1%})")
    print(f"  Longest chain: {max_k}")
    print(f"  Chain length std: {sizes.std():.3f} (Poisson: {np.sqrt(lam):.3f})")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    k = np.arange(max_k + 1)
    axes[0].bar(k - 0.2, observed, 0.4, label="Observed", color=COLORS["blue"], edgecolor="white")
    axes[0].bar(k + 0.2, expected, 0.4, label="Poisson", color=COLORS["orange"], edgecolor="white")
    axes[0].set_xlabel("Chain length")
    axes[0].set_ylabel("Fraction of buckets")
    axes[0].set_title("Chain Length Distribution", fontsize=10, fontweight="bold")
    axes[0].legend(fontsize=9)
    axes[0].grid(True, alpha=0.3, axis="y")

    axes[1].plot(sizes, color=COLORS["dark"], linewidth=0.6)
    axes[1].axhline(lam, color=COLORS["red"], linestyle="--", label=f"Mean = {lam:.2f}")
    axes[1].set_xlabel("Bucket index")
    axes[1].set_ylabel("Chain length")
    axes[1].set_title("Chain Length per Bucket", fontsize=10, fontweight="bold")
    axes[1].legend(fontsize=9)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_bucket_occupancy.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/01_bucket_occupancy.png")
    return fig, sizes


# ---------------------------------------------------------------------------
# Example 2: Resize Epochs
# ---------------------------------------------------------------------------
def example_2_resize_epochs():
    """Track capacity and load factor through successive doublings."""
    print("\n" + "=" * 60)
    print("Example 2: Resize Epochs")
    print("=" * 60)

    table = HashTable()
    keys = random_keys(2000)
    capacities = np.empty(len(keys), dtype=int)
    loads = np.empty(len(keys))
    for i, key in enumerate(keys):
        table.set(key, i)
        capacities[i] = table.capacity()
        loads[i] = table.load_factor()

    resize_points = np.flatnonzero(np.diff(capacities)) + 1
    print(f"\n  {'Insert #':>10} {'Capacity':>10}")
    print(f"  {'-'*22}")
    for idx in resize_points:
        print(f"  {idx + 1:>10} {capacities[idx]:>10}")

    # a key's bucket moves when a doubling exposes a new high bit of its hash
    moved = np.mean([
        hash_with_capacity(key, 2048) != hash_with_capacity(key, 4096) for key in keys
    ])
    print(f"\n  Keys whose bucket changes from 2048 to 4096 buckets: {moved:.1%}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    n = np.arange(1, len(keys) + 1)
    axes[0].step(n, capacities, where="post", color=COLORS["purple"])
    axes[0].set_yscale("log", base=2)
    axes[0].set_xlabel("Entries inserted")
    axes[0].set_ylabel("Capacity")
    axes[0].set_title("Capacity Doubles When Load Exceeds Threshold", fontsize=10, fontweight="bold")
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(n, loads, color=COLORS["green"], linewidth=1)
    axes[1].axhline(table.load_factor_threshold(), color=COLORS["red"], linestyle="--",
                    label="Threshold")
    axes[1].set_xlabel("Entries inserted")
    axes[1].set_ylabel("Load factor")
    axes[1].set_title("Load Factor Sawtooth", fontsize=10, fontweight="bold")
    axes[1].legend(fontsize=9)
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_resize_epochs.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/02_resize_epochs.png")
    return fig, resize_points


# ---------------------------------------------------------------------------
# Example 3: Threshold Sweep
# ---------------------------------------------------------------------------
def example_3_threshold_sweep():
    """Trade memory (buckets) against chain length across thresholds."""
    print("\n" + "=" * 60)
    print("Example 3: Load Factor Threshold Sweep")
    print("=" * 60)

    thresholds = [0.25, 0.5, 0.75, 1.0, 2.0, 4.0]
    keys = random_keys(5000)
    final_capacity = []
    mean_probe = []
    max_chain = []

    print(f"\n  {'Threshold':>10} {'Capacity':>10} {'Mean probe':>12} {'Max chain':>10}")
    print(f"  {'-'*46}")
    for threshold in thresholds:
        table = HashTable(load_factor=threshold)
        for key in keys:
            table.set(key, None)
        sizes = np.array(table.bucket_sizes())
        # a successful lookup scans on average (len + 1) / 2 pairs of its chain
        probe = np.sum(sizes * (sizes + 1) / 2) / table.length()
        final_capacity.append(table.capacity())
        mean_probe.append(probe)
        max_chain.append(int(sizes.max()))
        print(f"  {threshold:>10.2f} {table.capacity():>10} {probe:>12.3f} {sizes.max():>10}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    x = np.arange(len(thresholds))

    axes[0].bar(x, final_capacity, color=COLORS["blue"], edgecolor="white")
    axes[0].set_xticks(x)
    axes[0].set_xticklabels([str(t) for t in thresholds])
    axes[0].set_xlabel("Load factor threshold")
    axes[0].set_ylabel("Final capacity")
    axes[0].set_title(f"Buckets for {len(keys)} Entries", fontsize=10, fontweight="bold")
    axes[0].grid(True, alpha=0.3, axis="y")

    axes[1].plot(thresholds, mean_probe, "o-", color=COLORS["green"], label="Mean probe")
    axes[1].plot(thresholds, max_chain, "s--", color=COLORS["red"], label="Max chain")
    axes[1].set_xlabel("Load factor threshold")
    axes[1].set_ylabel("Pairs scanned")
    axes[1].set_title("Lookup Cost vs Threshold", fontsize=10, fontweight="bold")
    axes[1].legend(fontsize=9)
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_threshold_sweep.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/03_threshold_sweep.png")
    return fig, mean_probe


def generate_pdf_report(figures_data):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "Hash Table", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "Separate Chaining with Capacity Doubling", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration & Analysis Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        for title, fig in figures_data:
            fig.suptitle(title, fontsize=14, fontweight="bold", y=1.02)
            pdf.savefig(fig, bbox_inches="tight")

    print(f"\n  Saved: {pdf_path.name}")


def main():
    print("\n" + "#" * 60)
    print("#" + " " * 22 + "HASH TABLE DEMO" + " " * 21 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    figures = []

    fig1, _ = example_1_bucket_occupancy()
    figures.append(("Example 1: Bucket Occupancy", fig1))

    fig2, _ = example_2_resize_epochs()
    figures.append(("Example 2: Resize Epochs", fig2))

    fig3, _ = example_3_threshold_sweep()
    figures.append(("Example 3: Threshold Sweep", fig3))

    generate_pdf_report(figures)

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print(f"  - report.pdf")


if __name__ == "__main__":
    main()
