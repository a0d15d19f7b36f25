# qubitverse/plot_results.py
import csv, os
from collections import Counter, defaultdict
from statistics import median
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

# ------------------------- simulation results -------------------------

def basis_labels(size):
    """|00>, |01>, ... with qubit 0 as the rightmost digit."""
    width = max(1, (size - 1).bit_length())
    return [f"|{i:0{width}b}>" for i in range(size)]

def plot_probabilities(probs, out_path, title="Basis state probabilities"):
    labels = basis_labels(len(probs))
    fig, ax = plt.subplots(figsize=(max(4, 0.5 * len(probs)), 3))
    ax.bar(range(len(probs)), probs, color="#5A90E7")
    ax.set_xticks(range(len(probs)))
    ax.set_xticklabels(labels, rotation=90 if len(probs) > 8 else 0, fontfamily="monospace")
    ax.set_ylim(0, 1)
    ax.set_ylabel("Probability")
    ax.set_title(title)
    ax.grid(True, axis="y", ls="--", lw=0.5)
    fig.tight_layout()
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    return out_path

def plot_measurements(outcomes, out_path, title="Measured values"):
    """Frequency of each measured basis index across separate runs."""
    freq = Counter(int(o) for o in outcomes)
    xs = sorted(freq)
    fig, ax = plt.subplots()
    ax.bar([str(x) for x in xs], [freq[x] for x in xs], color="#5A90E7")
    ax.set_xlabel("Measured value")
    ax.set_ylabel("Frequency")
    ax.set_title(title)
    ax.grid(True, axis="y", ls="--", lw=0.5)
    fig.tight_layout()
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    return out_path

# --------------------------- benchmark CSVs ---------------------------

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        for row in csv.DictReader(f):
            row["qubits"]  = int(row["qubits"])
            row["depth"]   = int(row["depth"])
            row["threads"] = int(row["threads"])
            row["wall_ms"] = float(row["wall_ms"])
            rows.append(row)
    return rows

def median_by_key(rows, key_fields):
    buckets = defaultdict(list)
    for r in rows:
        buckets[tuple(r[k] for k in key_fields)].append(r["wall_ms"])
    agg = []
    for key, vals in buckets.items():
        out = dict(zip(key_fields, key))
        out["wall_ms"] = float(median(vals))
        agg.append(out)
    return sorted(agg, key=lambda r: tuple(r[k] for k in key_fields))

def _line_plot(series, xlabel, title, out_path, logy=False):
    fig, ax = plt.subplots()
    for label, (xs, ys) in series.items():
        ax.plot(xs, ys, marker="o", label=label)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Runtime (ms)" + (", log scale" if logy else ""))
    if logy:
        ax.set_yscale("log")
    ax.set_title(title)
    ax.grid(True, which="both", ls="--", lw=0.5)
    if len(series) > 1:
        ax.legend()
    fig.tight_layout()
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    return out_path

def plot_runtime(rows, x_field, tag, out_dir):
    series = {}
    for be in sorted({r["backend"] for r in rows}):
        pts = median_by_key([r for r in rows if r["backend"] == be], [x_field])
        series[be] = ([p[x_field] for p in pts], [p["wall_ms"] for p in pts])
    if not series:
        return None
    out = os.path.join(out_dir, f"runtime_vs_{x_field}_{tag}.png")
    return _line_plot(series, x_field.capitalize(), f"Runtime vs {x_field.capitalize()} [{tag}]", out,
                      logy=(x_field == "qubits"))

def plot_speedup_vs_threads(rows, tag, out_dir):
    pts = median_by_key(rows, ["threads"])
    t1 = next((r["wall_ms"] for r in pts if r["threads"] == 1), None)
    if not t1:
        return None
    xs = [r["threads"] for r in pts]
    ys = [t1 / r["wall_ms"] for r in pts]
    fig, ax = plt.subplots()
    ax.plot(xs, ys, marker="o")
    ax.set_xlabel("Threads")
    ax.set_ylabel("Speedup (T1/Tt)")
    ax.set_title(f"Speedup vs Threads [{tag}]")
    ax.grid(True)
    out = os.path.join(out_dir, f"speedup_vs_threads_{tag}.png")
    fig.savefig(out, dpi=200)
    plt.close(fig)
    return out

def plot_csv(path):
    """Plot one bench CSV next to itself; returns the written image paths."""
    tag = os.path.basename(os.path.dirname(path))
    kind = os.path.splitext(os.path.basename(path))[0]
    rows = load_rows(path)
    out_dir = os.path.dirname(path)
    if kind == "threads":
        written = [plot_speedup_vs_threads(rows, tag, out_dir), plot_runtime(rows, "threads", tag, out_dir)]
    elif kind == "depth":
        written = [plot_runtime(rows, "depth", tag, out_dir)]
    else:
        written = [plot_runtime(rows, "qubits", tag, out_dir)]
    return [w for w in written if w]

def main():
    csvs = []
    for root, _, files in os.walk(DATA_DIR):
        csvs.extend(os.path.join(root, f) for f in files if f.endswith(".csv"))
    if not csvs:
        print("No CSV files found under data/")
        return
    for path in sorted(csvs):
        print(f"Plotting {os.path.relpath(path, DATA_DIR)} ...")
        for out in plot_csv(path):
            print(f"  wrote {os.path.relpath(out, DATA_DIR)}")

if __name__ == "__main__":
    main()
