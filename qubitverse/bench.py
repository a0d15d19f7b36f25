# qubitverse/bench.py
import argparse, csv, os, socket, subprocess, time, platform
from datetime import datetime
import numpy as np
from .circuit import Circuit

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

HEADER = ["qubits","depth","backend","threads","gates","wall_ms","hostname","commit","dtype","timestamp"]

def backend_dir(backend):
    path = os.path.join(DATA_DIR, backend)
    os.makedirs(path, exist_ok=True)
    return path

def meta_row(dtype):
    commit = ""
    try:
        commit = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                         stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        pass
    return {
        "hostname": socket.gethostname(),
        "commit": commit,
        "dtype": np.dtype(dtype).name,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "python": platform.python_version(),
    }

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER, extrasaction="ignore").writerow(row)

# ---------------------------------------------------------------------

def random_circuit(n, depth, seed=0):
    """Alternating layers: random 1q gates on every qubit, then 2q gates on neighbour pairs."""
    rng = np.random.default_rng(seed)
    c = Circuit.empty(n)
    singles = ["H", "X", "Y", "Z", "S", "T"]
    for layer in range(depth):
        if layer % 2 == 0 or n < 2:
            for k in range(n):
                g = int(rng.integers(0, len(singles) + 1))
                if g == len(singles):
                    c.rx(k, float(rng.uniform(-np.pi, np.pi)))
                else:
                    c.gate(singles[g], k)
        else:
            for k in range(0, n-1, 2):
                g = int(rng.integers(0, 3))
                if g == 0:
                    c.cnot(k, k+1)
                elif g == 1:
                    c.cz(k+1, k)
                else:
                    c.swap(k, k+1)
    return c

def time_run(circ, backend, dtype=np.complex128, threads=None):
    t0 = time.perf_counter()
    circ.run(backend=backend, dtype=dtype, num_threads=threads, check_norm=False)
    return (time.perf_counter() - t0) * 1e3  # ms

def warmup(backend, dtype=np.complex128):
    # compile numba kernels outside the timed region
    time_run(random_circuit(2, 2), backend, dtype)

def numba_max_threads():
    try:
        from numba import config
        return int(config.NUMBA_NUM_THREADS)
    except ImportError:
        return os.cpu_count() or 1

# ---------------------------------------------------------------------
# experiments

def bench_qubits(ns, depth, backend, out_path, dtype=np.complex128):
    print(f"[run] Qubits scaling → {out_path}")
    new_csv(out_path)
    warmup(backend, dtype)
    threads = 0 if backend == "serial" else numba_max_threads()
    for n in ns:
        circ = random_circuit(n, depth, seed=42)
        wall = time_run(circ, backend, dtype)
        write_row(out_path, {"qubits": n, "depth": depth, "backend": backend, "threads": threads,
                             "gates": len(circ.ops), "wall_ms": f"{wall:.3f}", **meta_row(dtype)})
        print(f"  n={n}  wall={wall:.2f} ms")
    print("✓ done.\n")

def bench_depth(n, depths, backend, out_path, dtype=np.complex128):
    print(f"[run] Depth scaling → {out_path}")
    new_csv(out_path)
    warmup(backend, dtype)
    threads = 0 if backend == "serial" else numba_max_threads()
    for d in depths:
        circ = random_circuit(n, d, seed=7)
        wall = time_run(circ, backend, dtype)
        write_row(out_path, {"qubits": n, "depth": d, "backend": backend, "threads": threads,
                             "gates": len(circ.ops), "wall_ms": f"{wall:.3f}", **meta_row(dtype)})
        print(f"  depth={d}  wall={wall:.2f} ms")
    print("✓ done.\n")

def bench_threads(n, depth, threads_list, out_path, dtype=np.complex128):
    print(f"[run] Thread scaling → {out_path}")
    new_csv(out_path)
    warmup("numba", dtype)
    circ = random_circuit(n, depth, seed=123)
    pool = numba_max_threads()
    t1 = time_run(circ, "numba", dtype, threads=1)
    print(f"  pool={pool}  T1={t1:.1f} ms")
    for t in threads_list:
        tt = min(int(t), pool)
        if tt != t:
            print(f"  requested t={t} > pool={pool}; using t={tt}")
        wall = time_run(circ, "numba", dtype, threads=tt)
        write_row(out_path, {"qubits": n, "depth": depth, "backend": "numba", "threads": tt,
                             "gates": len(circ.ops), "wall_ms": f"{wall:.3f}", **meta_row(dtype)})
        print(f"  t={tt}  wall={wall:.2f} ms  speedup={t1 / wall if wall > 0 else float('nan'):.2f}×")
    print("✓ done.\n")

# ---------------------------------------------------------------------
def main(argv=None):
    p = argparse.ArgumentParser(description="qubitverse benchmarks → data/<backend>/*.csv")
    p.add_argument("--dtype", type=str, default="complex128", choices=["complex64","complex128"])
    sub = p.add_subparsers(dest="cmd", required=True)

    p_qubits = sub.add_parser("qubits")
    p_qubits.add_argument("--ns", type=str, required=True)
    p_qubits.add_argument("--depth", type=int, default=100)
    p_qubits.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])

    p_threads = sub.add_parser("threads")
    p_threads.add_argument("--n", type=int, default=16)
    p_threads.add_argument("--depth", type=int, default=200)
    p_threads.add_argument("--threads", type=str, default="1,2,4,8,16")

    p_depth = sub.add_parser("depth")
    p_depth.add_argument("--n", type=int, default=12)
    p_depth.add_argument("--depths", type=str, default="10,50,100,300,600")
    p_depth.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])

    args = p.parse_args(argv)
    dtype = np.dtype(args.dtype)

    if args.cmd == "qubits":
        ns = [int(x) for x in args.ns.split(",")]
        bench_qubits(ns, args.depth, args.backend, os.path.join(backend_dir(args.backend), "qubits.csv"), dtype)
    elif args.cmd == "threads":
        ts = [int(x) for x in args.threads.split(",")]
        bench_threads(args.n, args.depth, ts, os.path.join(backend_dir("numba"), "threads.csv"), dtype)
    elif args.cmd == "depth":
        ds = [int(x) for x in args.depths.split(",")]
        bench_depth(args.n, ds, args.backend, os.path.join(backend_dir(args.backend), "depth.csv"), dtype)

if __name__ == "__main__":
    main()
