# qubitverse/tests/test_perf_sanity.py
import time
import numpy as np
import pytest
from qubitverse.bench import random_circuit

def test_random_circuit_is_reproducible():
    a = random_circuit(5, 6, seed=3)
    b = random_circuit(5, 6, seed=3)
    assert a.ops == b.ops
    assert len(a.ops) == 3*5 + 3*2

def test_bench_runs_and_times():
    pytest.importorskip("numba")
    c = random_circuit(12, 6, seed=1)
    c.run(backend="numba", check_norm=False)  # JIT warmup

    t0 = time.perf_counter()
    s1 = c.run(backend="serial")
    t1 = time.perf_counter() - t0

    t0 = time.perf_counter()
    s2 = c.run(backend="numba", num_threads=4)
    t2 = time.perf_counter() - t0

    assert np.allclose(s1.as_numpy(), s2.as_numpy(), atol=1e-9, rtol=0)
    assert t1 > 0 and t2 > 0
    # don't hard-assert speedup (machines vary); just ensure it isn't catastrophically slower
    assert t2 < 5.0 * t1

def test_bench_cli_writes_csv(tmp_path, monkeypatch):
    from qubitverse import bench
    monkeypatch.setattr(bench, "DATA_DIR", str(tmp_path))
    bench.main(["qubits", "--ns", "2,3", "--depth", "4", "--backend", "serial"])
    rows = (tmp_path / "serial" / "qubits.csv").read_text().splitlines()
    assert rows[0].startswith("qubits,depth,backend")
    assert len(rows) == 3
