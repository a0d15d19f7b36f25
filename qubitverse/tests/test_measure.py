# qubitverse/tests/test_measure.py
import numpy as np
from qubitverse.circuit import Circuit
from qubitverse.measure import measure, measure_nth
from qubitverse.state import State

class FixedRng:
    """Stands in for numpy's Generator; random() returns preset values."""
    def __init__(self, *values):
        self.values = list(values)
    def random(self):
        return self.values.pop(0)

def test_measure_collapses_to_basis_vector():
    st = Circuit.empty(3).h(0).h(1).h(2).run()
    idx = measure(st, rng=np.random.default_rng(11))
    assert 0 <= idx < 8
    expect = np.zeros(8, dtype=complex); expect[idx] = 1
    assert np.array_equal(st.as_numpy(), expect)

def test_measure_only_returns_supported_indices():
    rng = np.random.default_rng(5)
    for _ in range(50):
        st = Circuit.empty(2).h(0).cnot(0, 1).run()
        assert measure(st, rng=rng) in (0, 3)

def test_measure_inclusive_scan():
    # probabilities [0.5, 0.5]; threshold exactly 0.5 picks index 0
    st = Circuit.empty(1).h(0).run()
    assert measure(st, rng=FixedRng(0.5)) == 0
    st = Circuit.empty(1).h(0).run()
    assert measure(st, rng=FixedRng(0.1)) == 1

def test_measure_never_picks_zero_probability_head():
    # random() == 0 draws the full mass, never the empty index 0
    st = Circuit.empty(1).x(0).run()
    assert measure(st, rng=FixedRng(0.0)) == 1
    st = Circuit.empty(2).x(1).run()
    assert measure(st, rng=FixedRng(0.999999)) == 2

def test_measure_uses_unnormalized_mass():
    st = State(2, np.array([1, 1, 0, 0], dtype=complex))
    assert measure(st, rng=FixedRng(0.75)) == 0
    assert st.norm2() == 1.0

def test_measure_is_roughly_fair():
    rng = np.random.default_rng(2024)
    counts = np.zeros(2)
    for _ in range(2000):
        st = Circuit.empty(1).h(0).run()
        counts[measure(st, rng=rng)] += 1
    assert 0.45 < counts[0] / counts.sum() < 0.55

def test_measure_without_rng():
    st = Circuit.empty(2).h(1).run()
    assert measure(st) in (0, 2)

def test_measure_nth_on_bell_state():
    st = Circuit.empty(2).h(0).cnot(0, 1).run()
    bit = measure_nth(st, 0, rng=np.random.default_rng(1))
    expect = np.zeros(4); expect[3 if bit else 0] = 1
    assert np.allclose(st.as_numpy(), expect)

def test_measure_nth_renormalizes_survivors():
    st = Circuit.empty(2).h(0).h(1).run()
    bit = measure_nth(st, 1, rng=FixedRng(0.2))
    # threshold 0.8 > P(bit=0)=0.5 -> bit 1
    assert bit == 1
    r = np.sqrt(0.5)
    assert np.allclose(st.as_numpy(), [0, 0, r, r])
    assert abs(st.norm2() - 1) < 1e-12

def test_measure_nth_deterministic_qubit():
    st = Circuit.empty(3).x(2).h(0).run()
    assert measure_nth(st, 2, rng=np.random.default_rng(0)) == 1
    assert measure_nth(st, 1, rng=np.random.default_rng(0)) == 0
    assert abs(st.norm2() - 1) < 1e-12

def test_probabilities_pure():
    st = Circuit.empty(2).h(0).run()
    before = st.as_numpy().copy()
    p = st.probabilities()
    assert np.allclose(p, [0.5, 0.5, 0, 0])
    assert np.array_equal(st.as_numpy(), before)

def test_get_nth_qubit_product_state():
    st = Circuit.empty(2).h(0).x(1).run()
    r = np.sqrt(0.5)
    assert np.allclose(st.get_nth_qubit(0), [r, r])
    assert np.allclose(st.get_nth_qubit(1), [0, 1])

def test_get_nth_qubit_entangled_is_approximate():
    # Bell state: raw sums give (1/sqrt2, 1/sqrt2) for each qubit although
    # the true reduced state is mixed
    st = Circuit.empty(2).h(0).cnot(0, 1).run()
    r = np.sqrt(0.5)
    assert np.allclose(st.get_nth_qubit(0), [r, r])

def test_get_nth_qubit_zero_sum_left_unnormalized():
    st = State(1, np.array([0, 0], dtype=complex))
    assert np.array_equal(st.get_nth_qubit(0), [0, 0])
