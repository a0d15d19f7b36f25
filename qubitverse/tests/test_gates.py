# qubitverse/tests/test_gates.py
import numpy as np
import pytest
from qubitverse import gates as G
from qubitverse.errors import InvalidGateKind

def is_unitary(U, tol=1e-12):
    return np.allclose(U.conj().T @ U, np.eye(2), atol=tol, rtol=0)

@pytest.mark.parametrize("sym", sorted(G.PREDEFINED))
def test_predefined_are_unitary(sym):
    assert is_unitary(G.predefined(sym))

@pytest.mark.parametrize("sym", sorted(G.PARAMETRIC))
@pytest.mark.parametrize("theta", [0.0, 0.3, -1.7, np.pi])
def test_parametric_are_unitary(sym, theta):
    assert is_unitary(G.theta_gate(sym, theta))

def test_catalog_entries():
    r = np.sqrt(0.5)
    assert np.allclose(G.predefined("Y"), [[0, -1j], [1j, 0]])
    assert np.allclose(G.predefined("H"), [[r, r], [r, -r]])
    assert np.allclose(G.predefined("S"), np.diag([1, 1j]))
    assert np.allclose(G.predefined("T"), np.diag([1, np.exp(1j*np.pi/4)]))

def test_parametric_formulas():
    th = 0.8
    c, s = np.cos(th/2), np.sin(th/2)
    assert np.allclose(G.theta_gate("P", th), np.diag([1, np.exp(1j*th)]))
    assert np.allclose(G.theta_gate("RX", th), [[c, -1j*s], [-1j*s, c]])
    assert np.allclose(G.theta_gate("RY", th), [[c, -s], [s, c]])
    assert np.allclose(G.theta_gate("RZ", th), np.diag([np.exp(-0.5j*th), np.exp(0.5j*th)]))

def test_special_angles_match_catalog():
    assert np.allclose(G.theta_gate("P", np.pi/2), G.predefined("S"))
    assert np.allclose(G.theta_gate("P", np.pi/4), G.predefined("T"))
    assert np.allclose(G.theta_gate("P", np.pi), G.predefined("Z"))

def test_lookup_is_case_insensitive():
    assert np.array_equal(G.matrix("h"), G.matrix("H"))
    assert G.is_parametric("rz")

def test_matrices_are_read_only():
    U = G.matrix("X")
    with pytest.raises(ValueError):
        U[0, 0] = 5

def test_invalid_symbols():
    with pytest.raises(InvalidGateKind):
        G.matrix("CNOT")
    with pytest.raises(InvalidGateKind):
        G.predefined("RX")
    with pytest.raises(InvalidGateKind):
        G.theta_gate("H", 1.0)
    with pytest.raises(InvalidGateKind):
        G.matrix("P")

def test_matrix_ignores_theta_for_predefined():
    assert np.array_equal(G.matrix("X", theta=-1.0), G.predefined("X"))
