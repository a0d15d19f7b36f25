# qubitverse/apply_serial.py
import numpy as np
from .state import State

def apply_single_qubit(state: State, U2: np.ndarray, k: int):
    """Apply 2x2 gate U2 to qubit k (little-endian: bit k)."""
    psi = state.psi
    assert U2.shape == (2,2)
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    u00, u01, u10, u11 = U2[0,0], U2[0,1], U2[1,0], U2[1,1]
    # blocks of size 2^(k+1); pair (i0, i1=i0+step) inside each block
    for base in range(0, N, block):
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = u00*a0 + u01*a1
            psi[i1] = u10*a0 + u11*a1

def apply_cnot(state: State, control: int, target: int):
    state.require_qubits(2)
    if control == target:
        raise ValueError("control and target must differ")
    psi = state.psi
    mc = 1 << control
    mt = 1 << target
    for i in range(psi.shape[0]):
        if i & mc:
            j = i ^ mt
            if i < j:
                psi[i], psi[j] = psi[j], psi[i]

def apply_cz(state: State, control: int, target: int):
    state.require_qubits(2)
    if control == target:
        raise ValueError("control and target must differ")
    psi = state.psi
    mask = (1 << control) | (1 << target)
    for i in range(psi.shape[0]):
        if i & mask == mask:
            psi[i] = -psi[i]

def apply_swap(state: State, a: int, b: int):
    state.require_qubits(2)
    psi = state.psi
    ma = 1 << a
    mb = 1 << b
    for i in range(psi.shape[0]):
        # bits a and b differ
        if bool(i & ma) != bool(i & mb):
            j = i ^ ma ^ mb
            if i < j:
                psi[i], psi[j] = psi[j], psi[i]
