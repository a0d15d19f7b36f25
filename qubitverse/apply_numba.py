# qubitverse/apply_numba.py
import numpy as np
from numba import config, njit, prange, set_num_threads, get_num_threads
from .state import State

# ---------- low-level kernels (Numba JIT) ----------

@njit(parallel=True, fastmath=True)
def _single_qubit_kernel(psi, U2, k):
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    nblocks = N // block
    for b in prange(nblocks):
        base = b * block
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = U2[0,0]*a0 + U2[0,1]*a1
            psi[i1] = U2[1,0]*a0 + U2[1,1]*a1

@njit(parallel=True, fastmath=True)
def _cnot_kernel(psi, control, target):
    N = psi.shape[0]
    mc = 1 << control
    mt = 1 << target
    # each pair is owned by its lower index (target bit 0), so no races
    for i in prange(N):
        if (i & mc) != 0 and (i & mt) == 0:
            j = i | mt
            a = psi[i]
            psi[i] = psi[j]
            psi[j] = a

@njit(parallel=True, fastmath=True)
def _cz_kernel(psi, control, target):
    N = psi.shape[0]
    mask = (1 << control) | (1 << target)
    for i in prange(N):
        if (i & mask) == mask:
            psi[i] = -psi[i]

@njit(parallel=True, fastmath=True)
def _swap_kernel(psi, a, b):
    N = psi.shape[0]
    ma = 1 << a
    mb = 1 << b
    for i in prange(N):
        if (i & ma) != 0 and (i & mb) == 0:
            j = i ^ ma ^ mb
            tmp = psi[i]
            psi[i] = psi[j]
            psi[j] = tmp

# ---------- user-facing apply helpers ----------

def set_threads(n: int):
    # numba refuses counts above the pool size fixed at import
    set_num_threads(max(1, min(int(n), config.NUMBA_NUM_THREADS)))

def get_threads() -> int:
    return get_num_threads()

def apply_single_qubit(state: State, U2: np.ndarray, k: int):
    _single_qubit_kernel(state.psi, np.ascontiguousarray(U2, dtype=state.dtype), k)

def apply_cnot(state: State, control: int, target: int):
    state.require_qubits(2)
    if control == target:
        raise ValueError("control and target must differ")
    _cnot_kernel(state.psi, control, target)

def apply_cz(state: State, control: int, target: int):
    state.require_qubits(2)
    if control == target:
        raise ValueError("control and target must differ")
    _cz_kernel(state.psi, control, target)

def apply_swap(state: State, a: int, b: int):
    state.require_qubits(2)
    if a == b:
        return
    _swap_kernel(state.psi, a, b)
