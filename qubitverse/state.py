# qubitverse/state.py
import numpy as np
from dataclasses import dataclass
from .errors import EmptyRegister, InsufficientQubits

@dataclass
class State:
    n: int
    psi: np.ndarray  # shape (2**n,), dtype complex128/64, bit k of an index is qubit k

    @staticmethod
    def zero(n: int, dtype=np.complex128) -> "State":
        if n < 1:
            raise EmptyRegister(f"a register needs at least 1 qubit, got {n}")
        N = 1 << n
        psi = np.zeros(N, dtype=dtype)
        psi[0] = 1.0 + 0.0j
        return State(n=n, psi=psi)

    @property
    def dtype(self):
        return self.psi.dtype

    @property
    def size(self) -> int:
        return self.psi.shape[0]

    def require_qubits(self, m: int):
        if self.n < m:
            raise InsufficientQubits(f"operation needs {m} qubits, register has {self.n}")

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def check_normalized(self, tol=None):
        if tol is None:
            tol = 1e-4 if self.dtype == np.complex64 else 1e-9
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise AssertionError(f"Normalization failed: ||psi||^2={n2}")

    def probabilities(self) -> np.ndarray:
        """|psi[i]|^2 for every basis index; does not touch the register."""
        return np.abs(self.psi)**2

    def get_nth_qubit(self, k: int) -> np.ndarray:
        """
        Approximate reduced state of qubit k as a normalized 2-vector.

        Sums raw amplitudes (not probabilities) over indices whose bit k is
        0 or 1. Exact only for product states; for entangled registers the
        result is a display aid, not a partial trace.
        """
        idx = np.arange(self.size)
        bit = (idx >> k) & 1
        out = np.array([self.psi[bit == 0].sum(), self.psi[bit == 1].sum()],
                       dtype=np.complex128)
        nrm = np.linalg.norm(out)
        if nrm != 0:
            out /= nrm
        return out

    def copy(self) -> "State":
        return State(self.n, self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi
