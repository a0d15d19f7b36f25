# qubitverse/circuit.py
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union
import numpy as np
from .state import State
from .measure import measure_nth
from .errors import QubitIndexError, InsufficientQubits, OverlappingQubits
from . import gates as G

log = logging.getLogger(__name__)

# ----------------------------- instructions -----------------------------

@dataclass(frozen=True)
class SingleQubitGate:
    symbol: str
    qubit: int
    theta: Optional[float] = None

@dataclass(frozen=True)
class CNOT:
    control: int
    target: int

@dataclass(frozen=True)
class CZ:
    control: int
    target: int

@dataclass(frozen=True)
class Swap:
    qubit_a: int
    qubit_b: int

@dataclass(frozen=True)
class MeasureQubit:
    qubit: int

Instruction = Union[SingleQubitGate, CNOT, CZ, Swap, MeasureQubit]

def qubits_of(op: Instruction) -> Tuple[int, ...]:
    match op:
        case SingleQubitGate(qubit=k) | MeasureQubit(qubit=k):
            return (k,)
        case CNOT(control=c, target=t) | CZ(control=c, target=t):
            return (c, t)
        case Swap(qubit_a=a, qubit_b=b):
            return (a, b)
    raise TypeError(f"not an instruction: {op!r}")

def _load_backend(backend: str, num_threads=None):
    if backend == "serial":
        from . import apply_serial as ap
        return ap
    if backend == "numba":
        try:
            from . import apply_numba as ap
        except ImportError as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
        if num_threads is not None:
            ap.set_threads(int(num_threads))
        return ap
    raise NotImplementedError(f"Unknown backend: {backend}")

# ------------------------------- circuit -------------------------------

@dataclass
class Circuit:
    n: int
    ops: List[Instruction] = field(default_factory=list)

    @staticmethod
    def empty(n: int) -> "Circuit":
        return Circuit(n, [])

    def append(self, op: Instruction) -> "Circuit":
        qs = qubits_of(op)
        if len(qs) == 2 and self.n < 2:
            raise InsufficientQubits(f"{type(op).__name__} needs 2 qubits, register has {self.n}")
        for k in qs:
            if not 0 <= k < self.n:
                raise QubitIndexError(f"qubit {k} out of range for a {self.n}-qubit register")
        if isinstance(op, (CNOT, CZ)) and op.control == op.target:
            raise OverlappingQubits(f"{type(op).__name__} control and target must differ, got {op.control}")
        if isinstance(op, SingleQubitGate):
            # fail on unknown symbols / missing angles before anything runs
            G.matrix(op.symbol, op.theta)
        self.ops.append(op)
        return self

    def gate(self, symbol: str, k: int, theta=None) -> "Circuit":
        return self.append(SingleQubitGate(symbol.upper(), k, theta))

    def i(self, k:int): return self.gate("I", k)
    def x(self, k:int): return self.gate("X", k)
    def y(self, k:int): return self.gate("Y", k)
    def z(self, k:int): return self.gate("Z", k)
    def h(self, k:int): return self.gate("H", k)
    def s(self, k:int): return self.gate("S", k)
    def t(self, k:int): return self.gate("T", k)
    def p(self, k:int, theta:float): return self.gate("P", k, theta)
    def rx(self, k:int, theta:float): return self.gate("RX", k, theta)
    def ry(self, k:int, theta:float): return self.gate("RY", k, theta)
    def rz(self, k:int, theta:float): return self.gate("RZ", k, theta)
    def cnot(self, c:int, t:int): return self.append(CNOT(c, t))
    def cz(self, c:int, t:int): return self.append(CZ(c, t))
    def swap(self, a:int, b:int): return self.append(Swap(a, b))
    def measure_nth(self, k:int): return self.append(MeasureQubit(k))

    def steps(self, backend:str="serial", dtype=np.complex128, rng=None,
              num_threads=None) -> Iterator[Tuple[Instruction, State, Optional[int]]]:
        """
        Run instruction by instruction, yielding (op, state, outcome) after each.

        The same State object is yielded every time and mutated in place;
        outcome is the sampled bit for MeasureQubit and None otherwise.
        """
        ap = _load_backend(backend, num_threads)
        st = State.zero(self.n, dtype=dtype)
        for op in self.ops:
            outcome = None
            match op:
                case SingleQubitGate(symbol=sym, qubit=k, theta=theta):
                    ap.apply_single_qubit(st, G.matrix(sym, theta, dtype=st.dtype), k)
                case CNOT(control=c, target=t):
                    ap.apply_cnot(st, c, t)
                case CZ(control=c, target=t):
                    ap.apply_cz(st, c, t)
                case Swap(qubit_a=a, qubit_b=b):
                    ap.apply_swap(st, a, b)
                case MeasureQubit(qubit=k):
                    outcome = measure_nth(st, k, rng=rng)
                case _:
                    raise TypeError(f"not an instruction: {op!r}")
            log.debug("applied %s", op)
            yield op, st, outcome

    def run(self, backend:str="serial", dtype=np.complex128, check_norm=True, num_threads=None,
            check_norm_tol=None, rng=None) -> State:
        st = None
        for _, st, _ in self.steps(backend=backend, dtype=dtype, rng=rng, num_threads=num_threads):
            pass
        if st is None:
            st = State.zero(self.n, dtype=dtype)
        if check_norm:
            st.check_normalized(tol=check_norm_tol)
        return st
