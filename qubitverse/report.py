# qubitverse/report.py
import logging
from typing import List, Optional, Tuple
import numpy as np
from .circuit import Instruction, SingleQubitGate, CNOT, CZ, Swap, MeasureQubit
from .errors import RegisterTooLarge
from .measure import measure
from .notation import Mode, Program, parse
from .state import State

log = logging.getLogger(__name__)

def _num(x: float) -> str:
    # adding 0.0 folds -0.0 into 0.0
    return f"{x + 0.0:g}"

def format_amplitudes(psi: np.ndarray) -> List[str]:
    """One ``i=(re,im)`` line per basis index."""
    return [f"{i}=({_num(z.real)},{_num(z.imag)})" for i, z in enumerate(psi)]

def format_probabilities(probs: np.ndarray) -> List[str]:
    return [f"{i}={_num(p)}" for i, p in enumerate(probs)]

def step_label(op: Instruction) -> str:
    match op:
        case SingleQubitGate(symbol=sym):
            return sym.lower()
        case CNOT():
            return "cnot"
        case CZ():
            return "cz"
        case Swap():
            return "swap"
        case MeasureQubit():
            return "measureNth"
    raise TypeError(f"not an instruction: {op!r}")

def check_size(prog: Program, max_qubits: Optional[int]):
    if max_qubits is not None and prog.n_qubits > max_qubits:
        raise RegisterTooLarge(f"{prog.n_qubits} qubits requested, limit is {max_qubits}")

def render(prog: Program, backend: str = "serial", rng=None, num_threads=None) -> Tuple[str, State]:
    """
    Run a parsed program and build its report.

    Layout (one item per line): ``+`` and the initial amplitudes, then for
    each instruction its label and the amplitudes after it. Probability
    mode appends ``prob`` with ``i=p`` lines; measure mode appends the same
    block followed by ``measure`` and the sampled basis index, after which
    the returned state is collapsed.
    """
    log.info("running %d instruction(s) on %d qubit(s), mode=%s",
             len(prog.circuit.ops), prog.n_qubits, prog.mode.name.lower())
    # initial block is |0...0>
    lines = ["+", "0=(1,0)"]
    lines.extend(f"{i}=(0,0)" for i in range(1, 1 << prog.n_qubits))
    st = None
    for op, st, _ in prog.circuit.steps(backend=backend, rng=rng, num_threads=num_threads):
        lines.append(step_label(op))
        lines.extend(format_amplitudes(st.as_numpy()))
    if st is None:
        st = State.zero(prog.n_qubits)

    if prog.mode in (Mode.PROBABILITY, Mode.MEASURE):
        lines.append("prob")
        lines.extend(format_probabilities(st.probabilities()))
    if prog.mode is Mode.MEASURE:
        lines.append("measure")
        lines.append(str(measure(st, rng=rng)))
    return "\n".join(lines) + "\n", st

def simulate(text: str, backend: str = "serial", max_qubits: Optional[int] = None,
             rng=None, num_threads=None) -> str:
    """Parse a circuit request, run it and return the plain-text report."""
    prog = parse(text)
    check_size(prog, max_qubits)
    report, _ = render(prog, backend=backend, rng=rng, num_threads=num_threads)
    return report
