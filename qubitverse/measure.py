# qubitverse/measure.py
import logging
import numpy as np
from .state import State

log = logging.getLogger(__name__)

def _draw(rng, total: float) -> float:
    # (0, total]: a zero-probability basis index can never be selected
    if rng is None:
        rng = np.random.default_rng()
    return total * (1.0 - rng.random())

def measure(state: State, rng=None) -> int:
    """
    Collapse the whole register onto one basis index and return it.

    The index is the first one whose running probability mass reaches the
    drawn threshold. Every other amplitude is set to 0, the chosen one to 1.
    """
    cum = np.cumsum(state.probabilities())
    total = float(cum[-1])
    r = _draw(rng, total)
    idx = int(np.searchsorted(cum, r, side="left"))
    idx = min(idx, state.size - 1)
    state.psi[:] = 0
    state.psi[idx] = 1.0 + 0.0j
    log.debug("measured basis index %d (mass %.6g)", idx, total)
    return idx

def measure_nth(state: State, k: int, rng=None) -> int:
    """Measure qubit k alone; survivors are renormalized to unit mass."""
    p = state.probabilities()
    bit = (np.arange(state.size) >> k) & 1
    p0 = float(p[bit == 0].sum())
    p1 = float(p[bit == 1].sum())
    r = _draw(rng, p0 + p1)
    outcome = 0 if r <= p0 else 1
    kept = p1 if outcome else p0
    state.psi[bit != outcome] = 0
    state.psi /= np.sqrt(kept)
    log.debug("measured qubit %d -> %d (p=%.6g)", k, outcome, kept)
    return outcome
