# qubitverse/__init__.py
from .circuit import Circuit, SingleQubitGate, CNOT, CZ, Swap, MeasureQubit
from .state import State
from .measure import measure, measure_nth

__all__ = ["Circuit", "SingleQubitGate", "CNOT", "CZ", "Swap", "MeasureQubit",
           "State", "measure", "measure_nth"]
