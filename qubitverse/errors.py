# qubitverse/errors.py


class SimulatorError(ValueError):
    """Base class for every precondition failure raised by the simulator."""


class InvalidGateKind(SimulatorError):
    pass


class InsufficientQubits(SimulatorError):
    pass


class EmptyRegister(SimulatorError):
    pass


class QubitIndexError(SimulatorError):
    pass


class ParseError(SimulatorError):
    pass


class RegisterTooLarge(SimulatorError):
    pass


class OverlappingQubits(SimulatorError):
    pass
