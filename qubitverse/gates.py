# qubitverse/gates.py
import numpy as np
from .errors import InvalidGateKind

# ----------------------- predefined (angle-free) -----------------------

def I(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, 1]], dtype=dtype)

def X(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, 1],
                     [1, 0]], dtype=dtype)

def Y(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, -1j],
                     [1j, 0]], dtype=dtype)

def Z(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, -1]], dtype=dtype)

def H(dtype=np.complex128) -> np.ndarray:
    s = np.sqrt(0.5)
    return np.array([[s, s],
                     [s, -s]], dtype=dtype)

def S(dtype=np.complex128) -> np.ndarray:
    # e^(i*pi/2) = i
    return np.array([[1, 0],
                     [0, 1j]], dtype=dtype)

def T(dtype=np.complex128) -> np.ndarray:
    # e^(i*pi/4) = (1 + i)/sqrt(2)
    s = np.sqrt(0.5)
    return np.array([[1, 0],
                     [0, s + 1j*s]], dtype=dtype)

# ----------------------- parametric (angle) gates -----------------------

def P(theta: float, dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, np.exp(1j*theta)]], dtype=dtype)

def RX(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = -1j*np.sin(theta/2.0)
    return np.array([[c, s],
                     [s, c]], dtype=dtype)

def RY(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = np.sin(theta/2.0)
    return np.array([[c, -s],
                     [s, c]], dtype=dtype)

def RZ(theta: float, dtype=np.complex128) -> np.ndarray:
    return np.array([[np.exp(-0.5j*theta), 0],
                     [0, np.exp(+0.5j*theta)]], dtype=dtype)

# ------------------------------- lookup -------------------------------

PREDEFINED = {"I": I, "X": X, "Y": Y, "Z": Z, "H": H, "S": S, "T": T}
PARAMETRIC = {"P": P, "RX": RX, "RY": RY, "RZ": RZ}

def _frozen(U: np.ndarray) -> np.ndarray:
    U.setflags(write=False)
    return U

def is_parametric(symbol: str) -> bool:
    key = symbol.upper()
    if key in PARAMETRIC:
        return True
    if key in PREDEFINED:
        return False
    raise InvalidGateKind(f"invalid gate selected '{symbol}'")

def predefined(symbol: str, dtype=np.complex128) -> np.ndarray:
    """Catalog lookup for an angle-free gate."""
    try:
        make = PREDEFINED[symbol.upper()]
    except KeyError:
        raise InvalidGateKind(f"'{symbol}' is not a predefined gate") from None
    return _frozen(make(dtype=dtype))

def theta_gate(symbol: str, theta: float, dtype=np.complex128) -> np.ndarray:
    """Build a parametric gate matrix for angle theta (radians)."""
    try:
        make = PARAMETRIC[symbol.upper()]
    except KeyError:
        raise InvalidGateKind(f"'{symbol}' is not a parametric gate") from None
    return _frozen(make(float(theta), dtype=dtype))

def matrix(symbol: str, theta=None, dtype=np.complex128) -> np.ndarray:
    if is_parametric(symbol):
        if theta is None:
            raise InvalidGateKind(f"gate '{symbol}' requires an angle")
        return theta_gate(symbol, theta, dtype=dtype)
    return predefined(symbol, dtype=dtype)
