# qubitverse/notation.py
"""
Tokenizer and parser for the compact circuit notation sent by the visualizer.

A request is an optional mode digit glued to ``n:<qubits>``, followed by
records of ``key:value`` pairs terminated by ``@``::

    0n:2
    type:single
    gateType:H
    qubit:0
    theta:-1
    position:40
    @
    type:cnot
    control:0
    target:1
    @
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple
from .circuit import Circuit, SingleQubitGate, CNOT, CZ, Swap, MeasureQubit
from .errors import EmptyRegister, ParseError
from . import gates as G


class TokenType(Enum):
    IDEN = "iden"
    COLON = "colon"
    SEP = "sep"


class Token(NamedTuple):
    type: TokenType
    value: str
    pos: int


class Mode(Enum):
    CALCULATE = 0
    PROBABILITY = 1
    MEASURE = 2


@dataclass
class Program:
    mode: Mode
    n_qubits: int
    circuit: Circuit


_NUMBER_CHARS = set("0123456789-.")


def tokenize(text: str) -> List[Token]:
    toks: List[Token] = []
    i, n = 0, len(text)
    while i < n:
        c = text[i]
        if c == "@":
            toks.append(Token(TokenType.SEP, c, i))
            i += 1
        elif c == ":":
            toks.append(Token(TokenType.COLON, c, i))
            i += 1
        elif c.isspace():
            i += 1
        elif c.isalpha():
            j = i + 1
            while j < n and (text[j].isalnum() or text[j] == "_"):
                j += 1
            toks.append(Token(TokenType.IDEN, text[i:j], i))
            i = j
        elif c in _NUMBER_CHARS:
            j = i + 1
            while j < n and text[j] in _NUMBER_CHARS:
                j += 1
            toks.append(Token(TokenType.IDEN, text[i:j], i))
            i = j
        else:
            raise ParseError(f"unexpected character {c!r} at offset {i}")
    return toks


def _int(value: str, key: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"'{key}' expects an integer, got {value!r}") from None


def _float(value: str, key: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ParseError(f"'{key}' expects a number, got {value!r}") from None


def _field(rec: Dict[str, str], *keys: str) -> str:
    for k in keys:
        if k in rec:
            return rec[k]
    raise ParseError(f"record of type '{rec.get('type')}' is missing '{keys[0]}'")


def _instruction(rec: Dict[str, str]):
    kind = rec.get("type")
    if kind is None:
        raise ParseError("record without a 'type'")
    kind = kind.lower()
    if kind == "single":
        symbol = _field(rec, "gateType")
        qubit = _int(_field(rec, "qubit"), "qubit")
        theta = None
        if G.is_parametric(symbol):
            theta = _float(_field(rec, "theta"), "theta")
        return SingleQubitGate(symbol.upper(), qubit, theta)
    if kind == "cnot":
        return CNOT(_int(_field(rec, "control"), "control"), _int(_field(rec, "target"), "target"))
    if kind == "cz":
        return CZ(_int(_field(rec, "control"), "control"), _int(_field(rec, "target"), "target"))
    if kind == "swap":
        return Swap(_int(_field(rec, "qubitA", "qubit1"), "qubitA"),
                    _int(_field(rec, "qubitB", "qubit2"), "qubitB"))
    if kind == "measurenth":
        return MeasureQubit(_int(_field(rec, "qubit"), "qubit"))
    raise ParseError(f"unknown record type '{kind}'")


def _records(toks: List[Token], i: int) -> List[Dict[str, str]]:
    records = []
    rec: Dict[str, str] = {}
    while i < len(toks):
        tok = toks[i]
        if tok.type is TokenType.SEP:
            if rec:
                records.append(rec)
            rec = {}
            i += 1
            continue
        if (tok.type is not TokenType.IDEN or i + 2 >= len(toks)
                or toks[i + 1].type is not TokenType.COLON or toks[i + 2].type is not TokenType.IDEN):
            raise ParseError(f"expected 'key:value' at offset {tok.pos}")
        rec[tok.value] = toks[i + 2].value
        i += 3
    if rec:
        records.append(rec)
    return records


def parse(text: str) -> Program:
    toks = tokenize(text)
    i = 0
    mode = Mode.CALCULATE
    if len(toks) > 1 and toks[0].value.isdigit() and toks[1].value == "n":
        try:
            mode = Mode(int(toks[0].value))
        except ValueError:
            raise ParseError(f"unknown mode flag {toks[0].value!r}") from None
        i = 1
    if (len(toks) < i + 3 or toks[i].value != "n"
            or toks[i + 1].type is not TokenType.COLON):
        raise ParseError("circuit must start with 'n:<qubits>'")
    n_qubits = _int(toks[i + 2].value, "n")
    if n_qubits < 1:
        raise EmptyRegister(f"a register needs at least 1 qubit, got {n_qubits}")
    circuit = Circuit.empty(n_qubits)
    for rec in _records(toks, i + 3):
        circuit.append(_instruction(rec))
    return Program(mode, n_qubits, circuit)
