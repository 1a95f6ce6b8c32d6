# src/jnoise/prbs/sequence.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np

from jnoise.prbs.generator import PolynomialShiftRegister
from jnoise.prbs.polynomials import G15


@dataclass(frozen=True)
class Config:
    """
    Register configuration.

    poly: polynomial in register encoding (see jnoise.prbs.polynomials).
    state: initial state, or None for the all-ones reset state.
    """
    poly: int = G15
    state: Optional[int] = None


def make_register(cfg: Any) -> PolynomialShiftRegister:
    """
    Build a configured register from a Config (or any object with
    `poly` and optional `state` attributes).
    """
    reg = PolynomialShiftRegister(_get_poly(cfg))
    state = getattr(cfg, "state", None)
    if state is not None:
        reg.set_state(state)
    return reg


def word_to_bits(word: int, width: int) -> List[int]:
    """Split `word` into `width` bits, LSB first."""
    if width <= 0:
        raise ValueError("width must be positive")
    if not (0 <= word < (1 << width)):
        raise ValueError("word out of range for width")
    return [(word >> i) & 1 for i in range(width)]


def bits_to_word(bits: Sequence[int]) -> int:
    """Pack bits into an int, first bit in the LSB."""
    word = 0
    for i, b in enumerate(bits):
        if b not in (0, 1):
            raise ValueError("bits must contain only 0/1")
        word |= int(b) << i
    return word


def generate_bits(reg: PolynomialShiftRegister, n: int) -> np.ndarray:
    """Run the register for n steps and return the output bits as uint8."""
    if n < 0:
        raise ValueError("n must be >= 0")
    out = np.empty(n, dtype=np.uint8)
    for i in range(n):
        out[i] = reg.step()
    return out


def generate_word(reg: PolynomialShiftRegister, width: int) -> int:
    """Pack the next `width` output bits into an int, first bit in the LSB."""
    if width <= 0:
        raise ValueError("width must be positive")
    word = 0
    for i in range(width):
        word |= reg.step() << i
    return word


def period(reg: PolynomialShiftRegister, *, limit: Optional[int] = None) -> int:
    """
    Count steps until the register returns to its current state.

    The register is left where it started. With `limit`, give up and raise
    ValueError after that many steps (the register is then `limit` steps on).
    """
    start = reg.state
    if reg.polynomial and start == 0:
        raise ValueError("period: register is all zeros")

    n = 0
    while True:
        reg.step()
        n += 1
        if reg.state == start:
            return n
        if limit is not None and n >= limit:
            raise ValueError(f"period exceeds limit={limit}")


# ----------------------------
# Internal
# ----------------------------

def _get_poly(cfg: Any) -> int:
    poly = getattr(cfg, "poly", None)
    if poly is None:
        raise AttributeError("cfg missing required int attribute: poly")
    if not isinstance(poly, int):
        raise TypeError("cfg.poly must be int")
    return poly
