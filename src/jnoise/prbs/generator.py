# src/jnoise/prbs/generator.py
"""
Pseudo random binary sequence generator using polynomial division in GF(2).

There are two ways to build such a generator, both using a shift register:

1. Feed back the parity (XOR) of the taps selected by the polynomial into the
   input of the register. Cheapest in hardware.
2. When the bit shifted out is 1, XOR the register with a bit pattern
   representing the polynomial. Cheapest in software.

The two forms produce the same family of sequences. This module uses the
second one, for any polynomial up to and including degree 32. See
jnoise.prbs.polynomials for the polynomial encoding and a catalogue of
maximum length polynomials.

The same register also works as a serial CRC accumulator (crc_in/crc_out),
and can be synchronised to an external bit stream in both directions
(sync_forw/sync_back), which is what a BER counter needs.
"""

from __future__ import annotations

import logging

from jnoise.prbs.errors import InvalidPolynomial, InvalidState, UnconfiguredUse

logger = logging.getLogger(__name__)

_WORD = 0xFFFFFFFF


class PolynomialShiftRegister:
    """
    Galois-form LFSR over GF(2).

    A new register is unconfigured (all fields zero) until set_poly() is
    called, unless `poly` is passed to the constructor.
    """

    def __init__(self, poly: int | None = None) -> None:
        self._state = 0
        self._poly = 0
        self._mask = 0
        self._hbit = 0
        self._degree = 0
        if poly is not None:
            self.set_poly(poly)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(poly=0x{self._poly:08X}, "
            f"degree={self._degree}, state=0x{self._state:08X})"
        )

    # ----------------------------
    # Configuration
    # ----------------------------

    def set_poly(self, poly: int) -> None:
        """
        Define the polynomial and reset the state to all ones.

        mask becomes the smallest run of low-order ones >= poly, degree its
        number of bits.
        """
        if isinstance(poly, bool) or not isinstance(poly, int):
            raise TypeError("poly must be int")
        if poly == 0:
            raise InvalidPolynomial("poly must be non-zero")
        if not (0 < poly <= _WORD):
            raise InvalidPolynomial(f"poly must fit in 32 bits, got 0x{poly:X}")

        self._poly = poly
        self._degree = poly.bit_length()
        self._mask = (1 << self._degree) - 1
        self._state = self._mask
        self._hbit = (self._mask >> 1) + 1
        logger.debug("set_poly: poly=0x%08X degree=%d", poly, self._degree)

    def set_state(self, state: int) -> None:
        """Load the register. The value is masked to `degree` bits and must not end up zero."""
        self._require_poly()
        if isinstance(state, bool) or not isinstance(state, int):
            raise TypeError("state must be int")
        masked = state & self._mask
        if masked == 0:
            raise InvalidState(
                f"state 0x{state:X} masks to zero for a degree {self._degree} register"
            )
        self._state = masked

    # ----------------------------
    # Generation
    # ----------------------------

    def step(self) -> int:
        """Return the next pseudo random bit."""
        self._require_poly()
        bit = self._state & 1
        self._state >>= 1
        if bit:
            self._state ^= self._poly
        return bit

    def sync_forw(self, bits: int) -> None:
        """
        Put the register in the state it would have if the last `degree`
        output bits were `bits` (LSB = oldest bit).

        Use this to lock a BER counter onto a received stream, or to seed an
        emulated hardware generator whose output is taken from the feedback.
        """
        self._require_poly()
        for _ in range(self._degree):
            self._state >>= 1
            if bits & 1:
                self._state ^= self._poly
            bits >>= 1

    def sync_back(self, bits: int) -> None:
        """
        Put the register in the state from which the next `degree` output
        bits will be `bits` (LSB = first output bit).

        Use this to seed an emulated hardware generator whose output is taken
        from the shifted-out bit.
        """
        self._require_poly()
        state = 0
        h = self._hbit
        while h:
            if bits & h:
                state ^= self._poly
            state <<= 1
            h >>= 1
        state ^= bits
        self._state = state & self._mask

    # ----------------------------
    # CRC
    # ----------------------------

    def crc_in(self, b: int) -> None:
        """Divide one external data bit into the register."""
        self._require_poly()
        if b not in (0, 1):
            raise ValueError("crc_in: bit must be 0 or 1")
        bit = (self._state & 1) ^ int(b)
        self._state >>= 1
        if bit:
            self._state ^= self._poly

    def crc_out(self) -> int:
        """Shift out one remainder bit, without feedback."""
        self._require_poly()
        bit = self._state & 1
        self._state >>= 1
        return bit

    # ----------------------------
    # Accessors
    # ----------------------------

    @property
    def state(self) -> int:
        return self._state

    @property
    def polynomial(self) -> int:
        return self._poly

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def high_bit(self) -> int:
        return self._hbit

    @property
    def degree(self) -> int:
        return self._degree

    # ----------------------------
    # Internal
    # ----------------------------

    def _require_poly(self) -> None:
        if self._poly == 0:
            raise UnconfiguredUse("set_poly() must be called first")


PRBSGenerator = PolynomialShiftRegister
