# src/jnoise/prbs/crc.py
from __future__ import annotations

from typing import List, Optional, Sequence

from jnoise.prbs.generator import PolynomialShiftRegister


def crc_remainder(bits: Sequence[int], *, poly: int, init: Optional[int] = None) -> int:
    """
    Serial CRC of a bit stream using the shift register as the divider.

    Feeds each bit through crc_in(), then drains `degree` remainder bits with
    crc_out(). The result is packed LSB first (first drained bit in bit 0).

    init: starting register value; None keeps the all-ones reset state.
    """
    reg = _crc_register(poly, init)
    for b in bits:
        reg.crc_in(b)
    return _drain(reg)


def crc_check(
    bits: Sequence[int],
    remainder: int,
    *,
    poly: int,
    init: Optional[int] = None,
) -> bool:
    """
    True if `remainder` is the CRC of `bits`.

    Data followed by its own remainder divides the register down to zero.
    """
    reg = _crc_register(poly, init)
    for b in bits:
        reg.crc_in(b)
    if not (0 <= remainder <= reg.mask):
        return False
    for i in range(reg.degree):
        reg.crc_in((remainder >> i) & 1)
    return reg.state == 0


def crc_bytes(
    data: bytes,
    *,
    poly: int,
    init: Optional[int] = None,
    msb_first: bool = False,
) -> int:
    """CRC of a byte string, bits taken LSB first per byte unless msb_first."""
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("data must be bytes-like")
    return crc_remainder(_bytes_to_bits(data, msb_first=msb_first), poly=poly, init=init)


# ----------------------------
# Internal
# ----------------------------

def _crc_register(poly: int, init: Optional[int]) -> PolynomialShiftRegister:
    reg = PolynomialShiftRegister(poly)
    if init is not None:
        reg.set_state(init)
    return reg


def _drain(reg: PolynomialShiftRegister) -> int:
    word = 0
    for i in range(reg.degree):
        word |= reg.crc_out() << i
    return word


def _bytes_to_bits(data: bytes, *, msb_first: bool) -> List[int]:
    bits: List[int] = []
    for b in data:
        if msb_first:
            for i in range(7, -1, -1):
                bits.append((b >> i) & 1)
        else:
            for i in range(8):
                bits.append((b >> i) & 1)
    return bits
