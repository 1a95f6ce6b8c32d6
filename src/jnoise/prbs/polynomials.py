# src/jnoise/prbs/polynomials.py
"""
Polynomials for maximum length sequences, in the register's encoding.

The value is read from the coefficients (0 or 1) of the polynomial starting
with the constant term and dropping the highest one:

                              0 1 2 3 4 5 6 7
    P = x^7 + x^6 + 1   -->   1 0 0 0 0 0 1 1   -->   1000001   -->   0x41

To emulate a hardware (parity feedback) generator instead, start with the
highest exponent and drop the constant term:

                              7 6 5 4 3 2 1 0
    P = x^7 + x^6 + 1   -->   1 1 0 0 0 0 0 1   -->   1100000   -->   0x60

Both encodings are plain ints; the register cannot tell them apart.
"""

from __future__ import annotations

from typing import Dict

from jnoise.prbs.errors import InvalidPolynomial

G7 = 0x00000041
G8 = 0x0000008E
G15 = 0x00004001
G16 = 0x00008016
G23 = 0x00400010
G24 = 0x0080000D
G31 = 0x40000004
G32 = 0x80000057

POLYNOMIALS: Dict[int, int] = {
    7: G7,
    8: G8,
    15: G15,
    16: G16,
    23: G23,
    24: G24,
    31: G31,
    32: G32,
}


def poly_for_degree(degree: int) -> int:
    """Catalogue polynomial for a register of `degree` bits."""
    try:
        return POLYNOMIALS[degree]
    except KeyError:
        raise InvalidPolynomial(
            f"no catalogued polynomial of degree {degree}; "
            f"available: {sorted(POLYNOMIALS)}"
        ) from None
