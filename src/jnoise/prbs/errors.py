# src/jnoise/prbs/errors.py
from __future__ import annotations


class PRBSError(Exception):
    """Base class for shift register contract violations."""


class InvalidPolynomial(PRBSError, ValueError):
    """Polynomial is zero, wider than 32 bits, or not in the catalogue."""


class UnconfiguredUse(PRBSError, RuntimeError):
    """Register used before a polynomial was set."""


class InvalidState(PRBSError, ValueError):
    """State would be all zeros, which the register can never leave."""
