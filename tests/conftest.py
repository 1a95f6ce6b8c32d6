from __future__ import annotations

from typing import List

from jnoise.prbs.generator import PolynomialShiftRegister


def step_columns(poly: int) -> List[int]:
    """
    One step() of the register is linear over GF(2). Return its matrix as a
    list of columns: column i is the state reached from state 1 << i.
    """
    reg = PolynomialShiftRegister(poly)
    cols: List[int] = []
    for i in range(reg.degree):
        reg.set_state(1 << i)
        reg.step()
        cols.append(reg.state)
    return cols


def apply_columns(cols: List[int], v: int) -> int:
    out = 0
    i = 0
    while v:
        if v & 1:
            out ^= cols[i]
        v >>= 1
        i += 1
    return out


def power_columns(cols: List[int], n: int) -> List[int]:
    """Matrix of n consecutive steps, by square-and-multiply."""
    result = [1 << i for i in range(len(cols))]
    base = list(cols)
    while n:
        if n & 1:
            result = [apply_columns(base, c) for c in result]
        base = [apply_columns(base, c) for c in base]
        n >>= 1
    return result


def state_after(poly: int, state: int, n: int) -> int:
    """State of a register with `poly` after n steps from `state`, without stepping n times."""
    return apply_columns(power_columns(step_columns(poly), n), state)


def prime_factors(n: int) -> List[int]:
    out: List[int] = []
    p = 2
    while p * p <= n:
        if n % p == 0:
            out.append(p)
            while n % p == 0:
                n //= p
        p += 1
    if n > 1:
        out.append(n)
    return out
