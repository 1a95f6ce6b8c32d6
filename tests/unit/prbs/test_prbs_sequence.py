from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pytest

from jnoise.prbs.errors import InvalidState, UnconfiguredUse
from jnoise.prbs.generator import PolynomialShiftRegister
from jnoise.prbs.polynomials import G7, G15, G16
from jnoise.prbs.sequence import (
    Config,
    bits_to_word,
    generate_bits,
    generate_word,
    make_register,
    period,
    word_to_bits,
)


def test_word_bits_lsb_first():
    assert word_to_bits(0b1101, 4) == [1, 0, 1, 1]
    assert bits_to_word([1, 0, 1, 1]) == 0b1101
    assert bits_to_word([]) == 0


def test_word_to_bits_validation():
    with pytest.raises(ValueError):
        word_to_bits(1, 0)
    with pytest.raises(ValueError):
        word_to_bits(0x100, 8)


def test_bits_to_word_rejects_non_bits():
    with pytest.raises(ValueError):
        bits_to_word([0, 2, 1])


def test_generate_bits_matches_step():
    a = PolynomialShiftRegister(G15)
    b = PolynomialShiftRegister(G15)
    out = generate_bits(a, 300)
    assert out.dtype == np.uint8
    assert out.shape == (300,)
    assert out.tolist() == [b.step() for _ in range(300)]
    assert a.state == b.state


def test_generate_bits_empty_and_negative():
    reg = PolynomialShiftRegister(G7)
    assert generate_bits(reg, 0).size == 0
    assert reg.state == reg.mask
    with pytest.raises(ValueError):
        generate_bits(reg, -1)


def test_generate_word_packs_lsb_first():
    a = PolynomialShiftRegister(G16)
    b = PolynomialShiftRegister(G16)
    word = generate_word(a, 16)
    assert word_to_bits(word, 16) == [b.step() for _ in range(16)]


def test_generate_word_after_sync_back():
    reg = PolynomialShiftRegister(G16)
    reg.sync_back(0xC0DE)
    assert generate_word(reg, 16) == 0xC0DE


def test_period_restores_state():
    reg = PolynomialShiftRegister(G7)
    reg.set_state(0x2A)
    assert period(reg) == 127
    assert reg.state == 0x2A


def test_period_limit():
    reg = PolynomialShiftRegister(G16)
    with pytest.raises(ValueError):
        period(reg, limit=1000)


def test_period_unconfigured():
    with pytest.raises(UnconfiguredUse):
        period(PolynomialShiftRegister())


def test_period_zero_state():
    reg = PolynomialShiftRegister(G7)
    reg.sync_back(0)
    with pytest.raises(ValueError):
        period(reg)


def test_make_register_defaults():
    reg = make_register(Config())
    assert reg.polynomial == G15
    assert reg.state == reg.mask


def test_make_register_with_state():
    reg = make_register(Config(poly=G16, state=0x1234))
    assert reg.polynomial == G16
    assert reg.state == 0x1234


def test_make_register_zero_state_rejected():
    with pytest.raises(InvalidState):
        make_register(Config(poly=G7, state=0x80))


def test_make_register_duck_typed_cfg():
    @dataclass(frozen=True)
    class OtherCfg:
        poly: int = G7

    assert make_register(OtherCfg()).degree == 7


def test_make_register_cfg_validation():
    with pytest.raises(AttributeError):
        make_register(object())
    with pytest.raises(TypeError):
        make_register(Config(poly="G7"))
