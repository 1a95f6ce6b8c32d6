# src/jnoise/verify/ber.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from jnoise.prbs.polynomials import G15
from jnoise.prbs.sequence import make_register

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """
    BER counter config.

    poly: polynomial of the transmitted PRBS.
    window: number of compared bits per error window.
    max_window_errors: more errors than this inside one window means the
      counter has slipped; it drops sync and re-acquires.
    """
    poly: int = G15
    window: int = 1024
    max_window_errors: int = 64


@dataclass
class BerStats:
    bits: int = 0
    errors: int = 0
    sync_bits: int = 0
    sync_losses: int = 0


class BerCounter:
    """
    Bit error rate counter for a received PRBS.

    Strategy:
      - Unsynced: shift received bits into a `degree`-bit history. Once full
        and non-zero, sync_forw() the local register onto it. An all-zero
        history (dead line) never syncs.
      - Synced: every received bit is compared with the next local step().
      - Too many errors in one window: the bits and errors of that window are
        discarded, sync is dropped and acquisition starts over.

    Bits used for acquisition are not counted in `bits`.
    """

    def __init__(self, cfg: Any = None) -> None:
        cfg = cfg if cfg is not None else Config()
        self._window, self._max_window_errors = _get_window(cfg)
        self._reg = make_register(cfg)
        self.stats = BerStats()
        self._synced = False
        self._history = 0
        self._history_len = 0
        self._window_bits = 0
        self._window_errors = 0

    def reset(self) -> None:
        self._reg.set_poly(self._reg.polynomial)
        self.stats = BerStats()
        self._drop_sync()

    @property
    def synced(self) -> bool:
        return self._synced

    @property
    def bits(self) -> int:
        return self.stats.bits

    @property
    def errors(self) -> int:
        return self.stats.errors

    @property
    def sync_losses(self) -> int:
        return self.stats.sync_losses

    @property
    def ber(self) -> float:
        if self.stats.bits == 0:
            return 0.0
        return self.stats.errors / self.stats.bits

    def feed_bits(self, bits: Sequence[int]) -> int:
        """
        Consume received bits. Returns the number of bit errors seen while
        synced during this call, including any in a window that a later sync
        loss discards from the totals.
        """
        observed = 0
        for b in bits:
            if b not in (0, 1):
                raise ValueError("bits must contain only 0/1")
            b = int(b)

            if not self._synced:
                self._acquire(b)
                continue

            err = self._reg.step() ^ b
            self.stats.bits += 1
            self.stats.errors += err
            observed += err
            self._window_bits += 1
            self._window_errors += err

            if self._window_errors > self._max_window_errors:
                self._lose_sync()
            elif self._window_bits >= self._window:
                self._window_bits = 0
                self._window_errors = 0

        return observed

    # ----------------------------
    # Internal
    # ----------------------------

    def _acquire(self, b: int) -> None:
        degree = self._reg.degree
        # newest bit enters at the top, so bit 0 holds the oldest
        self._history = (self._history >> 1) | (b << (degree - 1))
        self._history_len += 1
        self.stats.sync_bits += 1
        if self._history_len < degree:
            return
        # a maximal length sequence never holds `degree` zeros in a row
        if self._history == 0:
            return

        self._reg.sync_forw(self._history)
        self._synced = True
        self._window_bits = 0
        self._window_errors = 0
        logger.debug("BER counter synced after %d bits", self.stats.sync_bits)

    def _lose_sync(self) -> None:
        self.stats.bits -= self._window_bits
        self.stats.errors -= self._window_errors
        self.stats.sync_losses += 1
        logger.warning(
            "BER counter lost sync: %d errors in %d bits (limit %d)",
            self._window_errors,
            self._window_bits,
            self._max_window_errors,
        )
        self._drop_sync()

    def _drop_sync(self) -> None:
        self._synced = False
        self._history = 0
        self._history_len = 0
        self._window_bits = 0
        self._window_errors = 0


def _get_window(cfg: Any) -> tuple[int, int]:
    window = getattr(cfg, "window", None)
    max_errors = getattr(cfg, "max_window_errors", None)
    if not isinstance(window, int) or not isinstance(max_errors, int):
        raise TypeError("cfg.window and cfg.max_window_errors must be int")
    if window <= 0:
        raise ValueError("cfg.window must be > 0")
    if not (0 <= max_errors < window):
        raise ValueError("cfg.max_window_errors must be in [0, window)")
    return window, max_errors
