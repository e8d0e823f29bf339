"""The time window: longitudinal slicing of the simulation across nodes."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from .textproc import take_options

_log = logging.getLogger(__name__)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class TimeWindow:
    """Position, length and sampling of the slices of a simulation.

    Without configuration the run is a steady-state run with a single slice.
    ``rank`` and ``size`` describe this node and the number of nodes the
    slices are shared out to.
    """

    def __init__(self, rank: int = 0, size: int = 1) -> None:
        self.rank = rank
        self.size = size
        self.is_time = False
        self.is_scan = False
        self.s0 = 0.0
        self.slen = 0.0
        self.ds = 1.0
        self.sample = 1
        self.nslice = 1
        self.node_nslice = 1
        self.node_offset = 0
        self.initialized = False

    def configure(self, args: Mapping[str, str], reference_length: float) -> None:
        """Apply a '&time' element and set up the slices."""
        opts = take_options(
            args, {"s0": float, "slen": float, "sample": int, "time": bool}, "&time")
        self.s0 = opts.get("s0", self.s0)
        self.slen = opts.get("slen", self.slen)
        self.sample = opts.get("sample", self.sample)
        self.is_time = opts.get("time", True)
        self.initialized = True
        self.finish_init(reference_length)

    def finish_init(self, reference_length: float) -> None:
        """Recompute the slicing for a (possibly changed) reference length.

        The number of slices is rounded up to a multiple of the node count and
        the window length adjusted to match. Does nothing before configuration.
        """
        if not self.initialized:
            return
        self.is_scan = not self.is_time
        self.ds = reference_length * self.sample
        nslice = max(_round_half_away(self.slen / self.ds), self.size)
        self.node_nslice = -(-nslice // self.size)
        self.nslice = self.node_nslice * self.size
        self.node_offset = self.node_nslice * self.rank
        self.slen = self.ds * self.nslice
        _log.info("Setting up time window of %g microns with %d sample points...",
                  self.slen * 1e6, self.nslice)

    def positions(self) -> list[float]:
        """Longitudinal position of every slice of the whole window."""
        if self.nslice < 1:
            self.nslice = 1
        return [self.s0 + i * self.ds for i in range(self.nslice)]

    def sample_rate(self) -> float:
        """Slice spacing in reference wavelengths; 1 for non time-dependent runs."""
        return float(self.sample) if self.is_time else 1.0