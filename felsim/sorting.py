"""Re-sorting of macro particles into the slices their phase belongs to."""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from .quietloading import Particle

_log = logging.getLogger(__name__)

Slices = list[list[Particle]]


def _swap_remove(particles: list[Particle], index: int) -> None:
    """Remove ``particles[index]`` by moving the last particle into its place."""
    last = particles.pop()
    if index < len(particles):
        particles[index] = last


class Sorting:
    """Moves particles between slices when their phase left the slice.

    Positions are measured as ``s0 + slen * i + theta`` for a particle in
    slice ``i``. Particles outside ``keepmin..keepmax`` leave the beam;
    those below ``sendmin`` or above ``sendmax`` are handed back from
    :meth:`global_sort` as leaving backward or forward.
    """

    def __init__(self, dosort: bool = False, doshift: bool = False) -> None:
        self.dosort = dosort
        self.doshift = doshift
        self.s0 = 0.0
        self.slen = 1.0
        self.sendmin = -math.inf
        self.sendmax = math.inf
        self.keepmin = -math.inf
        self.keepmax = math.inf
        self.globalframe = False

    def configure(self, s0: float, slen: float, sendmin: float, sendmax: float,
                  keepmin: float, keepmax: float, globalframe: bool) -> None:
        """Set the slice geometry and the limits of the kept window."""
        if slen <= 0:
            raise ValueError(f"slice length must be positive, got {slen}")
        self.s0 = s0
        self.slen = slen
        self.sendmin = sendmin
        self.sendmax = sendmax
        self.keepmin = keepmin
        self.keepmax = keepmax
        self.globalframe = globalframe

    def sort(self, slices: Slices) -> int:
        """Sort the beam in place and return the slice shift applied (always 0).

        Does nothing unless sorting was enabled.
        """
        if not self.dosort:
            _log.warning("Sorting only enabled for one-2-one simulations")
            return 0
        _log.info("Sorting...")
        self.global_sort(slices)
        self.local_sort(slices)
        return 0

    def global_sort(self, slices: Slices) -> tuple[list[Particle], list[Particle]]:
        """Drop particles outside the kept window.

        Returns the particles that leave backward and forward, their phase
        given relative to the last respectively first slice of the adjacent
        window (unchanged in a global frame). A single window has no
        neighbours, so these particles are lost to the beam.
        """
        _log.info("Global Sorting: Slicelength: %g - Send backwards for theta < %g"
                  " - Send forward for theta > %g", self.slen, self.sendmin, self.sendmax)
        shift = 0.0 if self.globalframe else self.slen
        nsize = len(slices)
        backward: list[Particle] = []
        forward: list[Particle] = []
        removed = 0

        for i, particles in enumerate(slices):
            base = self.s0 + self.slen * i
            for p in particles:
                s = base + p.theta
                if s < self.sendmin:
                    backward.append(replace(p, theta=p.theta + (i + 1) * shift))
                if s > self.sendmax:
                    forward.append(replace(p, theta=p.theta - (nsize - i) * shift))
            j = 0
            while j < len(particles):
                s = base + particles[j].theta
                if s < self.keepmin or s > self.keepmax:
                    removed += 1
                    _swap_remove(particles, j)
                else:
                    j += 1

        if removed != len(forward) + len(backward):
            _log.warning("Non-matching particle transfer: deleted %d, forward %d, backward %d",
                         removed, len(forward), len(backward))
        return backward, forward

    def local_sort(self, slices: Slices) -> None:
        """Move every particle into the slice its phase falls in.

        Raises IndexError if a particle's target slice lies outside the beam.
        """
        inverse = 1.0 / self.slen
        for a, particles in enumerate(slices):
            b = 0
            while b < len(particles):
                p = particles[b]
                target = math.floor(p.theta * inverse)
                if target == 0:
                    b += 1
                    continue
                dest = a + target
                if not 0 <= dest < len(slices):
                    raise IndexError(
                        f"particle in slice {a} belongs to slice {dest} outside the beam")
                slices[dest].append(replace(p, theta=p.theta - self.slen * target))
                _swap_remove(particles, b)