"""Shot-noise perturbation of quietly loaded beamlets."""

from __future__ import annotations

import math
from collections.abc import Sequence as SequenceABC

import numpy as np

from .quietloading import Particle
from .sequences import RandomU


def _seed_for_rank(seed: int, rank: int) -> int:
    generator = RandomU(seed)
    value = 0.0
    for _ in range(rank + 1):
        value = generator.get_element()
    scaled = value * 1e9
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


class ShotNoise:
    """Adds the statistical bunching of a finite number of electrons."""

    def __init__(self, seed: int, rank: int = 0) -> None:
        self._random = RandomU(_seed_for_rank(seed, rank))

    def apply(self, particles: SequenceABC[Particle], nbins: int, ne: float) -> None:
        """Shift the phases of ``particles`` in place.

        ``particles`` holds beamlets of ``nbins`` particles each and ``ne`` is
        the number of electrons the slice represents.
        """
        if nbins < 1:
            raise ValueError(f"nbins must be positive, got {nbins}")
        mpart = len(particles) // nbins
        if mpart == 0:
            return
        electrons_per_beamlet = ne / mpart

        used = mpart * nbins
        grid = np.array([p.theta for p in particles[:used]]).reshape(mpart, nbins)
        shift = np.zeros_like(grid)
        for harmonic in range(1, (nbins - 1) // 2 + 1):
            draws = np.array([
                (self._random.get_element(), self._random.get_element())
                for _ in range(mpart)
            ])
            phi = 2 * math.pi * draws[:, 0]
            amp = np.sqrt(-np.log(draws[:, 1]) / electrons_per_beamlet) * 2 / harmonic
            shift -= amp[:, np.newaxis] * np.sin(grid * harmonic + phi[:, np.newaxis])

        for particle, delta in zip(particles[:used], shift.ravel().tolist()):
            particle.theta += delta