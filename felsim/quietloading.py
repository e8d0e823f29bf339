"""Quiet (low-noise) loading of macro-particle slices."""

from __future__ import annotations

import math
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass

import numpy as np

from .inverfc import inverfc
from .sequences import Hammersley, RandomU, Sequence


@dataclass
class Particle:
    """Phase-space coordinates of one macro particle."""

    gamma: float = 0.0
    theta: float = 0.0
    x: float = 0.0
    y: float = 0.0
    px: float = 0.0
    py: float = 0.0


@dataclass
class BeamSlice:
    """Beam parameters of one slice used to generate its particles."""

    gamma: float = 5800 / 0.511
    delgam: float = 0.0
    current: float = 1000.0
    ex: float = 0.3e-6
    ey: float = 0.3e-6
    xcen: float = 0.0
    ycen: float = 0.0
    pxcen: float = 0.0
    pycen: float = 0.0
    betax: float = 15.0
    betay: float = 15.0
    alphax: float = 0.0
    alphay: float = 0.0
    bunch: float = 0.0
    bunchphase: float = 0.0
    emod: float = 0.0
    emodphase: float = 0.0


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _derived_seed(seed: int, rank: int) -> int:
    """Seed for a node, taken from the (rank+1)-th number of a seeded stream."""
    generator = RandomU(seed)
    value = 0.0
    for _ in range(rank + 1):
        value = generator.get_element()
    return _round_half_away(value * 1e9)


def _mean_and_inverse_spread(values: np.ndarray) -> tuple[float, float]:
    """Return the mean and the inverse rms spread (0 when the spread is 0)."""
    mean = float(values.mean())
    spread = math.sqrt(abs(float(np.mean(values * values)) - mean * mean))
    return mean, (1.0 / spread if spread > 0 else spread)


def _decorrelate(pos: np.ndarray, mom: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Remove the position-momentum correlation and normalise the position."""
    mean, inverse = _mean_and_inverse_spread(pos)
    mom_mean = float(mom.mean())
    slope = (float(np.mean(pos * mom)) - mean * mom_mean) * inverse * inverse
    return (pos - mean) * inverse, mom - slope * pos


def _normalise(values: np.ndarray) -> np.ndarray:
    mean, inverse = _mean_and_inverse_spread(values)
    return (values - mean) * inverse


class QuietLoader:
    """Generates slices of particles with Hammersley or random sequences.

    In one-to-one mode a single random stream, seeded from ``base[0]`` and the
    node rank ``base[1]``, feeds all coordinates. Otherwise six Hammersley
    sequences with the prime-base indices in ``base`` are used.
    """

    def __init__(self, one4one: bool = False,
                 base: SequenceABC[int] = (0, 1, 2, 3, 4, 5)) -> None:
        self.one4one = one4one
        sequences: tuple[Sequence, ...]
        if one4one:
            if len(base) < 2:
                raise ValueError("one-to-one loading needs a seed and a rank")
            shared = RandomU(_derived_seed(base[0], base[1]))
            sequences = (shared,) * 6
        else:
            if len(base) < 6:
                raise ValueError("quiet loading needs six Hammersley bases")
            sequences = tuple(Hammersley(b) for b in base[:6])
        self._sequences = sequences

    def load(self, slice: BeamSlice, npart: int, nbins: int, theta0: float,
             islice: int) -> list[Particle]:
        """Generate ``npart`` particles for slice number ``islice``.

        Particles come in beamlets of ``nbins`` mirrored copies spread evenly
        in phase; the phase is scaled by ``theta0``.
        """
        if nbins < 1:
            raise ValueError(f"nbins must be positive, got {nbins}")
        if npart < 0 or npart % nbins:
            raise ValueError(f"npart ({npart}) is not a multiple of nbins ({nbins})")

        iseed = _round_half_away(RandomU(islice).get_element() * 1e9)
        for seq in self._sequences:
            seq.set(iseed)

        mpart = npart // nbins
        if mpart == 0:
            return []
        dtheta = 1.0 / nbins
        st, sg, sx, sy, spx, spy = self._sequences
        raw = np.array([
            (st.get_element() * dtheta,
             inverfc(2 * sg.get_element()),
             inverfc(2 * sx.get_element()),
             inverfc(2 * sy.get_element()),
             inverfc(2 * spx.get_element()),
             inverfc(2 * spy.get_element()))
            for _ in range(mpart)
        ])
        theta, gamma, x, y, px, py = raw.T

        mean, inverse = _mean_and_inverse_spread(gamma)
        gamma = (gamma - mean) * inverse * slice.delgam + slice.gamma

        x, px = _decorrelate(x, px)
        y, py = _decorrelate(y, py)
        px = _normalise(px)
        py = _normalise(py)

        sigx = math.sqrt(slice.ex * slice.betax / slice.gamma)
        sigy = math.sqrt(slice.ey * slice.betay / slice.gamma)
        sigpx = math.sqrt(slice.ex / slice.betax / slice.gamma)
        sigpy = math.sqrt(slice.ey / slice.betay / slice.gamma)
        corx = -slice.alphax / slice.betax
        cory = -slice.alphay / slice.betay

        x = x * sigx
        y = y * sigy
        px = (sigpx * px + corx * x) * gamma + slice.pxcen
        py = (sigpy * py + cory * y) * gamma + slice.pycen
        x = x + slice.xcen
        y = y + slice.ycen

        theta = np.repeat(theta, nbins) + np.tile(np.arange(nbins) * dtheta, mpart)
        gamma, x, y, px, py = (np.repeat(v, nbins) for v in (gamma, x, y, px, py))
        theta = theta * theta0

        if slice.bunch != 0 or slice.emod != 0:
            gamma = gamma - slice.emod * np.sin(theta - slice.emodphase)
            theta = theta - 2 * slice.bunch * np.sin(theta - slice.bunchphase)

        return [
            Particle(gamma=g, theta=t, x=a, y=b, px=c, py=d)
            for g, t, a, b, c, d in zip(gamma.tolist(), theta.tolist(), x.tolist(),
                                        y.tolist(), px.tolist(), py.tolist())
        ]