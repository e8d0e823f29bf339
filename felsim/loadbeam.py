"""Generation of quietly loaded particle distributions from the '&beam' element."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from .constants import CE
from .profile import ProfileSet
from .quietloading import BeamSlice, Particle, QuietLoader
from .shotnoise import ShotNoise
from .sorting import Sorting
from .textproc import InputError, reference, take_options
from .timewindow import TimeWindow

_log = logging.getLogger(__name__)

# Input keyword and the BeamSlice field it sets, in the order they are checked.
_KEYS = (
    ("gamma", "gamma"),
    ("delgam", "delgam"),
    ("current", "current"),
    ("ex", "ex"),
    ("ey", "ey"),
    ("betax", "betax"),
    ("betay", "betay"),
    ("alphax", "alphax"),
    ("alphay", "alphay"),
    ("xcenter", "xcen"),
    ("ycenter", "ycen"),
    ("pxcenter", "pxcen"),
    ("pycenter", "pycen"),
    ("bunch", "bunch"),
    ("bunchphase", "bunchphase"),
    ("emod", "emod"),
    ("emodphase", "emodphase"),
)


class _BeamSetup(Protocol):
    lambda0: float
    gamma0: float
    one4one: bool
    shotnoise: bool
    npart: int
    nbins: int
    seed: int


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class BeamRecord:
    """The particle distribution of this node, one list of particles per slice."""

    slices: list[list[Particle]] = field(default_factory=list)
    current: list[float] = field(default_factory=list)
    reflength: float = 0.0
    slicelength: float = 0.0
    s0: float = 0.0
    one4one: bool = False
    nbins: int = 4
    sorting: Sorting = field(default_factory=Sorting)

    def reset(self, nslice: int, nbins: int, reflength: float, slicelength: float,
              s0: float, one4one: bool) -> None:
        """Prepare ``nslice`` empty slices with the given geometry."""
        self.slices = [[] for _ in range(nslice)]
        self.current = [0.0] * nslice
        self.nbins = nbins
        self.reflength = reflength
        self.slicelength = slicelength
        self.s0 = s0
        self.one4one = one4one


def load_beam(args: Mapping[str, str], setup: _BeamSetup, timewindow: TimeWindow,
              profiles: ProfileSet, beam: BeamRecord) -> BeamRecord:
    """Fill the empty ``beam`` with particles generated slice by slice.

    Every beam parameter is either a number or a '@label' reference to a
    profile. Returns ``beam``.
    """
    if beam.slices:
        raise InputError("Cannot generate beam, because beam is already defined")

    wavelength = setup.lambda0
    sample = timewindow.sample_rate()
    one4one = setup.one4one
    npart = setup.npart
    nbins = setup.nbins
    rank = timewindow.rank

    opts = take_options(args, {key: str for key, _ in _KEYS}, "&beam")
    defaults = BeamSlice(gamma=setup.gamma0)
    values: dict[str, float] = {}
    refs: dict[str, str] = {}
    for key, attr in _KEYS:
        default = getattr(defaults, attr)
        if key in opts:
            values[attr], refs[attr] = reference(opts[key], default)
        else:
            values[attr], refs[attr] = default, ""

    wrong = ""
    for ref in refs.values():
        if not profiles.check(ref):
            wrong = ref
    if wrong:
        raise InputError(f"Unknown profile reference in &beam: {wrong}")

    _log.info("Generating input particle distribution...")

    theta0 = 2 * math.pi
    if one4one:
        nbins = 1
        theta0 *= sample
    if npart % nbins != 0:
        raise InputError("NPART is not a multiple of NBINS")

    s = timewindow.positions()
    nslice = timewindow.node_nslice
    beam.reset(nslice, nbins, wavelength, sample * wavelength, s[0], one4one)
    beam.sorting = Sorting(dosort=one4one, doshift=False)

    if one4one:
        loader = QuietLoader(True, (setup.seed, rank))
    else:
        loader = QuietLoader(False)
    noise = ShotNoise(setup.seed, rank)
    apply_noise = setup.shotnoise and not one4one and timewindow.is_time

    for j in range(nslice):
        i = j + timewindow.node_offset
        pos = s[i]
        params = BeamSlice(**{attr: profiles.value(pos, values[attr], refs[attr])
                              for _, attr in _KEYS})
        ne = params.current * wavelength * sample / CE
        npartloc = _round_half_away(ne) if one4one else npart
        particles = loader.load(params, npartloc, nbins, theta0, i)
        if apply_noise:
            noise.apply(particles, nbins, ne)
        beam.slices[j] = particles
        beam.current[j] = params.current
    return beam