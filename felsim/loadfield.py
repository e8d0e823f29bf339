"""Generation of Gauss-Hermite radiation fields from the '&field' element."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from .gausshermite import FieldSlice, load_gauss
from .profile import ProfileSet
from .textproc import InputError, reference, take_options
from .timewindow import TimeWindow

_log = logging.getLogger(__name__)

_SPEC = {
    "lambda": str,
    "power": str,
    "phase": str,
    "waist_pos": str,
    "waist_size": str,
    "xcenter": float,
    "ycenter": float,
    "xangle": float,
    "yangle": float,
    "dgrid": float,
    "ngrid": int,
    "harm": int,
    "nx": int,
    "ny": int,
    "accumulate": bool,
}


class _ReferenceSetup(Protocol):
    lambda0: float


@dataclass
class FieldRecord:
    """The radiation field of one harmonic, one complex grid per slice.

    The grid of a slice is ``ngrid`` x ``ngrid`` and spans
    ``-gridmax..gridmax`` in both planes.
    """

    harm: int
    ngrid: int
    gridmax: float
    wavelength: float
    slicelength: float
    s0: float
    slices: list[np.ndarray] = field(default_factory=list)

    def reset(self, nslice: int, ngrid: int, gridmax: float, wavelength: float,
              slicelength: float, s0: float, keep: bool = False) -> None:
        """Set new parameters; the slice data are cleared unless ``keep`` fits."""
        fits = keep and len(self.slices) == nslice and ngrid == self.ngrid
        self.ngrid = ngrid
        self.gridmax = gridmax
        self.wavelength = wavelength
        self.slicelength = slicelength
        self.s0 = s0
        if not fits:
            self.slices = [np.zeros((ngrid, ngrid), dtype=complex) for _ in range(nslice)]


def load_field(args: Mapping[str, str], setup: _ReferenceSetup, timewindow: TimeWindow,
               profiles: ProfileSet, fields: list[FieldRecord]) -> FieldRecord:
    """Generate (or add to) the field of one harmonic and return its record.

    A new record is appended to ``fields``; an existing record of the same
    harmonic is overwritten, or added to when ``accumulate`` is set.
    """
    sample = timewindow.sample_rate()
    reference_length = setup.lambda0
    opts = take_options(args, _SPEC, "&field")

    wavelength, lambda_ref = reference(opts["lambda"], reference_length) \
        if "lambda" in opts else (reference_length, "")
    power, power_ref = reference(opts["power"], 0.0) if "power" in opts else (0.0, "")
    phase, phase_ref = reference(opts["phase"], 0.0) if "phase" in opts else (0.0, "")
    z0, z0_ref = reference(opts["waist_pos"], 0.0) if "waist_pos" in opts else (0.0, "")
    w0, w0_ref = reference(opts["waist_size"], 100e-6) \
        if "waist_size" in opts else (100e-6, "")
    xcen = opts.get("xcenter", 0.0)
    ycen = opts.get("ycenter", 0.0)
    xangle = opts.get("xangle", 0.0)
    yangle = opts.get("yangle", 0.0)
    dgrid = opts.get("dgrid", 1e-3)
    ngrid = opts.get("ngrid", 151)
    harm = opts.get("harm", 1)
    nx = opts.get("nx", 0)
    ny = opts.get("ny", 0)
    add = opts.get("accumulate", False)

    wrong = ""
    for ref in (lambda_ref, power_ref, phase_ref, z0_ref, w0_ref):
        if not profiles.check(ref):
            wrong = ref
    if wrong:
        raise InputError(f"Unknown profile reference in &field: {wrong}")

    record: FieldRecord | None = None
    for candidate in fields:
        if candidate.harm == harm:
            record = candidate
            if add:
                dgrid = candidate.gridmax
                ngrid = candidate.ngrid
    if record is None:
        add = False

    _log.info("%s input radiation field for HARM = %d ...",
              "Adding" if add else "Generating", harm)

    two_pi = 2 * math.pi
    dlam = -(wavelength - reference_length) / reference_length / reference_length * two_pi

    s = timewindow.positions()
    nslice = timewindow.node_nslice
    if record is None:
        record = FieldRecord(harm=harm, ngrid=ngrid, gridmax=dgrid, wavelength=wavelength,
                             slicelength=sample * wavelength, s0=s[0])
        record.reset(nslice, ngrid, dgrid, wavelength, sample * wavelength, s[0])
        fields.append(record)
    else:
        record.reset(nslice, ngrid, dgrid, wavelength, sample * wavelength, s[0], keep=add)

    for j in range(nslice):
        pos = s[j + timewindow.node_offset]
        slice_params = FieldSlice(
            wavelength=profiles.value(pos, wavelength, lambda_ref),
            power=profiles.value(pos, power, power_ref),
            phase=profiles.value(pos, math.fmod(phase + pos * dlam, two_pi), phase_ref),
            z0=profiles.value(pos, z0, z0_ref),
            w0=profiles.value(pos, w0, w0_ref),
            xcen=xcen,
            ycen=ycen,
            xangle=xangle,
            yangle=yangle,
            nx=nx,
            ny=ny,
            harm=harm,
        )
        grid = load_gauss(slice_params, dgrid, ngrid)
        if add:
            record.slices[j] = record.slices[j] + grid
        else:
            record.slices[j] = grid
    return record