"""Single-particle wake potentials of the beam pipe from the '&wake' element."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from .constants import CE, VACIMP
from .profile import ProfileSet
from .textproc import InputError, reference, take_options
from .timewindow import TimeWindow

_log = logging.getLogger(__name__)

_CHUNK = 512

_SPEC = {
    "loss": str,
    "radius": float,
    "conductivity": float,
    "relaxation": float,
    "roundpipe": bool,
    "material": str,
    "gap": float,
    "lgap": float,
    "hrough": float,
    "lrough": float,
    "transient": bool,
    "ztrans": float,
}

_MATERIALS = {
    "cu": (5.813e7, 8.1e-6),
    "al": (3.571e7, 2.4e-6),
}


@dataclass
class WakeResult:
    """Wake potentials sampled with spacing ``ds`` and the external loss per slice."""

    ns: int
    ns_node: int
    ds: float
    external: np.ndarray
    resistive: np.ndarray
    geometric: np.ndarray
    roughness: np.ndarray
    ztrans: float
    radius: float
    transient: bool


def geometric_wake(ns: int, ds: float, gap: float, radius: float, lgap: float,
                   roundpipe: bool) -> np.ndarray:
    """Wake of periodic gaps in the pipe; zero if there is no gap."""
    if gap <= 0:
        return np.zeros(ns)
    coef = -VACIMP * CE / (math.pi * math.pi * radius * lgap) * 2 * math.sqrt(0.5 * gap)
    if not roundpipe:
        coef *= 0.956
    wake = coef * np.sqrt(ds * np.arange(ns))
    _log.info("Geometric Wake calculated...")
    return wake


def _impedance_round(kappa, t, gamma, coef, radius, s0):
    lre = coef * np.sqrt(t) * np.sqrt(1.0 - t * gamma)
    lim = coef * np.sqrt(t) * np.sqrt(1.0 + t * gamma) - kappa * kappa * radius * 0.5 / s0 / s0
    nomi = 2.0 * kappa / (3e8 * radius * s0) / (lre * lre + lim * lim)
    return lre * nomi, -lim * nomi


def _impedance_flat(kappa, t, gamma, coef, radius, s0):
    nq = 10000
    dq = 15 / (nq - 1)
    arg = dq * np.arange(1, nq)
    coh = np.cosh(arg)
    sih = np.sinh(arg) / arg
    zre = np.empty_like(kappa)
    zim = np.empty_like(kappa)
    for i, (k, tk) in enumerate(zip(kappa.tolist(), t.tolist())):
        scale = 2.0 * 15.0 * k / (3e8 * radius * s0 * (2 * nq - 1))
        lre = coef * math.sqrt(tk) * math.sqrt(1.0 - tk * gamma) * coh * coh
        lim = (coef * math.sqrt(tk) * math.sqrt(1.0 + tk * gamma) * coh * coh
               - k * k * radius * 0.5 / s0 / s0 * sih * coh)
        nomi = scale / (lre * lre + lim * lim)
        zre[i] = float(np.sum(lre * nomi))
        zim[i] = float(np.sum(-lim * nomi))
    return zre, zim


def resistive_wake(ns: int, ds: float, radius: float, conductivity: float,
                   relaxation: float, roundpipe: bool) -> np.ndarray:
    """Resistive-wall wake from the AC conductivity; zero without conductivity."""
    if conductivity <= 0:
        return np.zeros(ns)
    s0 = (2 * radius * radius / VACIMP / conductivity) ** (1.0 / 3.0)
    gamma = relaxation / s0
    coef = radius / (s0 * s0)
    kappamax = 100.0
    nk = 1000

    kappa = np.arange(1, nk + 1) * kappamax / nk
    t = kappa / np.sqrt(1 + kappa * kappa * gamma * gamma)
    impedance = _impedance_round if roundpipe else _impedance_flat
    zre, zim = impedance(kappa, t, gamma, coef, radius, s0)

    step = ds * kappamax / nk / s0
    harmonics = np.arange(1, nk + 1, dtype=float)
    rows = np.arange(ns, dtype=float)
    wake = np.empty(ns)
    for start in range(0, ns, _CHUNK):
        phi = np.outer(rows[start:start + _CHUNK] * step, harmonics)
        wake[start:start + _CHUNK] = np.cos(phi) @ zre + np.sin(phi) @ zim

    scale = -kappamax / nk / s0 * 3e8 / math.pi * (VACIMP * CE / 4 / math.pi)
    scale *= 0.5  # empirical amplitude adjustment
    _log.info("Resistive Wake calculated (s0 = %g)...", s0)
    return wake * scale


def _roughness_kernel(n: int, q1: complex, q2: complex, rrough: float):
    q = q1 + np.arange(n) * ((q2 - q1) / (n - 1))
    s = (np.sqrt(2.0 * q + 1.0) - 1j * np.sqrt(2.0 * q - 1.0)) * q / np.sqrt(4.0 * q * q - 1.0)
    kernel = (s + 1.0) / (1.0 - 1j * rrough * q * s) / (1.0 + 1j * rrough * q)
    kernel[0] *= 0.5
    kernel[-1] *= 0.5
    return q, kernel


def roughness_wake(ns: int, ds: float, radius: float, hrough: float,
                   lrough: float) -> np.ndarray:
    """Wake of a sinusoidally rough surface; zero without roughness."""
    if hrough <= 0:
        return np.zeros(ns)
    pi = math.pi
    rrough = pi ** 3 / lrough ** 3 * hrough * hrough * radius
    corners = (complex(0, 0), complex(0, 2e-3), complex(1, 2e-3), complex(1, 0),
               complex(100, 0))
    sizes = (128, 8 * 128, 128, 8 * 128)
    segments = []
    for (q1, q2), n in zip(zip(corners, corners[1:]), sizes):
        q, kernel = _roughness_kernel(n, q1, q2, rrough)
        segments.append((q, kernel, (q2 - q1) / (n - 1)))

    coef = rrough / pi * 4 / radius / radius * 1.6e-19 / 4 / pi / 8.854e-12
    tau = 2 * pi * ds * np.arange(ns) / lrough
    total = np.zeros(ns)
    for q, kernel, dq in segments:
        for start in range(0, ns, _CHUNK):
            part = tau[start:start + _CHUNK]
            values = np.exp(-1j * np.outer(part, q)) @ kernel * dq
            total[start:start + _CHUNK] += values.real
    _log.info("Roughness Wake calculated...")
    return coef * total


def setup_wake(args: Mapping[str, str], timewindow: TimeWindow,
               profiles: ProfileSet) -> WakeResult:
    """Compute the wake potentials for a '&wake' element."""
    opts = take_options(args, _SPEC, "&wake")
    loss, loss_ref = reference(opts["loss"], 0.0) if "loss" in opts else (0.0, "")
    radius = opts.get("radius", 2.5e-3)
    conductivity = opts.get("conductivity", 0.0)
    relaxation = opts.get("relaxation", 0.0)
    roundpipe = opts.get("roundpipe", True)
    material = opts.get("material", "")
    gap = opts.get("gap", 0.0)
    lgap = opts.get("lgap", 1.0)
    hrough = opts.get("hrough", 0.0)
    lrough = opts.get("lrough", 1.0)
    transient = opts.get("transient", False)
    ztrans = opts.get("ztrans", 0.0)

    if not profiles.check(loss_ref):
        raise InputError(f"Unknown profile reference in &wake: {loss_ref}")

    _log.info("Generating wakefield potentials...")

    s = timewindow.positions()
    if len(s) < 2:
        raise InputError("Wakefields need a time window of at least two slices")
    sample = timewindow.sample_rate()
    ns_node = timewindow.node_nslice
    ns = int(len(s) * sample)
    ds = (s[1] - s[0]) / sample

    external = np.array([
        profiles.value(s[j + timewindow.node_offset], loss, loss_ref)
        for j in range(ns_node)
    ])

    if material in ("CU", "Cu", "cu", "AL", "Al", "al"):
        conductivity, relaxation = _MATERIALS[material.lower()]

    return WakeResult(
        ns=ns,
        ns_node=ns_node,
        ds=ds,
        external=external,
        resistive=resistive_wake(ns, ds, radius, conductivity, relaxation, roundpipe),
        geometric=geometric_wake(ns, ds, gap, radius, lgap, roundpipe),
        roughness=roughness_wake(ns, ds, radius, hrough, lrough),
        ztrans=ztrans,
        radius=radius,
        transient=transient,
    )