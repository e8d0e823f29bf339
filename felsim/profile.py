"""Longitudinal profiles that input parameters may refer to by label."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .textproc import InputError, take_options


def _require_label(options: Mapping[str, Any], element: str) -> str:
    label = options.get("label", "")
    if not label:
        raise InputError(f"Label not defined in {element}")
    return label


@dataclass
class ProfileConst:
    """A constant value."""

    label: str
    c0: float = 0.0

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "ProfileConst":
        element = "&profile_const"
        opts = take_options(args, {"label": str, "c0": float}, element)
        return cls(label=_require_label(opts, element), c0=opts.get("c0", 0.0))

    def value(self, s: float) -> float:
        return self.c0


@dataclass
class ProfilePolynom:
    """A polynomial of fourth order in s."""

    label: str
    coefficients: tuple[float, ...] = (0.0, 0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "ProfilePolynom":
        element = "&profile_polynom"
        names = [f"c{i}" for i in range(5)]
        spec: dict[str, Any] = {"label": str}
        spec.update({name: float for name in names})
        opts = take_options(args, spec, element)
        return cls(label=_require_label(opts, element),
                   coefficients=tuple(opts.get(name, 0.0) for name in names))

    def value(self, s: float) -> float:
        total = 0.0
        power = 1.0
        for coefficient in self.coefficients:
            total += coefficient * power
            power *= s
        return total


@dataclass
class ProfileStep:
    """A constant value between s_start and s_end, zero elsewhere."""

    label: str
    c0: float = 0.0
    s_start: float = 0.0
    s_end: float = 0.0

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "ProfileStep":
        element = "&profile_step"
        opts = take_options(
            args, {"label": str, "c0": float, "s_start": float, "s_end": float}, element)
        return cls(label=_require_label(opts, element), c0=opts.get("c0", 0.0),
                   s_start=opts.get("s_start", 0.0), s_end=opts.get("s_end", 0.0))

    def value(self, s: float) -> float:
        if self.s_start <= s <= self.s_end:
            return self.c0
        return 0.0


@dataclass
class ProfileGauss:
    """A Gaussian of amplitude c0 centred at s0 with rms width sig."""

    label: str
    c0: float = 0.0
    s0: float = 0.0
    sig: float = 1.0

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "ProfileGauss":
        element = "&profile_gauss"
        opts = take_options(
            args, {"label": str, "c0": float, "s0": float, "sig": float}, element)
        return cls(label=_require_label(opts, element), c0=opts.get("c0", 0.0),
                   s0=opts.get("s0", 0.0), sig=opts.get("sig", 1.0))

    def value(self, s: float) -> float:
        return self.c0 * math.exp(-0.5 * (s - self.s0) ** 2 / self.sig / self.sig)


Profile = Union[ProfileConst, ProfilePolynom, ProfileStep, ProfileGauss]

_KINDS: dict[str, Any] = {
    "&profile_const": ProfileConst,
    "&profile_polynom": ProfilePolynom,
    "&profile_step": ProfileStep,
    "&profile_gauss": ProfileGauss,
}


class ProfileSet:
    """The profiles defined in the input, looked up by label."""

    def __init__(self) -> None:
        self._profiles: dict[str, Profile] = {}

    def __contains__(self, label: object) -> bool:
        return label in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def add(self, element: str, args: Mapping[str, str]) -> str:
        """Create a profile from an input element and return its label.

        A profile with the same label replaces the earlier one.
        """
        if element == "&profile_file":
            raise InputError("Profiles read from data files are not supported")
        kind = _KINDS.get(element)
        if kind is None:
            raise InputError(f"Unknown profile element: {element}")
        profile = kind.from_args(args)
        self._profiles[profile.label] = profile
        return profile.label

    def check(self, label: str) -> bool:
        """True if the label is empty or refers to a defined profile."""
        return not label or label in self._profiles

    def value(self, s: float, default: float, label: str) -> float:
        """Value of the labelled profile at s, or ``default`` if there is none."""
        profile = self._profiles.get(label) if label else None
        if profile is None:
            return default
        return profile.value(s)