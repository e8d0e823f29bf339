"""Sequences of values, typically used to alter lattice elements one by one."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from .inverfc import inverfc
from .sequences import RandomU
from .textproc import InputError, take_options


def _require_label(options: Mapping[str, Any], element: str) -> str:
    label = options.get("label", "")
    if not label:
        raise InputError(f"Label not defined in {element}")
    return label


@dataclass
class SeriesConst:
    """Always returns the same value."""

    label: str
    c0: float = 0.0

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "SeriesConst":
        element = "&sequence_const"
        opts = take_options(args, {"label": str, "c0": float}, element)
        return cls(label=_require_label(opts, element), c0=opts.get("c0", 0.0))

    def value(self) -> float:
        return self.c0


@dataclass
class SeriesPower:
    """Returns c0 for the first n0 calls, then c0 + dc * (n - n0) ** alpha."""

    label: str
    c0: float = 0.0
    dc: float = 0.0
    alpha: float = 0.0
    n0: int = 1
    count: int = 0

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "SeriesPower":
        element = "&sequence_power"
        opts = take_options(
            args,
            {"label": str, "c0": float, "dc": float, "alpha": float, "n0": int},
            element,
        )
        return cls(
            label=_require_label(opts, element),
            c0=opts.get("c0", 0.0),
            dc=opts.get("dc", 0.0),
            alpha=opts.get("alpha", 0.0),
            n0=opts.get("n0", 1),
        )

    def value(self) -> float:
        self.count += 1
        if self.count <= self.n0:
            return self.c0
        return self.c0 + self.dc * float(self.count - self.n0) ** self.alpha


@dataclass
class SeriesRandom:
    """Random values around c0, normally or uniformly distributed with scale dc."""

    label: str
    c0: float = 0.0
    dc: float = 0.0
    seed: float = 100.0
    normal: bool = True
    _random: RandomU = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._random = RandomU(int(self.seed))

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "SeriesRandom":
        element = "&sequence_random"
        opts = take_options(
            args,
            {"label": str, "c0": float, "dc": float, "seed": float, "normal": bool},
            element,
        )
        return cls(
            label=_require_label(opts, element),
            c0=opts.get("c0", 0.0),
            dc=opts.get("dc", 0.0),
            seed=opts.get("seed", 100.0),
            normal=opts.get("normal", True),
        )

    def value(self) -> float:
        if self.normal:
            return self.c0 + self.dc * inverfc(2 * self._random.get_element())
        return self.c0 + self.dc * (2 * self._random.get_element() - 1)


Series = Union[SeriesConst, SeriesPower, SeriesRandom]

_KINDS: dict[str, Any] = {
    "&sequence_const": SeriesConst,
    "&sequence_power": SeriesPower,
    "&sequence_random": SeriesRandom,
}


class SeriesSet:
    """The sequences defined in the input, looked up by label."""

    def __init__(self) -> None:
        self._series: dict[str, Series] = {}

    def __contains__(self, label: object) -> bool:
        return label in self._series

    def __len__(self) -> int:
        return len(self._series)

    def add(self, element: str, args: Mapping[str, str]) -> str:
        """Create a sequence from an input element and return its label."""
        kind = _KINDS.get(element)
        if kind is None:
            raise InputError(f"Unknown sequence element: {element}")
        series = kind.from_args(args)
        self._series[series.label] = series
        return series.label

    def check(self, label: str) -> bool:
        """True if the label is empty or refers to a defined sequence."""
        return not label or label in self._series

    def value(self, default: float, label: str) -> float:
        """Next value of the labelled sequence, or ``default`` if there is none."""
        series = self._series.get(label) if label else None
        if series is None:
            return default
        return series.value()