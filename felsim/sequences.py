"""Uniform number sequences: a portable random generator and Hammersley."""

from __future__ import annotations

from abc import ABC, abstractmethod

_UINT32 = 0xFFFFFFFF

_IA1 = 40014
_IA2 = 40692
_IM1 = 2147483563
_IM2 = 2147483399
_IMM1 = 2147483562
_IQ1 = 53668
_IQ2 = 52774
_IR1 = 12211
_IR2 = 3791
_NTAB = 32
_NDIV = 67108862
_AM = 1.0 / 2147483563
_RNMX = 1.0 - 1.2e-40

_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61,
          67, 71, 73, 79, 83, 89, 97, 101)


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class Sequence(ABC):
    """A source of numbers in the unit interval."""

    @abstractmethod
    def get_element(self) -> float:
        """Return the next element of the sequence."""

    @abstractmethod
    def set(self, index: int) -> None:
        """Reposition the sequence, where the sequence supports it."""


class RandomU(Sequence):
    """Long-period uniform generator with combined congruential streams and shuffling."""

    def __init__(self, seed: int = 0) -> None:
        useed = int(seed) & _UINT32
        if useed > 1:
            iseed = useed - (1 << 32) if useed >= (1 << 31) else useed
        else:
            iseed = 1
        self._seed2 = iseed
        table = [0] * _NTAB
        for i in range(_NTAB + 7, -1, -1):
            k = _tdiv(iseed, _IQ1)
            iseed = _IA1 * (iseed - k * _IQ1) - k * _IR1
            if iseed < 0:
                iseed += _IM1
            if i < _NTAB:
                table[i] = iseed
        self._seed = iseed
        self._table = table
        self._iy = table[0]

    def set(self, index: int) -> None:
        """Random streams cannot be repositioned; this does nothing."""

    def get_element(self) -> float:
        k = _tdiv(self._seed, _IQ1)
        self._seed = _IA1 * (self._seed - k * _IQ1) - k * _IR1
        if self._seed < 0:
            self._seed += _IM1
        k = _tdiv(self._seed2, _IQ2)
        self._seed2 = _IA2 * (self._seed2 - k * _IQ2) - k * _IR2
        if self._seed2 < 0:
            self._seed2 += _IM2
        j = _tdiv(self._iy, _NDIV)
        self._iy = self._table[j] - self._seed2
        self._table[j] = self._seed
        if self._iy < 1:
            self._iy += _IMM1
        return min(_AM * self._iy, _RNMX)


class Hammersley(Sequence):
    """Radical-inverse (van der Corput) sequence in a prime base."""

    def __init__(self, base_index: int = 0) -> None:
        if not 0 <= base_index < len(_BASES):
            raise ValueError(f"base index must be in 0..{len(_BASES) - 1}, got {base_index}")
        self._base = _BASES[base_index]
        self._index = 0

    def set(self, index: int) -> None:
        """Restart the sequence after ``index`` elements."""
        self._index = int(index) & _UINT32

    def get_element(self) -> float:
        self._index = (self._index + 1) & _UINT32
        value = 0.0
        scale = 1.0
        rest = self._index
        while True:
            scale /= self._base
            rest, digit = divmod(rest, self._base)
            value += digit * scale
            if rest == 0:
                return value