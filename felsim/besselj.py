"""Bessel functions of the first kind of integer order."""

from __future__ import annotations

import math


def bessel_j0(x: float) -> float:
    """Bessel function J0 by rational and asymptotic approximation."""
    if abs(x) < 8:
        y = x * x
        num = 57568490574.0 + y * (-13362590354.0 + y * (651619640.7 + y * (
            -11214424.18 + y * (77392.33017 + y * -184.9052456))))
        den = 57568490411.0 + y * (1029532985.0 + y * (9494680.718 + y * (
            59272.64853 + y * (267.8532712 + y * 1.0))))
        return num / den
    ax = abs(x)
    z = 8 / ax
    y = z * z
    xx = ax - 0.785398164
    p = 1.0 + y * (-0.1098628627e-2 + y * (0.2734510407e-4 + y * (
        -0.2073370639e-5 + y * 0.2093887211e-6)))
    q = -0.1562499995e-1 + y * (0.1430488765e-3 + y * (-0.6911147651e-5 + y * (
        0.7621095161e-6 + y * -0.934945152e-7)))
    return math.sqrt(0.636619772 / ax) * (math.cos(xx) * p - z * math.sin(xx) * q)


def bessel_j1(x: float) -> float:
    """Bessel function J1 by rational and asymptotic approximation."""
    if abs(x) < 8:
        y = x * x
        num = 72362614232.0 + y * (-7895059235.0 + y * (242396853.1 + y * (
            -2972611.439 + y * (15704.48260 + y * -30.16036606))))
        den = 144725228442.0 + y * (2300535178.0 + y * (18583304.74 + y * (
            99447.43394 + y * (376.9991397 + y * 1.0))))
        return x * num / den
    ax = abs(x)
    z = 8 / ax
    y = z * z
    xx = ax - 2.356194491
    p = 1.0 + y * (0.183105e-2 + y * (-0.3516396496e-4 + y * (
        0.2457520174e-5 + y * -0.240337019e-6)))
    q = 0.04687499995 + y * (-0.2002690873e-3 + y * (0.8449199096e-5 + y * (
        -0.88228987e-6 + y * 0.105787412e-6)))
    return math.sqrt(0.636619772 / ax) * (math.cos(xx) * p - z * math.sin(xx) * q)


def bessel_j(n: int, x: float) -> float:
    """Bessel function J_n(x) for integer order ``n >= 0``."""
    if n == 0:
        return bessel_j0(x)
    if n == 1:
        return bessel_j1(x)
    if x == 0:
        return 0.0

    ax = abs(x)
    tox = 2.0 / ax
    if ax > n:
        bjm = bessel_j0(ax)
        bj = bessel_j1(ax)
        for j in range(1, n):
            bjm, bj = bj, j * tox * bj - bjm
        result = bj
    else:
        m = int(2 * (n + math.floor(math.sqrt(40 * n)) / 2))
        result = 0.0
        add_term = False
        total = 0.0
        bjp = 0.0
        bj = 1.0
        for j in range(m, 0, -1):
            bjm = j * tox * bj - bjp
            bjp = bj
            bj = bjm
            if abs(bj) > 1e10:
                bj *= 1e-10
                bjp *= 1e-10
                result *= 1e-10
                total *= 1e-10
            if add_term:
                total += bj
            add_term = not add_term
            if j == n:
                result = bjp
        total = 2 * total - bj
        result /= total

    if x < 0 and n % 2 == 1:
        result = -result
    return result