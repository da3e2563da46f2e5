"""Piecewise-linear lookup table."""

from __future__ import annotations

from bisect import bisect_left
from numbers import Real
from typing import Iterable, Sequence

__all__ = ["LinearInterp"]


def _number(value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"expected a number, got {value!r}")
    return float(value)


class LinearInterp:
    """Interpolates linearly between ``(x, y)`` points, clamping outside them."""

    def __init__(self, points: Iterable[Sequence[float]]) -> None:
        xs: list[float] = []
        ys: list[float] = []
        for point in points:
            if isinstance(point, (str, bytes)) or len(point) != 2:
                raise ValueError(f"each point must be an (x, y) pair, got {point!r}")
            x, y = _number(point[0]), _number(point[1])
            if xs and x < xs[-1]:
                raise ValueError(
                    "Please sort the point's abscissa from smallest to largest. "
                    f"{x:f} < {xs[-1]:f}"
                )
            xs.append(x)
            ys.append(y)
        if not xs:
            raise ValueError("at least one point is required")
        self._xs = xs
        self._ys = ys

    def output(self, value: float) -> float:
        """Return the interpolated ordinate at ``value``."""
        xs, ys = self._xs, self._ys
        if value >= xs[-1]:
            return ys[-1]
        if value <= xs[0]:
            return ys[0]
        hi = bisect_left(xs, value)
        lo = hi - 1
        slope = (ys[hi] - ys[lo]) / (xs[hi] - xs[lo])
        return ys[lo] + slope * (value - xs[lo])