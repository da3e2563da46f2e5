"""Scalar signal filters: moving averages, low-pass and derivative IIR stages,
feed-forward compensators, slew-rate limiting and the one-euro filter."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections import deque

_SQRT_2 = math.sqrt(2.0)
_A = 1.4142

__all__ = [
    "Filter",
    "ButterworthFilter",
    "DigitalLpFilter",
    "MovingAverageFilter",
    "DerivLpFilter",
    "FF01Filter",
    "FF02Filter",
    "AverageFilter",
    "RampFilter",
    "OneEuroFilter",
]


def _min_abs(a: float, b: float) -> float:
    """Return ``a`` with its magnitude limited to ``b``."""
    sign = -1.0 if a < 0.0 else 1.0
    return sign * min(abs(a), b)


class Filter(ABC):
    """A filter that takes one sample at a time."""

    @abstractmethod
    def input(self, value: float) -> None:
        """Feed one sample."""

    @abstractmethod
    def output(self) -> float:
        """Return the current filtered value."""

    @abstractmethod
    def clear(self) -> None:
        """Reset the filter's history."""


class ButterworthFilter(Filter):
    """Convolution with a sampled second-order Butterworth impulse response."""

    def __init__(self, num_sample: int, dt: float, cutoff_frequency: float) -> None:
        if num_sample < 1:
            raise ValueError("num_sample must be at least 1")
        self._num_sample = num_sample
        self._dt = dt
        self._cutoff = cutoff_frequency
        self._buffer: deque[float] = deque([0.0] * num_sample, maxlen=num_sample)
        self._value = 0.0

    def input(self, value: float) -> None:
        self._buffer.appendleft(value)
        dt, wc = self._dt, self._cutoff
        total = 0.0
        for j, sample in enumerate(self._buffer):
            t = j * dt
            total += (
                _SQRT_2 / wc * sample * math.exp(-1.0 / _SQRT_2 * t) * math.sin(wc / _SQRT_2 * t) * dt
            )
        self._value = total

    def output(self) -> float:
        return self._value

    def clear(self) -> None:
        self._buffer = deque([0.0] * self._num_sample, maxlen=self._num_sample)


class _SecondOrderFilter(Filter):
    """Direct-form IIR stage with two past inputs and two past outputs."""

    def __init__(self, in1: float, in2: float, in3: float, out1: float, out2: float) -> None:
        self._in_coeffs = (in1, in2, in3)
        self._out_coeffs = (out1, out2)
        self._in_prev = [0.0, 0.0]
        self._out_prev = [0.0, 0.0]
        self._out = 0.0

    def _compute(self, value: float) -> float:
        in1, in2, in3 = self._in_coeffs
        out1, out2 = self._out_coeffs
        return (
            in1 * value
            + in2 * self._in_prev[0]
            + in3 * self._in_prev[1]
            + out1 * self._out_prev[0]
            + out2 * self._out_prev[1]
        )

    def _advance(self, value: float) -> None:
        self._out = self._compute(value)
        self._in_prev = [value, self._in_prev[0]]
        self._out_prev = [self._out, self._out_prev[0]]

    def _reset(self) -> None:
        self._in_prev = [0.0, 0.0]
        self._out_prev = [0.0, 0.0]


class DigitalLpFilter(_SecondOrderFilter):
    """Second-order digital low-pass filter with cutoff ``w_c`` at sample time ``t_s``."""

    def __init__(self, w_c: float, t_s: float) -> None:
        k = t_s * t_s * w_c * w_c
        den = 2500 * k + 7071 * t_s * w_c + 10000
        super().__init__(
            2500 * k / den,
            5000 * k / den,
            2500 * k / den,
            -(5000 * k - 20000) / den,
            -(2500 * k - 7071 * t_s * w_c + 10000) / den,
        )

    def input(self, value: float) -> None:
        self._advance(value)

    def output(self) -> float:
        return self._out

    def clear(self) -> None:
        self._reset()


class DerivLpFilter(_SecondOrderFilter):
    """Low-pass filtered derivative of the input."""

    def __init__(self, w_c: float, t_s: float) -> None:
        k = t_s * t_s * w_c * w_c
        den = 4 + 2 * _A * w_c * t_s + k
        super().__init__(
            2 * t_s * w_c * w_c / den,
            0.0,
            -2.0 * t_s * w_c * w_c / den,
            -1.0 * (-8 + k * 2) / den,
            -1.0 * (4 - 2 * _A * w_c * t_s + k) / den,
        )

    def input(self, value: float) -> None:
        self._advance(value)

    def output(self) -> float:
        return self._out

    def clear(self) -> None:
        self._reset()


class FF01Filter(_SecondOrderFilter):
    """Feed-forward compensator for a fixed inertia and damping."""

    _J = 0.00008
    _B = 0.0002

    def __init__(self, t_s: float, w_c: float) -> None:
        k = t_s * t_s * w_c * w_c
        den = 4 + 2 * _A * w_c * t_s + k
        j, b = self._J, self._B
        super().__init__(
            b * k + 2 * j * t_s * w_c * w_c,
            2 * b * k,
            b * k - 2 * j * t_s * w_c * w_c,
            -1.0 * (-8 + k * 2) / den,
            -1.0 * (4 - 2 * _A * w_c * t_s + k) / den,
        )

    def input(self, value: float) -> None:
        self._advance(value)

    def output(self) -> float:
        return self._out

    def clear(self) -> None:
        self._reset()


class FF02Filter(_SecondOrderFilter):
    """Feed-forward compensator for a fixed inertia.

    Both history slots are overwritten with the newest sample on every step.
    """

    _J = 0.003216

    def __init__(self, t_s: float, w_c: float) -> None:
        k = t_s * t_s * w_c * w_c
        den = 4 + 2 * _A * w_c * t_s + k
        j = self._J
        super().__init__(
            j * 2 * t_s * w_c * w_c / den,
            0.0,
            -2.0 * j * t_s * w_c * w_c / den,
            -1.0 * (-8 + k * 2) / den,
            -1.0 * (4 - 2 * _A * w_c * t_s + k) / den,
        )

    def input(self, value: float) -> None:
        self._out = self._compute(value)
        self._in_prev = [value, value]
        self._out_prev = [self._out, self._out]

    def output(self) -> float:
        return self._out

    def clear(self) -> None:
        self._reset()


class MovingAverageFilter(Filter):
    """Mean of the last ``num_data`` samples, with unfilled slots counted as zero."""

    def __init__(self, num_data: int) -> None:
        if num_data < 1:
            raise ValueError("num_data must be at least 1")
        self._num_data = num_data
        self._buffer: deque[float] = deque([0.0] * num_data, maxlen=num_data)
        self._sum = 0.0

    def input(self, value: float) -> None:
        self._sum += value - self._buffer[0]
        self._buffer.append(value)

    def output(self) -> float:
        return self._sum / self._num_data

    def clear(self) -> None:
        self._sum = 0.0
        self._buffer = deque([0.0] * self._num_data, maxlen=self._num_data)


class AverageFilter(Filter):
    """First-order estimator that ignores jumps larger than ``limit``."""

    def __init__(self, dt: float, t_const: float, limit: float) -> None:
        self._dt = dt
        self._t_const = t_const
        self._limit = limit
        self._estimate = 0.0

    def input(self, value: float) -> None:
        update = value - self._estimate
        if abs(update) > self._limit:
            update = 0.0
        self._estimate += (self._dt / (self._dt + self._t_const)) * update

    def output(self) -> float:
        return self._estimate

    def clear(self) -> None:
        self._estimate = 0.0


class RampFilter(Filter):
    """Follows the input with its rate of change limited to ``acc``."""

    def __init__(self, acc: float, dt: float) -> None:
        self._acc = acc
        self._dt = dt
        self._last = 0.0

    def input(self, value: float) -> None:
        self._last += _min_abs(value - self._last, self._acc * self._dt)

    def output(self) -> float:
        return self._last

    def clear(self, last_value: float = 0.0) -> None:
        self._last = last_value

    def set_acc(self, acc: float) -> None:
        """Change the rate limit without resetting the output."""
        self._acc = acc


class OneEuroFilter(Filter):
    """Speed-adaptive low-pass filter.

    The reference for the derivative estimate stays at zero, so the derivative
    is taken against zero rather than against the previous sample.
    """

    def __init__(self, freq: float, mincutoff: float, beta: float, dcutoff: float) -> None:
        self.freq = freq
        self.mincutoff = mincutoff
        self.beta = beta
        self.dcutoff = dcutoff
        self._first = True
        self._x_prev = 0.0
        self._hat_x_prev = 0.0
        self._d_hat_x_prev = 0.0
        self._filtered = 0.0

    def alpha(self, cutoff: float, freq: float) -> float:
        """Smoothing factor for a first-order stage at ``cutoff`` Hz."""
        tau = 1.0 / (2 * math.pi * cutoff)
        te = 1.0 / freq
        return 1.0 / (1.0 + tau / te)

    def input(self, value: float) -> None:
        dx = 0.0
        if self._first:
            self._d_hat_x_prev = dx
        else:
            dx = (value - self._x_prev) * self.freq
        a_d = self.alpha(self.dcutoff, self.freq)
        edx = a_d * dx + (1 - a_d) * self._d_hat_x_prev
        self._d_hat_x_prev = edx
        cutoff = self.mincutoff + self.beta * abs(edx)

        if self._first:
            self._hat_x_prev = value
        a = self.alpha(cutoff, self.freq)
        self._filtered = a * value + (1 - a) * self._hat_x_prev
        self._hat_x_prev = self._filtered
        self._first = False

    def output(self) -> float:
        return self._filtered

    def clear(self) -> None:
        self._first = True
        self._x_prev = 0.0
        self._hat_x_prev = 0.0
        self._d_hat_x_prev = 0.0