"""Second-order Butterworth low-pass filter driven by sample timestamps."""

from __future__ import annotations

import logging
import math
from time import monotonic

__all__ = ["LowPassFilter"]

_log = logging.getLogger(__name__)


class LowPassFilter:
    """Bilinear-transform Butterworth low-pass filter.

    The coefficient is recomputed from the time elapsed between samples. A
    non-positive ``cutoff_frequency`` keeps the default coefficient, which puts
    the cutoff at a quarter of the sample rate.
    """

    def __init__(self, cutoff_frequency: float = -1.0) -> None:
        self.cutoff_frequency = cutoff_frequency
        self._in = [0.0, 0.0, 0.0]
        self._out = [0.0, 0.0, 0.0]
        self._c = 1.0
        self._tan_filt = 1.0
        self._prev_time = 0.0

    def input(self, value: float, time: float | None = None) -> None:
        """Feed one sample taken at ``time`` seconds (now, if not given)."""
        if time is None:
            time = monotonic()
        self._in = [value, self._in[0], self._in[1]]

        if self._prev_time == 0.0:
            self._prev_time = time
            return
        delta_t = time - self._prev_time
        self._prev_time = time
        if delta_t == 0.0:
            _log.error(
                "delta_t is 0, skipping this loop. Possible overloaded cpu at time: %f", time
            )
            return

        if self.cutoff_frequency > 0:
            tan_filt = math.tan((self.cutoff_frequency * 6.2832) * delta_t / 2.0)
            if -0.01 < tan_filt <= 0.0:
                tan_filt = -0.01
            if 0.0 <= tan_filt < 0.01:
                tan_filt = 0.01
            self._tan_filt = tan_filt
            self._c = 1.0 / tan_filt

        c = self._c
        in0, in1, in2 = self._in
        out1, out2 = self._out[0], self._out[1]
        out0 = (1.0 / (1.0 + c * c + math.sqrt(2.0) * c)) * (
            in2
            + 2.0 * in1
            + in0
            - (c * c - math.sqrt(2.0) * c + 1.0) * out2
            - (-2.0 * c * c + 2.0) * out1
        )
        self._out = [out0, out1, out2]

    def output(self) -> float:
        """Return the latest filtered value."""
        return self._out[0]

    def reset(self) -> None:
        """Clear the input and output history."""
        self._in = [0.0, 0.0, 0.0]
        self._out = [0.0, 0.0, 0.0]