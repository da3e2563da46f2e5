"""Decoder for the super-capacitor controller's byte-stuffed status frames.

A frame is 12 bytes: ``0xFF``, an id byte whose high nibble is the package id
and whose low nibble is its complement, eight data bytes, a flag byte and a
closing ``0xFF``. Data bytes that were ``0xFF`` are sent as another value and
marked by the matching bit of the flag byte.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from time import monotonic
from typing import Iterable

__all__ = [
    "RECEIVE_BUFFER_SIZE",
    "CapacityData",
    "int16_to_float",
    "SuperCapacitor",
]

RECEIVE_BUFFER_SIZE = 1024
_DELIMITER = 0xFF
_FRAME_SPAN = 11
_OFFLINE_TIMEOUT = 0.1
_MAX_CHASSIS_POWER = 120.0
_MAX_BUFFER_POWER = 25.0
_MAX_CAP_POWER = 1.0


def int16_to_float(data: int) -> float:
    """Expand a 16-bit half-precision pattern into a float.

    Zero maps to zero; every other pattern is treated as a normal number.
    """
    data &= 0xFFFF
    if data == 0:
        return 0.0
    bits = (
        ((data & 0x8000) << 16)
        | (((((data >> 10) & 0x1F) - 0x0F + 0x7F) & 0xFF) << 23)
        | ((data & 0x03FF) << 13)
    )
    return struct.unpack("<f", struct.pack("<I", bits & 0xFFFFFFFF))[0]


@dataclass
class CapacityData:
    """Latest state reported by the super-capacitor controller."""

    chassis_power: float = 0.0
    limit_power: float = 0.0
    buffer_power: float = 0.0
    cap_power: float = 0.0
    is_online: bool = False


class SuperCapacitor:
    """Parses status frames and keeps the latest capacitor state."""

    def __init__(self) -> None:
        self.data = CapacityData()
        self.last_get_data = 0.0
        self._buffer = bytearray()

    def read(self, rx_buffer: Iterable[int], now: float | None = None) -> None:
        """Parse one batch of received bytes, starting from an empty buffer."""
        if now is None:
            now = monotonic()
        self._buffer.clear()
        for count, byte in enumerate(rx_buffer, 1):
            self.feed(byte, now)
            if count >= RECEIVE_BUFFER_SIZE:
                self._buffer.clear()

        data = self.data
        if data.chassis_power >= _MAX_CHASSIS_POWER:
            data.chassis_power = _MAX_CHASSIS_POWER
        if data.chassis_power <= 0.0:
            data.chassis_power = 0.0
        if data.buffer_power >= _MAX_BUFFER_POWER:
            data.buffer_power = _MAX_BUFFER_POWER
        if data.buffer_power <= 0.0:
            data.buffer_power = 0.0
        if data.cap_power >= _MAX_CAP_POWER:
            data.cap_power = _MAX_CAP_POWER
        if now - self.last_get_data > _OFFLINE_TIMEOUT:
            data.is_online = False

    def feed(self, byte: int, now: float | None = None) -> None:
        """Append one byte and handle a frame if one is now complete."""
        buf = self._buffer
        buf.append(byte)
        sof = buf.find(_DELIMITER)
        if sof < 0:
            return
        eof = buf.find(_DELIMITER, sof + 1)
        if eof < 0:
            return
        if eof - sof != _FRAME_SPAN:
            buf.clear()
            return
        frame = bytes(buf[sof : eof + 1])
        del buf[: eof + 1]
        self._handle_frame(frame, monotonic() if now is None else now)

    def _handle_frame(self, frame: bytes, now: float) -> None:
        pid = frame[1] >> 4
        if pid != (~(frame[1] & 0x0F)) & 0x0F:
            return
        payload = bytearray(frame[2:10])
        flags = frame[10]
        for bit in range(8):
            if (flags >> bit) & 1:
                payload[bit] = 0xFF
        if pid == 0:
            self._receive_status(payload, now)

    def _receive_status(self, payload: bytes, now: float) -> None:
        self.last_get_data = now
        values = [
            int16_to_float(payload[i] << 8 | payload[i + 1]) for i in range(0, 8, 2)
        ]
        data = self.data
        data.is_online = True
        data.chassis_power, data.limit_power, data.buffer_power, data.cap_power = values