import struct

import pytest

from rmkit.supercapacitor import (
    RECEIVE_BUFFER_SIZE,
    SuperCapacitor,
    int16_to_float,
)


def half(value):
    return struct.pack(">e", value)


def make_frame(pid, payload):
    assert len(payload) == 8
    data = bytearray()
    flags = 0
    for bit, b in enumerate(payload):
        if b == 0xFF:
            flags |= 1 << bit
            data.append(0x00)
        else:
            data.append(b)
    id_byte = (pid << 4) | ((~pid) & 0x0F)
    return bytes([0xFF, id_byte]) + bytes(data) + bytes([flags, 0xFF])


def status_frame(chassis, limit, buffer, cap):
    return make_frame(0, half(chassis) + half(limit) + half(buffer) + half(cap))


def test_int16_to_float_zero_and_known_patterns():
    assert int16_to_float(0) == 0.0
    assert int16_to_float(0x3C00) == 1.0
    assert int16_to_float(0xC000) == -2.0


@pytest.mark.parametrize("value", [1.0, 0.5, -3.25, 50.0, 120.0, 1000.0])
def test_int16_to_float_matches_half_precision(value):
    (pattern,) = struct.unpack(">H", half(value))
    assert int16_to_float(pattern) == value


def test_read_status_frame():
    cap = SuperCapacitor()
    cap.read(status_frame(50.0, 60.0, 20.0, 0.5), now=10.0)
    assert cap.data.chassis_power == 50.0
    assert cap.data.limit_power == 60.0
    assert cap.data.buffer_power == 20.0
    assert cap.data.cap_power == 0.5
    assert cap.data.is_online is True
    assert cap.last_get_data == 10.0


def test_read_clamps_values():
    cap = SuperCapacitor()
    cap.read(status_frame(200.0, 60.0, 30.0, 2.0), now=1.0)
    assert cap.data.chassis_power == 120.0
    assert cap.data.buffer_power == 25.0
    assert cap.data.cap_power == 1.0
    cap.read(status_frame(-5.0, 60.0, -1.0, 0.25), now=1.01)
    assert cap.data.chassis_power == 0.0
    assert cap.data.buffer_power == 0.0
    assert cap.data.cap_power == 0.25


def test_stuffed_byte_is_restored():
    raw = b"\x3c\xff"
    payload = half(10.0) + raw + half(5.0) + half(0.5)
    assert 0xFF in payload
    cap = SuperCapacitor()
    cap.read(make_frame(0, payload), now=2.0)
    assert cap.data.limit_power == struct.unpack(">e", raw)[0]
    assert cap.data.chassis_power == 10.0


def test_bad_pid_check_is_ignored():
    frame = bytearray(status_frame(50.0, 60.0, 20.0, 0.5))
    frame[1] = 0x00
    cap = SuperCapacitor()
    cap.read(bytes(frame), now=1.0)
    assert cap.data.is_online is False
    assert cap.data.chassis_power == 0.0


def test_other_package_ids_do_not_update():
    cap = SuperCapacitor()
    cap.read(make_frame(1, half(50.0) * 4), now=1.0)
    assert cap.data.is_online is False
    assert cap.last_get_data == 0.0


def test_goes_offline_after_timeout():
    cap = SuperCapacitor()
    cap.read(status_frame(50.0, 60.0, 20.0, 0.5), now=1.0)
    cap.read(b"", now=1.05)
    assert cap.data.is_online is True
    cap.read(b"", now=1.2)
    assert cap.data.is_online is False


def test_last_of_consecutive_frames_wins():
    cap = SuperCapacitor()
    stream = b"\x01\x02" + status_frame(30.0, 60.0, 10.0, 0.5) + status_frame(40.0, 70.0, 15.0, 0.75)
    cap.read(stream, now=3.0)
    assert cap.data.chassis_power == 40.0
    assert cap.data.limit_power == 70.0
    assert cap.data.buffer_power == 15.0
    assert cap.data.cap_power == 0.75


def test_misaligned_delimiters_drop_the_frame():
    cap = SuperCapacitor()
    cap.read(b"\xff\x01\x02" + status_frame(50.0, 60.0, 20.0, 0.5), now=1.0)
    assert cap.data.is_online is False


def test_feed_byte_by_byte():
    cap = SuperCapacitor()
    for byte in status_frame(42.0, 60.0, 20.0, 0.5):
        cap.feed(byte, now=5.0)
    assert cap.data.chassis_power == 42.0
    assert cap.last_get_data == 5.0


def test_feed_rejects_non_byte():
    cap = SuperCapacitor()
    with pytest.raises(ValueError):
        cap.feed(256, now=0.0)


def test_long_read_clears_buffer_past_limit():
    cap = SuperCapacitor()
    stream = bytes(RECEIVE_BUFFER_SIZE + 10) + status_frame(50.0, 60.0, 20.0, 0.5)
    cap.read(stream, now=1.0)
    assert cap.data.is_online is False
    assert cap.data.chassis_power == 0.0


def test_frame_split_across_reads_is_lost():
    frame = status_frame(50.0, 60.0, 20.0, 0.5)
    cap = SuperCapacitor()
    cap.read(frame[:6], now=1.0)
    cap.read(frame[6:], now=1.01)
    assert cap.data.is_online is False