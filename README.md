# rmkit

Building blocks for the control software of small competition robots:
discrete-time filters, simple trajectory generators, an LQR gain solver,
quaternion helpers, a piecewise-linear lookup table and a decoder for the
status frames of a super-capacitor board.

## Installation

```
pip install rmkit
```

For running the test suite:

```
pip install "rmkit[test]"
pytest
```

## What is inside

| Module | Contents |
| --- | --- |
| `rmkit.filters` | `Filter` base class and `ButterworthFilter`, `DigitalLpFilter`, `MovingAverageFilter`, `DerivLpFilter`, `FF01Filter`, `FF02Filter`, `AverageFilter`, `RampFilter`, `OneEuroFilter` |
| `rmkit.lp_filter` | `LowPassFilter`, a second-order Butterworth low-pass driven by timestamps |
| `rmkit.kalman_filter` | `KalmanFilter` for linear systems |
| `rmkit.linear_interpolation` | `LinearInterp`, piecewise-linear lookup over sorted points |
| `rmkit.traj_gen` | `RampTraj` (accelerate, cruise, decelerate profile) and `MinTimeTraj` (bang-bang controller) |
| `rmkit.lqr` | `Lqr` and `solve_riccati_arimoto_potter` |
| `rmkit.ori_tool` | `Quaternion`, `quat_to_rpy`, `yaw_from_quat`, `average_quaternion`, `rotation_matrix_to_quaternion` |
| `rmkit.config` | `get_double`, `get_field_double`, `get_member_double` for numeric values read from configuration |
| `rmkit.supercapacitor` | `SuperCapacitor` stream decoder, `CapacityData`, `int16_to_float` |

## Filters

Every filter in `rmkit.filters` has the same three operations: feed a
sample with `input`, read the current estimate with `output`, and reset
with `clear`.

```python
from rmkit.filters import MovingAverageFilter, OneEuroFilter

avg = MovingAverageFilter(4)
for sample in (1.0, 2.0, 3.0, 4.0):
    avg.input(sample)
print(avg.output())  # 2.5

smooth = OneEuroFilter(120.0, 2.543785, 0.000001, 1.0)
smooth.input(0.3)
print(smooth.output())
```

`LowPassFilter` in `rmkit.lp_filter` takes a timestamp in seconds with
each sample (`input(value, time)`); without one it uses the monotonic
clock. Its history is cleared with `reset`.

## Kalman filter

```python
import numpy as np
from rmkit.kalman_filter import KalmanFilter

kf = KalmanFilter(
    a=[[1.0, 0.001], [0.0, 1.0]],
    b=np.zeros((2, 2)),
    h=np.eye(2),
    q=300.0 * np.eye(2),
    r=2000.0 * np.eye(2),
)
kf.clear([0.0, 0.0])          # nothing happens until an initial state is set
kf.predict([0.0, 0.0])
kf.update([1.0, 0.0])
print(kf.state())
```

## Lookup table

```python
from rmkit.linear_interpolation import LinearInterp

table = LinearInterp([(0.0, 0.0), (10.0, 5.0)])
print(table.output(4.0))   # 2.0
print(table.output(20.0))  # 5.0, clamped to the last point
```

Points must be sorted by abscissa; otherwise `ValueError` is raised.

## Trajectories

```python
from rmkit.traj_gen import RampTraj

traj = RampTraj()
traj.set_limit(1.0)           # maximum acceleration
traj.set_state(0.0, 1.0, 0.0) # start, end, start time
if traj.calc(2.5):            # total duration
    print(traj.position(1.0), traj.velocity(1.0), traj.acceleration(1.0))
```

`calc` returns `False` when the acceleration limit is too small to cover
the distance in the requested time.

## LQR

```python
import numpy as np
from rmkit.lqr import Lqr

a = np.array([[0.0, 1.0], [0.0, 0.0]])
b = np.array([[0.0], [1.0]])
q = np.eye(2)
r = np.eye(1)

lqr = Lqr(a, b, q, r)
if lqr.compute_k():
    print(lqr.k())
```

`compute_k` returns `False` when `q` is not symmetric positive
semi-definite or `r` is not symmetric positive definite.

## Super-capacitor board

`SuperCapacitor` consumes the byte stream of the capacitor controller,
either a batch at a time with `read(rx_buffer, now)` or byte by byte with
`feed(byte, now)`, and keeps the latest chassis power, power limit,
buffer energy and capacitor charge in its `data` attribute, a
`CapacityData` record. After `read`, chassis power is limited to 0–120,
buffer energy to 0–25 and capacitor charge to at most 1, and `is_online`
turns false when no status frame has arrived for more than 0.1 s.

## What this package does not do

rmkit works on values and bytes that you hand to it. It opens no serial
ports or other devices, does not decode the remote-control receiver, and
ships no command-line program; reading the hardware and publishing the
results is left to the application that uses it.