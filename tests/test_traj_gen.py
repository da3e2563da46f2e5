import pytest

from rmkit.traj_gen import MinTimeTraj, RampTraj


def _ramp():
    traj = RampTraj()
    traj.set_limit(1.0)
    traj.set_state(0.0, 1.0, 0.0)
    return traj


def test_ramp_plan_from_source_case():
    traj = _ramp()
    assert traj.calc(2.5) is True
    t = -1.0
    samples = []
    while not traj.is_reach(t):
        samples.append((t, traj.position(t), traj.velocity(t), traj.acceleration(t)))
        t += 0.01
    assert samples[0][1] == 0.0
    assert samples[0][2] == 0.0
    positions = [p for _, p, _, _ in samples]
    assert all(b >= a - 1e-12 for a, b in zip(positions, positions[1:]))
    assert all(abs(b - a) < 0.02 for a, b in zip(positions, positions[1:]))
    assert all(v >= -1e-9 for _, _, v, _ in samples)
    assert all(abs(a) <= 1.0 + 1e-12 for _, _, _, a in samples)


def test_ramp_endpoints():
    traj = _ramp()
    traj.calc(2.5)
    assert traj.position(2.5) == pytest.approx(1.0)
    assert traj.position(3.0) == 1.0
    assert traj.velocity(3.0) == 0.0
    assert traj.acceleration(-0.5) == 0.0
    assert traj.is_reach(2.5)
    assert not traj.is_reach(2.49)


def test_ramp_velocity_is_derivative_of_position():
    traj = _ramp()
    traj.calc(2.5)
    h = 1e-6
    for t in (0.2, 1.25, 2.3):
        numeric = (traj.position(t + h) - traj.position(t - h)) / (2 * h)
        assert traj.velocity(t) == pytest.approx(numeric, abs=1e-5)


def test_ramp_acceleration_phases():
    traj = _ramp()
    traj.calc(2.5)
    assert traj.acceleration(0.1) == pytest.approx(1.0)
    assert traj.acceleration(1.25) == 0.0
    assert traj.acceleration(2.4) == pytest.approx(-1.0)


def test_ramp_downward_move():
    traj = RampTraj()
    traj.set_limit(1.0)
    traj.set_state(1.0, 0.0, 2.0)
    assert traj.calc(2.5)
    assert traj.position(1.0) == 1.0
    assert traj.position(4.5) == pytest.approx(0.0)
    assert traj.velocity(3.25) < 0.0


def test_ramp_acceleration_too_small():
    traj = RampTraj()
    traj.set_limit(0.1)
    traj.set_state(0.0, 1.0, 0.0)
    assert traj.calc(2.5) is False


def test_min_time_initial_torque_direction():
    ctrl = MinTimeTraj()
    ctrl.set_limit(1.0, 1.0, 0.01)
    ctrl.set_target(1.0)
    assert ctrl.tau(0.0, 0.0) == 1.0
    assert ctrl.tau(2.0, 0.0) == -1.0
    assert not ctrl.is_reach()


def test_min_time_reaches_target_from_source_case():
    ctrl = MinTimeTraj()
    ctrl.set_limit(1.0, 1.0, 0.01)
    ctrl.set_target(1.0)
    s = [0.0, 0.0, 0.0]
    for _ in range(100000):
        if ctrl.is_reach():
            break
        s[2] = ctrl.tau(s[0], s[1]) / 1.0
        s[1] += 0.01 * s[2]
        s[0] += 0.01 * s[1]
    assert ctrl.is_reach()
    assert abs(s[0] - 1.0) <= 0.01
    assert s[2] == 0.0


def test_min_time_set_target_resets_reach():
    ctrl = MinTimeTraj()
    ctrl.set_limit(1.0, 1.0, 0.1)
    ctrl.set_target(0.0)
    assert ctrl.tau(0.05, 0.0) == 0.0
    assert ctrl.is_reach()
    ctrl.set_target(5.0)
    assert not ctrl.is_reach()