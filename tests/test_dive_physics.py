import math

import numpy as np
import pytest
from physics.dive_physics import DivePhysics, POLAR_MAX, POLAR_MIN
from settings.config import PhysicsConfig

DT = 0.016


@pytest.fixture
def physics():
    return DivePhysics()


def run(physics, frames, dt=DT):
    for _ in range(frames):
        physics.update(dt)


def test_initial_state(physics):
    assert physics.camera_theta == 0.0
    assert physics.camera_phi == pytest.approx(math.pi / 2)
    assert physics.velocity == (0.0, 0.0)
    assert physics.zoom_progress == 0.0
    assert physics.magnetism == 0.0
    assert physics.focused_index == -1
    assert physics.radius == pytest.approx(2.0)
    assert not physics.is_touching


def test_touch_down_and_up(physics):
    physics.on_touch_down(100, 200)
    assert physics.is_touching
    physics.on_touch_up(150, 250)
    assert not physics.is_touching


def test_drag_right_turns_camera(physics):
    physics.on_touch_down(100, 200)
    physics.on_touch_move(200, 200)
    physics.update(DT)

    vx, vy = physics.velocity
    # 100px * 0.003 smoothed by (1 - 0.85)
    assert vx == pytest.approx(0.3 * 0.15)
    assert vy == 0.0
    assert physics.camera_theta > 0.0


def test_drag_down_looks_up(physics):
    physics.on_touch_down(100, 200)
    physics.on_touch_move(100, 300)
    physics.update(DT)
    assert physics.velocity[1] < 0.0
    assert physics.camera_phi < math.pi / 2


def test_move_without_touch_is_ignored(physics):
    physics.on_touch_move(500, 500)
    physics.update(DT)
    assert physics.velocity == (0.0, 0.0)


def test_raw_velocity_cleared_each_step(physics):
    physics.on_touch_down(0, 0)
    physics.on_touch_move(100, 0)
    physics.update(DT)
    v1 = physics.velocity[0]
    physics.update(DT)
    # No new sample: smoothing only pulls toward zero
    assert physics.velocity[0] == pytest.approx(v1 * 0.85)


def test_velocity_decays_after_release(physics):
    physics.on_touch_down(100, 200)
    physics.on_touch_move(300, 200)
    physics.update(DT)
    physics.on_touch_up(300, 200)

    speeds = [physics.speed]
    for _ in range(20):
        physics.update(DT)
        speeds.append(physics.speed)

    assert speeds[-1] < speeds[0]
    assert all(b <= a for a, b in zip(speeds, speeds[1:]))


def test_still_camera_stays_still(physics):
    run(physics, 50)
    assert physics.camera_theta == 0.0
    assert physics.camera_phi == pytest.approx(math.pi / 2)


def test_speed_is_clamped(physics):
    physics.on_touch_down(0, 0)
    physics.on_touch_move(10000, 0)
    physics.update(DT)
    assert physics.speed == pytest.approx(3.0)


def test_focus_tracking(physics):
    physics.set_focused_node(5)
    assert physics.focused_index == 5
    physics.set_focused_node(3)
    assert physics.focused_index == 3
    assert physics.linger_time == 0.0


def test_refocusing_same_node_keeps_commitment(physics):
    physics.on_touch_down(0, 0)
    physics.set_focused_node(2)
    run(physics, 10)
    linger = physics.linger_time
    magnetism = physics.magnetism

    physics.set_focused_node(2)
    assert physics.linger_time == linger
    assert physics.magnetism == magnetism


def test_changing_focus_forfeits_magnetism(physics):
    physics.on_touch_down(0, 0)
    physics.set_focused_node(2)
    run(physics, 10)
    assert physics.magnetism > 0.0

    physics.set_focused_node(4)
    assert physics.magnetism == 0.0
    assert physics.linger_time == 0.0


def test_linger_builds_magnetism(physics):
    physics.on_touch_down(100, 200)
    physics.set_focused_node(2)
    run(physics, 11)
    assert physics.linger_time > physics.config.linger_threshold
    assert physics.magnetism > 0.0
    assert physics.zoom_progress > 0.0


def test_no_magnetism_without_touch(physics):
    physics.set_focused_node(2)
    run(physics, 20)
    assert physics.magnetism == 0.0
    assert physics.zoom_progress == 0.0
    assert physics.linger_time == 0.0


def test_magnetism_decays_without_focus(physics):
    physics.on_touch_down(100, 200)
    physics.set_focused_node(2)
    run(physics, 21)
    zoom = physics.zoom_progress
    assert zoom > 0.0

    physics.set_focused_node(-1)
    physics.update(DT)
    assert physics.zoom_progress < zoom
    run(physics, 20)
    assert physics.magnetism == 0.0
    assert physics.zoom_progress == 0.0


def test_radius_shrinks_with_zoom(physics):
    base = physics.radius
    physics.on_touch_down(100, 200)
    physics.set_focused_node(1)
    run(physics, 100)
    assert physics.zoom_progress == pytest.approx(1.0)
    assert physics.radius == pytest.approx(base * 0.3)


def test_should_select(physics):
    assert not physics.should_select()

    physics.on_touch_down(100, 200)
    physics.set_focused_node(1)
    physics.update(DT)
    assert physics.zoom_progress < 0.95
    assert not physics.should_select()

    run(physics, 200)
    assert physics.zoom_progress >= 0.95
    assert physics.should_select()

    physics.set_focused_node(-1)
    assert not physics.should_select()


def test_phi_clamped_looking_up(physics):
    physics.on_touch_down(100, 200)
    for i in range(100):
        physics.on_touch_move(100, 200 + (i + 1) * 1000)
        physics.update(DT)
        assert POLAR_MIN <= physics.camera_phi <= POLAR_MAX
    assert physics.camera_phi == pytest.approx(POLAR_MIN)


def test_phi_clamped_looking_down(physics):
    physics.on_touch_down(100, 200)
    for i in range(100):
        physics.on_touch_move(100, 200 - (i + 1) * 1000)
        physics.update(DT)
        assert POLAR_MIN <= physics.camera_phi <= POLAR_MAX
    assert physics.camera_phi == pytest.approx(POLAR_MAX)


def test_bad_delta_times_are_dropped(physics):
    physics.on_touch_down(0, 0)
    physics.on_touch_move(100, 0)
    physics.set_focused_node(1)

    physics.update(-1.0)
    physics.update(0.0)
    physics.update(1.0)
    assert physics.camera_theta == 0.0
    assert physics.velocity == (0.0, 0.0)
    assert physics.linger_time == 0.0

    # The pending sample survives the dropped steps
    physics.update(DT)
    assert physics.velocity[0] > 0.0


def test_reset_keeps_camera(physics):
    physics.on_touch_down(100, 200)
    physics.on_touch_move(200, 300)
    physics.update(DT)
    physics.set_focused_node(5)
    run(physics, 30)
    theta, phi = physics.camera_theta, physics.camera_phi

    physics.reset()
    assert physics.camera_theta == theta
    assert physics.camera_phi == phi
    assert physics.zoom_progress == 0.0
    assert physics.magnetism == 0.0
    assert physics.linger_time == 0.0
    assert physics.focused_index == -1
    assert physics.radius == pytest.approx(2.0)


def test_full_reset(physics):
    physics.on_touch_down(100, 200)
    physics.on_touch_move(200, 300)
    physics.update(DT)

    physics.full_reset()
    assert physics.camera_theta == 0.0
    assert physics.camera_phi == pytest.approx(math.pi / 2)
    assert physics.velocity == (0.0, 0.0)
    physics.update(DT)
    assert physics.velocity == (0.0, 0.0)


def test_look_direction_is_unit(physics):
    assert physics.look_direction() == pytest.approx([1.0, 0.0, 0.0], abs=1e-9)

    physics.on_touch_down(0, 0)
    physics.on_touch_move(120, 80)
    run(physics, 5)
    assert np.linalg.norm(physics.look_direction()) == pytest.approx(1.0)


def test_eye_moves_forward_with_zoom(physics):
    assert np.linalg.norm(physics.eye_position()) == 0.0
    physics.on_touch_down(0, 0)
    physics.set_focused_node(0)
    run(physics, 100)
    assert np.linalg.norm(physics.eye_position()) == pytest.approx(2.0 * 0.8)


def test_custom_config():
    physics = DivePhysics(PhysicsConfig(steering_sensitivity=0.01, velocity_smoothing=0.0))
    physics.on_touch_down(0, 0)
    physics.on_touch_move(10, 0)
    physics.update(DT)
    assert physics.velocity[0] == pytest.approx(0.1)


def test_nan_delta_time_is_dropped(physics):
    physics.on_touch_down(0, 0)
    physics.on_touch_move(100, 0)
    physics.set_focused_node(1)

    physics.update(float("nan"))
    assert physics.camera_theta == 0.0
    assert physics.camera_phi == pytest.approx(math.pi / 2)
    assert physics.velocity == (0.0, 0.0)
    assert physics.linger_time == 0.0
    assert np.all(np.isfinite(physics.look_direction()))
