import numpy as np
import pytest

import config
from heat_exchanger.scene import (
    area_scale, particle_speed, scene_parameters, tube_ring_positions,
    particle_positions, Stream,
)
from heat_exchanger.state import Configuration, get_material


COPPER = get_material('Copper')


def test_area_scale_reference():
    assert area_scale(15.0) == 1.0
    assert area_scale(30.0) == 2.0


def test_particle_speed():
    assert particle_speed(25.0) == pytest.approx(0.07)


def test_axial_models_stretch_along_axis_only():
    for model in ('DoublePipe', 'Finned'):
        scene = scene_parameters(Configuration(exchanger_model=model, exchanger_area=30.0), COPPER)
        assert scene.scale == (1.0, 2.0, 1.0)


def test_uniform_models_scale_everywhere():
    for model in ('ShellTube', 'Plate', 'Spiral'):
        scene = scene_parameters(Configuration(exchanger_model=model, exchanger_area=30.0), COPPER)
        assert scene.scale == (2.0, 2.0, 2.0)


def test_shell_tube_layout():
    scene = scene_parameters(Configuration(component_radius=0.4), COPPER)

    assert scene.element_count == 7
    assert scene.element_radius == pytest.approx(0.2)
    assert scene.material_color == COPPER.color
    assert len(scene.streams) == 7


def test_plate_streams_alternate():
    scene = scene_parameters(Configuration(exchanger_model='Plate'), COPPER)
    colors = [s.color for s in scene.streams]

    assert colors[0] == config.HOT_FLUID_COLOR
    assert colors[1] == config.COLD_FLUID_COLOR
    assert len(colors) == 8


def test_spiral_coils():
    cfg = Configuration(exchanger_model='Spiral', component_radius=0.5, mass_flow_rate=50.0)
    hot, cold = scene_parameters(cfg, COPPER).streams

    assert hot.spiral_radius == pytest.approx(2.0)
    assert cold.spiral_radius == pytest.approx(1.5)
    assert cold.speed == pytest.approx(0.8 * hot.speed)


def test_tube_ring_positions():
    pos = tube_ring_positions(0.3)

    assert pos.shape == (7, 2)
    np.testing.assert_allclose(np.hypot(pos[:, 0], pos[:, 1]), 0.6)
    np.testing.assert_allclose(pos[0], [0.6, 0.0], atol=1e-12)


def test_straight_particles_wrap_inside_component():
    stream = Stream(color='#fff', speed=0.07)
    pos = particle_positions(stream, elapsed=0.0, length=8.0, frames=1000)

    assert pos.shape == (12, 3)
    assert np.all(pos[:, 1] >= -4.0)
    assert np.all(pos[:, 1] < 4.0)
    assert np.all(pos[:, [0, 2]] == 0.0)


def test_spiral_particles_on_circle():
    stream = Stream(color='#fff', speed=0.1, spiral_radius=1.2)
    pos = particle_positions(stream, elapsed=3.5)

    np.testing.assert_allclose(np.hypot(pos[:, 0], pos[:, 2]), 1.2)
    assert np.all(pos[:, 1] == 0.0)


def test_straight_wrap_carries_overshoot():
    # lead particle of an 8 m tube starts at 3.3333 m, 0.7 m step overshoots +L/2
    stream = Stream(color='#fff', speed=0.7)
    pos = particle_positions(stream, elapsed=0.0, length=8.0, count=12, frames=1)

    assert pos[11, 1] == pytest.approx(3.0 + 1.0 / 3.0 + 0.7 - 8.0)
    assert pos[11, 1] > -4.0
