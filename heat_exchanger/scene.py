"""
3D Scene Parameters
===================

Geometry-scaling values consumed by the 3D viewport. These read only the
Configuration (model, radius, length, area, flow) and the material colour;
none of the Thermal Engine results feed the scene.

Per-model layout (all lengths in m, radius r = component_radius):
    DoublePipe: shell at 2r around one core tube, stretched along the axis
    ShellTube:  shell at 4r, 7 tubes of radius r/2 on a ring of 2r
    Plate:      8 plates 6r wide, alternating hot/cold channels
    Finned:     core tube with 15 fins of radius 2.5r, stretched along the axis
    Spiral:     hot coil at 4r, cold coil at 3r
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

import config


# Element counts and radii multipliers per model
SHELL_TUBE_COUNT = 7
PLATE_COUNT = 8
FIN_COUNT = 15

# Models that only stretch along the tube axis with area
AXIAL_SCALE_MODELS = ('DoublePipe', 'Finned')


@dataclass(frozen=True)
class Stream:
    """One animated fluid stream."""

    color: str
    speed: float
    spiral_radius: float = 0.0      # m, 0 for straight streams


@dataclass(frozen=True)
class SceneParameters:
    """Everything the viewport needs to draw one exchanger."""

    model: str
    length: float                   # m
    radius: float                   # m
    area_scale: float               # exchanger area / 15 m2
    scale: Tuple[float, float, float]
    material_color: str
    particle_speed: float
    element_count: int              # tubes, plates, fins or coils
    element_radius: float           # m
    streams: Tuple[Stream, ...]


def area_scale(exchanger_area):
    """Scale factor of the 3D model relative to the 15 m2 reference."""
    return exchanger_area / config.AREA_SCALE_REFERENCE


def particle_speed(mass_flow_rate):
    """Per-frame particle advance for a given mass flow rate."""
    return mass_flow_rate / config.PARTICLE_SPEED_DIVISOR + config.PARTICLE_SPEED_BASE


def scene_parameters(cfg, material):
    """Build the scene description for the current snapshot.

    Args:
        cfg: Configuration snapshot
        material: selected Material

    Returns:
        SceneParameters
    """
    s = area_scale(cfg.exchanger_area)
    speed = particle_speed(cfg.mass_flow_rate)
    r = cfg.component_radius
    model = cfg.exchanger_model

    scale = (1.0, s, 1.0) if model in AXIAL_SCALE_MODELS else (s, s, s)
    hot = Stream(color=config.HOT_FLUID_COLOR, speed=speed)

    if model == 'DoublePipe':
        count, elem_r, streams = 1, r, (hot,)
    elif model == 'ShellTube':
        count, elem_r = SHELL_TUBE_COUNT, 0.5 * r
        streams = (hot,) * SHELL_TUBE_COUNT
    elif model == 'Plate':
        count, elem_r = PLATE_COUNT, 3.0 * r
        streams = tuple(
            hot if i % 2 == 0 else Stream(color=config.COLD_FLUID_COLOR, speed=speed)
            for i in range(PLATE_COUNT)
        )
    elif model == 'Finned':
        count, elem_r, streams = FIN_COUNT, 2.5 * r, (hot,)
    else:  # Spiral
        count, elem_r = 2, 4.0 * r
        streams = (
            Stream(color=config.HOT_FLUID_COLOR, speed=speed, spiral_radius=4.0 * r),
            Stream(color=config.COLD_FLUID_COLOR,
                   speed=speed * config.SPIRAL_COLD_SPEED_RATIO, spiral_radius=3.0 * r),
        )

    return SceneParameters(
        model=model,
        length=cfg.component_length,
        radius=r,
        area_scale=s,
        scale=scale,
        material_color=material.color,
        particle_speed=speed,
        element_count=count,
        element_radius=elem_r,
        streams=streams,
    )


def tube_ring_positions(radius, count=SHELL_TUBE_COUNT):
    """(x, z) centres of the shell-and-tube bundle on a ring of 2r.

    Returns:
        np.ndarray of shape (count, 2)
    """
    angle = np.arange(count) * 2.0 * np.pi / count
    ring = 2.0 * radius
    return np.column_stack((ring * np.cos(angle), ring * np.sin(angle)))


def particle_positions(stream, elapsed, length=0.0, count=config.PARTICLES_PER_STREAM,
                       frames=None):
    """Particle positions of one stream at a point in time.

    Straight streams advance by `speed` per frame and wrap from +L/2 to -L/2;
    spiral streams run around a circle at angular rate 2*speed.

    The wrap is modular: the overshoot past +L/2 carries over, so a particle
    reappears slightly above -L/2. The viewport instead snaps a particle to
    exactly -L/2, which drifts the spacing by up to one frame step per lap.

    Args:
        stream: Stream
        elapsed: Elapsed clock time (s), used by spiral streams
        length: Component length (m), used by straight streams
        count: Particles in the stream
        frames: Frames rendered so far (straight streams, default 0)

    Returns:
        np.ndarray of shape (count, 3) with (x, y, z)
    """
    i = np.arange(count)
    pos = np.zeros((count, 3))

    if stream.spiral_radius > 0:
        t = elapsed * stream.speed * 2.0 + i * (2.0 * math.pi / count)
        pos[:, 0] = np.cos(t) * stream.spiral_radius
        pos[:, 2] = np.sin(t) * stream.spiral_radius
        return pos

    if length <= 0:
        return pos

    y0 = (i / count) * length - length / 2.0
    advanced = y0 + (frames or 0) * stream.speed
    pos[:, 1] = np.mod(advanced + length / 2.0, length) - length / 2.0
    return pos
