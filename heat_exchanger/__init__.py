"""
Heat Exchanger Package for the ThermoScale Visualizer

Thermal performance engine and configuration state behind the interactive
heat exchanger configurator.

Modules:
    - performance: Thermal Engine (U, LMTD, Q, efficiency, profile) and sweeps
    - state: Material catalog, Configuration snapshot, ConfigurationStore
    - scene: Geometry-scaling parameters for the 3D viewport
"""

__version__ = "0.1.0"

from .performance import (
    DomainError,
    PerformanceResult,
    ProfileSample,
    compute_performance,
    compute_lmtd,
    fouling_sensitivity,
    material_comparison,
    inlet_temperature_sweep,
)
from .state import (
    Material,
    MATERIALS,
    Configuration,
    ConfigurationStore,
    get_material,
)
from .scene import SceneParameters, scene_parameters
