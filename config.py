"""
Central Configuration for the ThermoScale Heat Exchanger Visualizer

This file defines ALL fixed parameters in a tiered structure:
  Tier 1: Thermal Engine reference normalizers
  Tier 2: Material catalog and exchanger models
  Tier 3: Operating ranges (UI slider clamps) and default operating point
  Tier 4: Presentation constants (3D scene, chart, alerts)

Temperatures in C, flow in kg/s, area in m2, fouling in m2-K/W, lengths in m.

The Tier 1 values are reference normalizers tuned for the visualizer, not
physical constants. They must stay verbatim for output parity.

Usage:
    import config
    mat = config.get_material('Copper')
"""

import math


# =============================================================================
# TIER 1: THERMAL ENGINE REFERENCE NORMALIZERS
# =============================================================================

# --- Clean-condition coefficient: U0 = (k / L_ref) * (m_dot / m_dot_ref) ---
REFERENCE_LENGTH = 0.05           # m
REFERENCE_FLOW_RATE = 50.0        # kg/s

# --- LMTD anchors ---
COLD_INLET_TEMP = 25.0            # C (cold fluid inlet)
COLD_END_DT = 15.0                # K (cold-end approach, dT2)
LMTD_FALLBACK_ARGUMENT = 1.1      # log argument used when (T_in - 25)/15 <= 0
LMTD_EQUAL_DT_TOLERANCE = 0.01    # K, dT1 ~ dT2 -> arithmetic mean

# --- Temperature profile (linear decay approximation) ---
PROFILE_SAMPLES = 11              # distance indices 0..10
HOT_PROFILE_SLOPE = 15.0          # hot drop per step = Q / 15
COLD_PROFILE_SLOPE = 25.0         # cold rise per step = Q / 25
PROFILE_DECIMALS = 1


# =============================================================================
# TIER 2: MATERIALS AND EXCHANGER MODELS
# =============================================================================

# name -> (thermal conductivity W/m-K, display colour)
MATERIAL_DATA = {
    'Copper':   (401.0, '#b87333'),
    'Silver':   (429.0, '#e5e7eb'),
    'Steel':    (50.0,  '#94a3b8'),
    'Graphite': (140.0, '#334155'),
    'Glass':    (1.1,   '#a5f3fc'),
    'PVC':      (0.19,  '#f1f5f9'),
}
DEFAULT_MATERIAL = 'Copper'

# Presentation selector only, never enters the Thermal Engine
EXCHANGER_MODELS = {
    'ShellTube':  'Shell and Tube',
    'DoublePipe': 'Double Pipe',
    'Plate':      'Plate Heat Exchanger',
    'Finned':     'Finned Tube',
    'Spiral':     'Spiral Exchanger',
}


# =============================================================================
# TIER 3: OPERATING RANGES AND DEFAULT OPERATING POINT
# =============================================================================

# field -> (min, max, step) as imposed by the configurator sliders
SLIDER_RANGES = {
    'inlet_temperature': (40.0, 150.0, 1.0),     # C
    'mass_flow_rate':    (5.0, 100.0, 1.0),      # kg/s
    'exchanger_area':    (1.0, 50.0, 1.0),       # m2
    'fouling_factor':    (0.0, 0.01, 0.0001),    # m2-K/W
    'component_length':  (2.0, 12.0, 1.0),       # m
    'component_radius':  (0.1, 0.6, 0.05),       # m
}

DEFAULT_OPERATING_POINT = {
    'exchanger_model': 'ShellTube',
    'inlet_temperature': 90.0,
    'mass_flow_rate': 25.0,
    'exchanger_area': 15.0,
    'fouling_factor': 0.0005,
    'component_length': 8.0,
    'component_radius': 0.3,
}


def clamp_to_range(field, value):
    """Clamp a numeric field to its slider range.

    Non-finite values pass through unchanged so the engine can reject them.

    Args:
        field: Configuration field name (key of SLIDER_RANGES)
        value: Requested value

    Returns:
        float: Value limited to [min, max]
    """
    lo, hi, _ = SLIDER_RANGES[field]
    value = float(value)
    if not math.isfinite(value):
        return value
    return min(max(value, lo), hi)


# =============================================================================
# TIER 4: PRESENTATION CONSTANTS
# =============================================================================

AREA_SCALE_REFERENCE = 15.0       # m2, area at which the 3D model has scale 1
PARTICLE_SPEED_DIVISOR = 500.0    # speed = m_dot / 500 + base
PARTICLE_SPEED_BASE = 0.02
PARTICLES_PER_STREAM = 12
SPIRAL_COLD_SPEED_RATIO = 0.8

EFFICIENCY_ALERT_THRESHOLD = 80.0  # %, below this the efficiency is flagged

HOT_FLUID_COLOR = '#f87171'
COLD_FLUID_COLOR = '#60a5fa'
