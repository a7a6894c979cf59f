"""
Heat Exchanger Thermal Performance Engine
==========================================

Maps an operating point (Configuration) and a wall material to the derived
thermal quantities shown by the visualizer:
  - Clean and fouled overall heat transfer coefficients (U0, U)
  - Fouling efficiency (U / U0)
  - Log-mean temperature difference (LMTD)
  - Heat duty Q
  - Linear temperature profile along the exchanger (11 samples)

The engine is a pure function: no I/O, no cached state, constant cost.
Parametric studies (fouling sensitivity, material comparison, inlet
temperature sweep) are built on top of it.

References:
  - Incropera & DeWitt, Ch. 11 (LMTD method, fouling resistance)
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import List, Tuple

import numpy as np

import config

logger = logging.getLogger(__name__)


class DomainError(ValueError):
    """A configuration field violates a physical precondition."""


# =============================================================================
# Result Dataclasses
# =============================================================================

@dataclass(frozen=True)
class ProfileSample:
    """One point of the temperature distribution chart."""

    distance: int               # distance index along the exchanger (0..10)
    T_hot: float                # C, hot fluid temperature (1 decimal)
    T_cold: float               # C, cold fluid temperature (1 decimal)


@dataclass(frozen=True)
class PerformanceResult:
    """Derived performance at one operating point. Never persisted."""

    U_clean: float              # W/(m2-K), coefficient ignoring fouling
    U_overall: float            # W/(m2-K), coefficient including fouling
    efficiency: float           # %, U / U_clean * 100
    LMTD: float                 # K, log-mean temperature difference
    Q: float                    # kW, heat duty
    profile: Tuple[ProfileSample, ...]
    lmtd_fallback: bool = False  # True when the LMTD log was degenerate

    def profile_arrays(self):
        """Return (distance, T_hot, T_cold) as numpy arrays for plotting."""
        distance = np.array([s.distance for s in self.profile], dtype=int)
        T_hot = np.array([s.T_hot for s in self.profile])
        T_cold = np.array([s.T_cold for s in self.profile])
        return distance, T_hot, T_cold

    def to_dict(self):
        return asdict(self)


# =============================================================================
# Input Checks
# =============================================================================

def check_inputs(cfg, material):
    """Reject operating points for which the engine is ill-defined.

    Args:
        cfg: Configuration snapshot
        material: Material record

    Raises:
        DomainError: non-finite input, non-positive conductivity, flow or
            area, or negative fouling resistance
    """
    values = {
        'thermal_conductivity': material.thermal_conductivity,
        'inlet_temperature': cfg.inlet_temperature,
        'mass_flow_rate': cfg.mass_flow_rate,
        'exchanger_area': cfg.exchanger_area,
        'fouling_factor': cfg.fouling_factor,
    }
    for name, value in values.items():
        if not math.isfinite(value):
            raise DomainError(f"{name} must be finite, got {value}")

    for name in ('thermal_conductivity', 'mass_flow_rate', 'exchanger_area'):
        if values[name] <= 0:
            raise DomainError(f"{name} must be positive, got {values[name]}")

    if cfg.fouling_factor < 0:
        raise DomainError(f"fouling_factor must be >= 0, got {cfg.fouling_factor}")


# =============================================================================
# Engine Steps
# =============================================================================

def clean_coefficient(k, m_dot):
    """Clean-condition heat transfer coefficient.

    U0 = (k / 0.05) * (m_dot / 50). Linear in both wall conductivity and
    flow; the normalizers are reference values, not a convection correlation.

    Args:
        k: Wall thermal conductivity (W/m-K)
        m_dot: Mass flow rate (kg/s)

    Returns:
        float: U0 in W/(m2-K)
    """
    return (k / config.REFERENCE_LENGTH) * (m_dot / config.REFERENCE_FLOW_RATE)


def overall_coefficient(U_clean, fouling):
    """Series combination of the clean resistance and the fouling resistance.

    U = 1 / (1/U0 + R_f)

    Args:
        U_clean: Clean coefficient U0 (W/(m2-K))
        fouling: Fouling resistance R_f (m2-K/W)

    Returns:
        float: U in W/(m2-K), never above U0

    A positive fouling resistance below the float resolution of 1/U0
    (e.g. 1e-20 against U0 ~ 4000) still yields U == U0; U < U0 holds
    strictly only for fouling resolvable at that magnitude.
    """
    if fouling == 0:
        return U_clean
    return min(1.0 / ((1.0 / U_clean) + fouling), U_clean)


def fouling_efficiency(U, U_clean):
    """Ratio of fouled to clean performance in percent."""
    return (U / U_clean) * 100.0


def compute_lmtd(T_in):
    """Log-mean temperature difference against the fixed cold stream.

    dT1 = T_in - 25 (hot end), dT2 = 15 (cold end):
        LMTD = (T_in - 40) / ln((T_in - 25) / 15)

    Degenerate cases are resolved here and never raised:
      - log argument <= 0: divide by ln(1.1) instead
      - dT1 ~ dT2: the 0/0 limit, LMTD = (dT1 + dT2) / 2

    Args:
        T_in: Hot fluid inlet temperature (C)

    Returns:
        tuple: (LMTD in K, True if a degenerate branch was taken)
    """
    dT1 = T_in - config.COLD_INLET_TEMP
    dT2 = config.COLD_END_DT
    ratio = dT1 / dT2
    numerator = T_in - (config.COLD_INLET_TEMP + config.COLD_END_DT)

    if ratio <= 0:
        logger.debug("LMTD log argument %.4g <= 0 at T_in=%.2f C, using fallback %.2f",
                     ratio, T_in, config.LMTD_FALLBACK_ARGUMENT)
        return numerator / math.log(config.LMTD_FALLBACK_ARGUMENT), True

    if abs(numerator) < config.LMTD_EQUAL_DT_TOLERANCE:
        logger.debug("Equal terminal differences at T_in=%.2f C, LMTD = mean", T_in)
        return (dT1 + dT2) / 2.0, True

    return numerator / math.log(ratio), False


def heat_duty(U, area, LMTD):
    """Heat duty Q = U * A * LMTD, in kW."""
    return (U * area * LMTD) / 1000.0


def temperature_profile(T_in, Q):
    """Linear hot/cold temperature decay along the exchanger.

    T_hot(i) = T_in - i * Q/15, T_cold(i) = 25 + i * Q/25 for i = 0..10,
    rounded to one decimal. A presentation approximation, not a spatial
    discretization of the energy equation.

    Args:
        T_in: Hot fluid inlet temperature (C)
        Q: Heat duty (kW)

    Returns:
        tuple of ProfileSample
    """
    hot_step = Q / config.HOT_PROFILE_SLOPE
    cold_step = Q / config.COLD_PROFILE_SLOPE
    n = config.PROFILE_DECIMALS
    return tuple(
        ProfileSample(
            distance=i,
            T_hot=round(T_in - i * hot_step, n),
            T_cold=round(config.COLD_INLET_TEMP + i * cold_step, n),
        )
        for i in range(config.PROFILE_SAMPLES)
    )


def compute_performance(cfg, material):
    """Compute the thermal performance of one operating point.

    The exchanger model and component geometry do not enter the calculation.

    Args:
        cfg: Configuration snapshot
        material: Material record

    Returns:
        PerformanceResult

    Raises:
        DomainError: see check_inputs()
    """
    check_inputs(cfg, material)

    U_clean = clean_coefficient(material.thermal_conductivity, cfg.mass_flow_rate)
    if not math.isfinite(U_clean) or U_clean <= 0:
        raise DomainError(
            f"clean coefficient U0={U_clean} is not a positive finite number "
            f"(k={material.thermal_conductivity}, m_dot={cfg.mass_flow_rate})")

    U = overall_coefficient(U_clean, cfg.fouling_factor)
    efficiency = fouling_efficiency(U, U_clean)
    LMTD, degenerate = compute_lmtd(cfg.inlet_temperature)
    Q = heat_duty(U, cfg.exchanger_area, LMTD)
    if not math.isfinite(Q):
        raise DomainError(f"heat duty Q={Q} is not finite (area={cfg.exchanger_area})")

    return PerformanceResult(
        U_clean=U_clean,
        U_overall=U,
        efficiency=efficiency,
        LMTD=LMTD,
        Q=Q,
        profile=temperature_profile(cfg.inlet_temperature, Q),
        lmtd_fallback=degenerate,
    )


# =============================================================================
# Parametric Studies
# =============================================================================

def fouling_sensitivity(cfg, material, fouling_factors=None):
    """Evaluate performance degradation with increasing fouling.

    Args:
        cfg: Base Configuration (fouling_factor is overridden)
        material: Material record
        fouling_factors: Fouling resistances in m2-K/W
                         (default: 0 to 0.01 in 11 steps)

    Returns:
        list of (fouling_factor, PerformanceResult)
    """
    if fouling_factors is None:
        fouling_factors = np.linspace(0.0, 0.01, 11)

    results = []
    for rf in fouling_factors:
        pt = compute_performance(cfg.replace(fouling_factor=float(rf)), material)
        results.append((float(rf), pt))

    return results


def material_comparison(cfg, materials):
    """Evaluate the same operating point for every material.

    Returns:
        list of (Material, PerformanceResult)
    """
    return [(mat, compute_performance(cfg, mat)) for mat in materials]


def inlet_temperature_sweep(cfg, material, temperatures=None):
    """Heat duty and LMTD over a range of hot inlet temperatures.

    Args:
        cfg: Base Configuration (inlet_temperature is overridden)
        material: Material record
        temperatures: Inlet temperatures in C (default: slider range, 10 C steps)

    Returns:
        dict with keys 'T_in', 'LMTD', 'Q' (numpy arrays)
    """
    if temperatures is None:
        lo, hi, _ = config.SLIDER_RANGES['inlet_temperature']
        temperatures = np.arange(lo, hi + 1.0, 10.0)

    temperatures = np.asarray(temperatures, dtype=float)
    LMTD = np.zeros_like(temperatures)
    Q = np.zeros_like(temperatures)
    for i, T in enumerate(temperatures):
        pt = compute_performance(cfg.replace(inlet_temperature=float(T)), material)
        LMTD[i] = pt.LMTD
        Q[i] = pt.Q

    return {'T_in': temperatures, 'LMTD': LMTD, 'Q': Q}


# =============================================================================
# Printing
# =============================================================================

def efficiency_label(efficiency):
    """Efficiency as displayed, flagged LOW under the alert threshold."""
    flag = '  LOW' if efficiency < config.EFFICIENCY_ALERT_THRESHOLD else ''
    return f"{efficiency:.1f}%{flag}"


def print_performance(result, cfg=None, material=None):
    """Print formatted performance summary.

    Args:
        result: PerformanceResult
        cfg: Configuration shown in the header (optional)
        material: Material shown in the header (optional)
    """
    print("=" * 72)
    print("   LIVE CALCULATIONS - Heat Exchanger Performance")
    print("=" * 72)

    if cfg is not None:
        print("\n--- Operating Point ---")
        print(f"  Unit model:                 {config.EXCHANGER_MODELS[cfg.exchanger_model]:>20s}")
        if material is not None:
            print(f"  Material:                   {material.name:>20s}")
            print(f"  Thermal conductivity:       {material.thermal_conductivity:10.2f} W/(m-K)")
        print(f"  Inlet temperature:          {cfg.inlet_temperature:10.1f} C")
        print(f"  Mass flow rate:             {cfg.mass_flow_rate:10.1f} kg/s")
        print(f"  Exchanger area:             {cfg.exchanger_area:10.1f} m2")
        print(f"  Fouling factor:             {cfg.fouling_factor:10.4f} m2-K/W")

    print("\n--- Thermal Performance ---")
    print(f"  Heat duty (Q):              {result.Q:10.2f} kW")
    print(f"  Efficiency:                 {efficiency_label(result.efficiency):>10s}")
    print(f"  LMTD:                       {result.LMTD:10.2f} K"
          f"{'  (fallback)' if result.lmtd_fallback else ''}")
    print(f"  U-value (fouled):           {result.U_overall:10.1f} W/(m2-K)")
    print(f"  U-value (clean):            {result.U_clean:10.1f} W/(m2-K)")

    print("\n--- Temperature Distribution ---")
    print(f"  {'Dist':>6s}  {'Hot [C]':>9s}  {'Cold [C]':>9s}")
    print("  " + "-" * 28)
    for s in result.profile:
        print(f"  {s.distance:6d}  {s.T_hot:9.1f}  {s.T_cold:9.1f}")

    print("\n" + "=" * 72)


def print_fouling_results(results: List[tuple]):
    """Print fouling sensitivity table.

    Args:
        results: List of (fouling_factor, PerformanceResult)
    """
    print("=" * 60)
    print("   FOULING SENSITIVITY ANALYSIS")
    print("=" * 60)

    header = (f"  {'R_f':>8s}  {'U [W/m2K]':>10s}  {'Eff [%]':>8s}  "
              f"{'Q [kW]':>9s}")
    print(header)
    print("  " + "-" * 42)

    for rf, pt in results:
        print(f"  {rf:8.4f}  "
              f"{pt.U_overall:10.1f}  "
              f"{pt.efficiency:8.1f}  "
              f"{pt.Q:9.2f}")

    print()


def print_material_comparison(results):
    """Print material comparison table.

    Args:
        results: List of (Material, PerformanceResult)
    """
    print("=" * 60)
    print("   MATERIAL COMPARISON")
    print("=" * 60)

    header = (f"  {'Material':<10s}  {'k [W/mK]':>9s}  {'U0':>9s}  {'U':>9s}  "
              f"{'Q [kW]':>9s}")
    print(header)
    print("  " + "-" * 54)

    for mat, pt in results:
        print(f"  {mat.name:<10s}  "
              f"{mat.thermal_conductivity:9.2f}  "
              f"{pt.U_clean:9.1f}  "
              f"{pt.U_overall:9.1f}  "
              f"{pt.Q:9.2f}")

    print()
