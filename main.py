#!/usr/bin/env python3
"""
ThermoScale Heat Exchanger Analysis - Master Runner
====================================================

Evaluates one heat exchanger operating point from the command line, the
same way the interactive configurator does on every slider change.

Analysis sequence:
  [1/3] Configuration   - Apply the requested controls (slider clamps)
  [2/3] Performance     - U-values, LMTD, heat duty, efficiency, profile
  [3/3] Parametric      - Fouling, material and inlet temperature studies

Usage:
    python main.py --material Steel --temp-in 120 --fouling 0.002
    python main.py --clean --sweep --plot --output results
"""

import argparse
import logging
import os
import sys
import time
from datetime import datetime

import numpy as np

# Ensure project root is on path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

import config
from heat_exchanger.performance import (
    DomainError, print_performance,
    fouling_sensitivity, material_comparison, inlet_temperature_sweep,
    print_fouling_results, print_material_comparison,
)
from heat_exchanger.scene import scene_parameters
from heat_exchanger.state import ConfigurationStore, MATERIALS
from utils.tables import (
    print_param_table, performance_summary, results_to_markdown, results_to_json,
)


# =============================================================================
# Banner
# =============================================================================

BANNER = r"""
================================================================================

     THERMOSCALE
     Precision Thermal Analytics

     Heat exchanger performance: U-value, LMTD, heat duty, fouling

================================================================================
"""

# CLI option -> Configuration field
OPTION_FIELDS = {
    'model': 'exchanger_model',
    'temp_in': 'inlet_temperature',
    'flow': 'mass_flow_rate',
    'area': 'exchanger_area',
    'fouling': 'fouling_factor',
    'length': 'component_length',
    'radius': 'component_radius',
}


# =============================================================================
# Helper
# =============================================================================

def step_header(step, total, title):
    """Print a progress step header."""
    tag = f"[{step}/{total}]"
    print(f"\n{'=' * 80}")
    print(f"  {tag} {title}")
    print(f"{'=' * 80}")


# =============================================================================
# Runners
# =============================================================================

def run_configuration(args):
    """[1/3] Build the store and apply the requested controls."""
    step_header(1, 3, "CONFIGURATION - Operating Point")

    store = ConfigurationStore(material=args.material)
    changes = {
        field: getattr(args, option)
        for option, field in OPTION_FIELDS.items()
        if getattr(args, option) is not None
    }
    if changes:
        store.update(**changes)
    if args.clean:
        store.clean_system()

    cfg = store.configuration
    scene = scene_parameters(cfg, store.material)
    print_param_table("Configurator", [
        ("Unit model", config.EXCHANGER_MODELS[cfg.exchanger_model], ""),
        ("Material", store.material.name, ""),
        ("Inlet temperature", cfg.inlet_temperature, "C"),
        ("Mass flow rate", cfg.mass_flow_rate, "kg/s"),
        ("Total exchanger area", cfg.exchanger_area, "m2"),
        ("Fouling factor", cfg.fouling_factor, "m2-K/W"),
        ("Component length", cfg.component_length, "m"),
        ("Component radius", cfg.component_radius, "m"),
        ("Model area scale", scene.area_scale, ""),
        ("Particle speed", scene.particle_speed, "per frame"),
    ])
    return store


def run_performance(store):
    """[2/3] Thermal Engine for the current snapshot."""
    step_header(2, 3, "PERFORMANCE - Live Calculations")

    result = store.performance()
    print_performance(result, store.configuration, store.material)
    return result


def run_parametric(store, plot=False, figures_dir=None):
    """[3/3] Fouling, material and inlet temperature studies."""
    step_header(3, 3, "PARAMETRIC - Fouling, Material & Inlet Temperature")

    cfg, mat = store.configuration, store.material

    fs = fouling_sensitivity(cfg, mat)
    print_fouling_results(fs)

    mc = material_comparison(cfg, MATERIALS)
    print_material_comparison(mc)

    sweep = inlet_temperature_sweep(cfg, mat)

    if plot:
        from utils.plotting import create_fouling_plot, create_inlet_sweep_plot
        create_fouling_plot(fs, figures_dir=figures_dir)
        create_inlet_sweep_plot(sweep, figures_dir=figures_dir)

    return {'fouling': fs, 'materials': mc, 'inlet_sweep': sweep}


# =============================================================================
# Save results
# =============================================================================

def save_results(store, result, output_dir, plot=False):
    """Save markdown, JSON and (optionally) the profile chart to output_dir."""
    os.makedirs(output_dir, exist_ok=True)
    cfg, mat = store.configuration, store.material

    summary = performance_summary(cfg, mat, result)
    summary["Run"] = f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
    results_to_markdown(summary, os.path.join(output_dir, "summary.md"))
    results_to_json(cfg, mat, result, os.path.join(output_dir, "results.json"))

    if plot:
        from utils.plotting import create_temperature_profile
        create_temperature_profile(result, figures_dir=output_dir)


# =============================================================================
# Main
# =============================================================================

def build_parser():
    """Command-line options, one per configurator control."""
    parser = argparse.ArgumentParser(
        description='ThermoScale heat exchanger performance analysis',
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--model', type=str, default=None, choices=list(config.EXCHANGER_MODELS),
        help='Unit model (presentation only, default: ShellTube)'
    )
    parser.add_argument(
        '--material', type=str, default=config.DEFAULT_MATERIAL,
        help='Wall material:\n  ' + ', '.join(config.MATERIAL_DATA)
             + f'\n  (default: {config.DEFAULT_MATERIAL})'
    )
    parser.add_argument('--temp-in', dest='temp_in', type=float, default=None,
                        help='Inlet temperature in C [40-150] (default: 90)')
    parser.add_argument('--flow', type=float, default=None,
                        help='Mass flow rate in kg/s [5-100] (default: 25)')
    parser.add_argument('--area', type=float, default=None,
                        help='Total exchanger area in m2 [1-50] (default: 15)')
    parser.add_argument('--fouling', type=float, default=None,
                        help='Fouling factor in m2-K/W [0-0.01] (default: 0.0005)')
    parser.add_argument('--length', type=float, default=None,
                        help='Component length in m [2-12] (default: 8)')
    parser.add_argument('--radius', type=float, default=None,
                        help='Component radius in m [0.1-0.6] (default: 0.3)')
    parser.add_argument('--clean', action='store_true',
                        help='Clean system: reset the fouling factor to zero')
    parser.add_argument('--sweep', action='store_true',
                        help='Run fouling, material and inlet temperature studies')
    parser.add_argument('--plot', action='store_true',
                        help='Write PNG figures (requires --output)')
    parser.add_argument('--output', type=str, default=None,
                        help='Output directory for summary.md / results.json')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None):
    """CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    print(BANNER)
    print(f"  Run started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"  Python {sys.version.split()[0]}, NumPy {np.__version__}")

    t_start = time.time()

    try:
        store = run_configuration(args)
        result = run_performance(store)
        if args.sweep:
            run_parametric(store, plot=args.plot and args.output is not None,
                           figures_dir=args.output)
    except DomainError as e:
        print(f"\n  ERROR: refusing to compute: {e}")
        return 2
    except ValueError as e:
        print(f"\n  ERROR: {e}")
        return 2

    if args.output:
        save_results(store, result, args.output, plot=args.plot)

    print(f"\n{'=' * 80}")
    print(f"  ANALYSIS COMPLETE")
    print(f"  Elapsed time:   {time.time() - t_start:.3f} s")
    print(f"{'=' * 80}\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
