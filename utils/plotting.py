"""
ThermoScale - Plotting Utilities
Temperature distribution chart and parametric-study figures.
"""
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np
import os

import config

plt.rcParams['font.size'] = 11
plt.rcParams['figure.figsize'] = (10, 7)
plt.rcParams['figure.dpi'] = 150
plt.rcParams['axes.grid'] = True
plt.rcParams['grid.alpha'] = 0.3
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 13
plt.rcParams['legend.fontsize'] = 10
plt.rcParams['lines.linewidth'] = 1.5

FIGURES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'figures')

COLORS = {
    'primary': '#3b82f6',
    'danger': '#F44336',
    'success': '#4ade80',
    'dark': '#37474F',
    'hot': config.HOT_FLUID_COLOR,
    'cold': config.COLD_FLUID_COLOR,
}


def save_figure(fig, name, figures_dir=None, tight=True):
    """Save figure as PNG.

    Args:
        fig: matplotlib Figure object
        name: Base filename (without extension)
        figures_dir: Output directory (default FIGURES_DIR)
        tight: Apply tight_layout before saving (default True)

    Returns:
        str: Path to saved file
    """
    figures_dir = figures_dir or FIGURES_DIR
    os.makedirs(figures_dir, exist_ok=True)
    path = os.path.join(figures_dir, f'{name}.png')
    if tight:
        fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"  Figure saved: {path}")
    return path


def create_dual_axis_plot(x, y1, y2, xlabel, y1label, y2label, title, filename,
                          figures_dir=None):
    """Create a plot with two y-axes sharing the x-axis.

    Returns:
        str: Path to saved file
    """
    fig, ax1 = plt.subplots()
    ax1.set_xlabel(xlabel)
    ax1.set_ylabel(y1label, color=COLORS['primary'])
    ax1.plot(x, y1, color=COLORS['primary'], linewidth=2)
    ax1.tick_params(axis='y', labelcolor=COLORS['primary'])

    ax2 = ax1.twinx()
    ax2.set_ylabel(y2label, color=COLORS['danger'])
    ax2.plot(x, y2, color=COLORS['danger'], linewidth=2, linestyle='--')
    ax2.tick_params(axis='y', labelcolor=COLORS['danger'])

    ax1.set_title(title)
    return save_figure(fig, filename, figures_dir)


def create_temperature_profile(result, filename='temperature_profile', figures_dir=None):
    """Plot hot and cold fluid temperatures along the exchanger.

    Args:
        result: PerformanceResult
        filename: Base filename for saving (without extension)
        figures_dir: Output directory (default FIGURES_DIR)

    Returns:
        str: Path to saved file
    """
    distance, T_hot, T_cold = result.profile_arrays()

    fig, ax = plt.subplots()
    ax.plot(distance, T_cold, label='Cold Fluid', color=COLORS['cold'],
            linewidth=2, marker='o', markersize=3)
    ax.plot(distance, T_hot, label='Hot Fluid', color=COLORS['hot'],
            linewidth=2, marker='o', markersize=3)

    ax.set_xlabel('Distance Along Exchanger (m)')
    ax.set_ylabel('Temperature (°C)')
    ax.set_title(f'Temperature Distribution (Q = {result.Q:.2f} kW)')
    ax.set_xticks(distance)
    ax.legend(loc='upper right')
    return save_figure(fig, filename, figures_dir)


def create_fouling_plot(results, filename='fouling_sensitivity', figures_dir=None):
    """Plot efficiency and heat duty against fouling resistance.

    Args:
        results: List of (fouling_factor, PerformanceResult)
        filename: Base filename for saving (without extension)
        figures_dir: Output directory (default FIGURES_DIR)

    Returns:
        str: Path to saved file
    """
    rf = np.array([r for r, _ in results])
    eff = np.array([pt.efficiency for _, pt in results])
    Q = np.array([pt.Q for _, pt in results])
    return create_dual_axis_plot(
        rf * 1e3, eff, Q,
        'Fouling Factor (x1e-3 m²K/W)', 'Efficiency (%)', 'Heat Duty (kW)',
        'Fouling Sensitivity', filename, figures_dir,
    )


def create_inlet_sweep_plot(sweep, filename='inlet_temperature_sweep', figures_dir=None):
    """Plot LMTD and heat duty against hot inlet temperature.

    Args:
        sweep: dict from inlet_temperature_sweep()

    Returns:
        str: Path to saved file
    """
    return create_dual_axis_plot(
        sweep['T_in'], sweep['LMTD'], sweep['Q'],
        'Inlet Temperature (°C)', 'LMTD (K)', 'Heat Duty (kW)',
        'Inlet Temperature Sweep', filename, figures_dir,
    )
