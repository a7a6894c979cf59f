"""
ThermoScale - Table Generation Utilities
Formats configuration and performance results for the console and markdown.
"""

import json


def format_value(value, unit=''):
    """Format a numerical value with appropriate precision.

    Selects the number of significant figures based on magnitude:
      >= 1e6   -> scientific notation with 3 significant figures
      >= 100   -> 1 decimal place
      >= 1     -> 3 decimal places
      >= 0.001 -> 4 decimal places
      == 0     -> 0
      < 0.001  -> scientific notation with 3 significant figures

    Args:
        value: Numerical value or string to format
        unit: Optional unit string appended after the value

    Returns:
        str: Formatted value string (unit appended if provided)
    """
    if isinstance(value, str):
        return f"{value} {unit}".strip()
    if isinstance(value, bool):
        return f"{'Yes' if value else 'No'} {unit}".strip()
    if value == 0:
        return f"0 {unit}".strip()
    if abs(value) >= 1e6:
        return f"{value:.3e} {unit}".strip()
    elif abs(value) >= 100:
        return f"{value:.1f} {unit}".strip()
    elif abs(value) >= 1:
        return f"{value:.3f} {unit}".strip()
    elif abs(value) >= 0.001:
        return f"{value:.4f} {unit}".strip()
    else:
        return f"{value:.3e} {unit}".strip()


def markdown_table(title, rows, headers=None):
    """Generate a markdown table string.

    Args:
        title: Table title (rendered as ### heading)
        rows: List of row sequences. Float values are auto-formatted; all
              others are converted via str().
        headers: Column header list (default: Parameter | Value | Unit)

    Returns:
        str: Complete markdown table including title heading
    """
    if headers is None:
        headers = ['Parameter', 'Value', 'Unit']

    lines = [f"\n### {title}\n"]

    lines.append('| ' + ' | '.join(headers) + ' |')
    lines.append('|' + '|'.join(['---'] * len(headers)) + '|')

    for row in rows:
        formatted = []
        for item in row:
            if isinstance(item, float):
                formatted.append(format_value(item))
            else:
                formatted.append(str(item))
        # Pad short rows to match header count
        while len(formatted) < len(headers):
            formatted.append('')
        lines.append('| ' + ' | '.join(formatted) + ' |')

    return '\n'.join(lines)


def profile_table(result):
    """Markdown table of the temperature distribution."""
    rows = [[s.distance, f"{s.T_hot:.1f}", f"{s.T_cold:.1f}"] for s in result.profile]
    return markdown_table('Temperature Distribution', rows,
                          headers=['Distance', 'Hot [C]', 'Cold [C]'])


def print_section_header(title, char='='):
    """Print a formatted section header to the console.

    Args:
        title: Section title string
        char: Border character (default '=')
    """
    width = max(60, len(title) + 4)
    print(f"\n{char * width}")
    print(f"  {title}")
    print(f"{char * width}")


def print_param_table(title, params):
    """Print a formatted parameter table to the console.

    Args:
        title: Table title string
        params: List of (name, value, unit) tuples
    """
    print_section_header(title, '-')
    max_name = max(len(p[0]) for p in params) + 2
    max_val = max(len(format_value(p[1])) for p in params) + 2
    for name, value, unit in params:
        print(f"  {name:<{max_name}} {format_value(value):>{max_val}}  {unit}")
    print()


def performance_summary(cfg, material, result):
    """Collect one operating point into a results dict for results_to_markdown().

    Returns:
        dict: section title -> {parameter: (value, unit)}
    """
    return {
        "Operating Point": {
            "Unit model": (cfg.exchanger_model, ""),
            "Material": (material.name, ""),
            "Thermal conductivity": (material.thermal_conductivity, "W/(m-K)"),
            "Inlet temperature": (cfg.inlet_temperature, "C"),
            "Mass flow rate": (cfg.mass_flow_rate, "kg/s"),
            "Exchanger area": (cfg.exchanger_area, "m2"),
            "Fouling factor": (cfg.fouling_factor, "m2-K/W"),
            "Component length": (cfg.component_length, "m"),
            "Component radius": (cfg.component_radius, "m"),
        },
        "Thermal Performance": {
            "Heat duty (Q)": (result.Q, "kW"),
            "Efficiency": (result.efficiency, "%"),
            "LMTD": (result.LMTD, "K"),
            "U-value (fouled)": (result.U_overall, "W/(m2-K)"),
            "U-value (clean)": (result.U_clean, "W/(m2-K)"),
            "LMTD fallback applied": (result.lmtd_fallback, ""),
        },
        "Temperature Distribution": profile_table(result),
    }


def results_to_markdown(results_dict, filename):
    """Save a nested results dictionary to a markdown file.

    The top-level keys become ## section headings. Values may be:
      - dict  -> items rendered as bullet list; values may be
                 (value, unit) tuples or plain values
      - str   -> rendered verbatim as a paragraph

    Args:
        results_dict: Dict mapping section title -> params (dict or str)
        filename: Output file path
    """
    lines = ["# Heat Exchanger Performance Results\n"]

    for section, params in results_dict.items():
        lines.append(f"\n## {section}\n")
        if isinstance(params, dict):
            for key, val in params.items():
                if isinstance(val, tuple):
                    value, unit = val
                    lines.append(f"- **{key}**: {format_value(value, unit)}")
                else:
                    lines.append(f"- **{key}**: {val}")
        elif isinstance(params, str):
            lines.append(params)

    with open(filename, 'w', encoding='utf-8') as f:
        f.write('\n'.join(lines) + '\n')
    print(f"  Results saved: {filename}")


def results_to_json(cfg, material, result, filename):
    """Dump configuration, material and result to a JSON file."""
    payload = {
        'configuration': cfg.to_dict(),
        'material': {
            'name': material.name,
            'thermal_conductivity': material.thermal_conductivity,
            'color': material.color,
        },
        'performance': result.to_dict(),
    }
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2)
    print(f"  Results saved: {filename}")
