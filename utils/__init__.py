"""Console tables and figures for the ThermoScale reports."""
