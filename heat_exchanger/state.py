"""
Configuration State for the Heat Exchanger Visualizer
======================================================

Holds the current operating point and the selected wall material.

  - Material: immutable catalog record (name, k, display colour)
  - Configuration: immutable snapshot of the configurator controls
  - ConfigurationStore: the single owner of the current snapshot

Every change produces a new Configuration; nothing is mutated in place, so
consumers can detect changes by value equality. The store recomputes the
performance on demand, memoized on (configuration, material).
"""

import dataclasses
import logging
from dataclasses import dataclass

import config
from heat_exchanger.performance import compute_performance

logger = logging.getLogger(__name__)


# =============================================================================
# Material Catalog
# =============================================================================

@dataclass(frozen=True)
class Material:
    """Wall material record."""

    name: str
    thermal_conductivity: float     # W/(m-K)
    color: str                      # display colour (hex)


MATERIALS = tuple(
    Material(name=name, thermal_conductivity=k, color=color)
    for name, (k, color) in config.MATERIAL_DATA.items()
)


def get_material(name):
    """Look up a catalog material by name (case-insensitive).

    Raises:
        ValueError: unknown material name
    """
    for mat in MATERIALS:
        if mat.name.lower() == str(name).lower():
            return mat
    known = ', '.join(m.name for m in MATERIALS)
    raise ValueError(f"Unknown material '{name}'. Choose one of: {known}")


# =============================================================================
# Configuration Snapshot
# =============================================================================

@dataclass(frozen=True)
class Configuration:
    """Current operating point of the configurator."""

    exchanger_model: str = config.DEFAULT_OPERATING_POINT['exchanger_model']
    inlet_temperature: float = config.DEFAULT_OPERATING_POINT['inlet_temperature']   # C
    mass_flow_rate: float = config.DEFAULT_OPERATING_POINT['mass_flow_rate']         # kg/s
    exchanger_area: float = config.DEFAULT_OPERATING_POINT['exchanger_area']         # m2
    fouling_factor: float = config.DEFAULT_OPERATING_POINT['fouling_factor']         # m2-K/W
    component_length: float = config.DEFAULT_OPERATING_POINT['component_length']     # m
    component_radius: float = config.DEFAULT_OPERATING_POINT['component_radius']     # m

    def __post_init__(self):
        if self.exchanger_model not in config.EXCHANGER_MODELS:
            known = ', '.join(config.EXCHANGER_MODELS)
            raise ValueError(
                f"Unknown exchanger model '{self.exchanger_model}'. Choose one of: {known}")

    def replace(self, **changes):
        """Return a new snapshot with the given fields changed (no clamping)."""
        return dataclasses.replace(self, **changes)

    def to_dict(self):
        return dataclasses.asdict(self)


FIELDS = tuple(f.name for f in dataclasses.fields(Configuration))


def resolve_model(model):
    """Accept a model key ('ShellTube') or its display label ('Shell and Tube')."""
    for key, label in config.EXCHANGER_MODELS.items():
        if str(model).lower() in (key.lower(), label.lower()):
            return key
    known = ', '.join(config.EXCHANGER_MODELS)
    raise ValueError(f"Unknown exchanger model '{model}'. Choose one of: {known}")


# =============================================================================
# Configuration Store
# =============================================================================

class ConfigurationStore:
    """Owner of the current Configuration and selected Material.

    Parameters
    ----------
    configuration : Configuration or None
        Initial snapshot. Default: the default operating point.
    material : Material, str or None
        Initial material (record or catalog name). Default: Copper.
    """

    def __init__(self, configuration=None, material=None):
        self._configuration = configuration if configuration is not None else Configuration()
        if material is None:
            material = config.DEFAULT_MATERIAL
        self._material = material if isinstance(material, Material) else get_material(material)
        self._listeners = []
        self._cache_key = None
        self._cache_result = None

    @property
    def configuration(self):
        return self._configuration

    @property
    def material(self):
        return self._material

    # -----------------------------------------------------------------
    #  Mutations
    # -----------------------------------------------------------------

    def update(self, **changes):
        """Merge a partial change into a new snapshot.

        Numeric fields are clamped to their slider ranges, the exchanger
        model may be given by key or display label.

        Returns:
            Configuration: the new current snapshot

        Raises:
            ValueError: unknown field or exchanger model
        """
        unknown = [name for name in changes if name not in FIELDS]
        if unknown:
            raise ValueError(f"Unknown configuration field(s): {', '.join(unknown)}")

        merged = {}
        for name, value in changes.items():
            if name == 'exchanger_model':
                merged[name] = resolve_model(value)
            else:
                merged[name] = config.clamp_to_range(name, value)

        self._commit(self._configuration.replace(**merged), self._material)
        return self._configuration

    def clean_system(self):
        """Reset fouling to zero, leaving every other field untouched."""
        self._commit(self._configuration.replace(fouling_factor=0.0), self._material)
        return self._configuration

    def select_material(self, selection):
        """Select a catalog material by name or by record."""
        mat = selection if isinstance(selection, Material) else get_material(selection)
        self._commit(self._configuration, mat)
        return self._material

    def _commit(self, new_config, new_material):
        if new_config == self._configuration and new_material == self._material:
            return
        self._configuration = new_config
        self._material = new_material
        logger.debug("Configuration changed: %s, material=%s", new_config, new_material.name)
        for callback in list(self._listeners):
            callback(new_config, new_material)

    # -----------------------------------------------------------------
    #  Derived results and change notification
    # -----------------------------------------------------------------

    def performance(self):
        """Performance of the current snapshot (memoized by value)."""
        key = (self._configuration, self._material)
        if key != self._cache_key:
            self._cache_result = compute_performance(*key)
            self._cache_key = key
        return self._cache_result

    def subscribe(self, callback):
        """Call callback(configuration, material) after every value change.

        Returns:
            callable: unsubscribe function
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe
