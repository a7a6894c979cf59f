import dataclasses

import pytest

import config
from heat_exchanger.performance import DomainError
from heat_exchanger.state import (
    Configuration, ConfigurationStore, Material, MATERIALS, get_material,
    resolve_model,
)


def test_catalog():
    names = [m.name for m in MATERIALS]
    assert names == ['Copper', 'Silver', 'Steel', 'Graphite', 'Glass', 'PVC']
    assert get_material('copper').thermal_conductivity == 401.0
    assert get_material('PVC').color == '#f1f5f9'


def test_unknown_material():
    with pytest.raises(ValueError, match='Unknown material'):
        get_material('Unobtainium')


def test_material_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        MATERIALS[0].thermal_conductivity = 1.0


def test_default_configuration():
    cfg = Configuration()
    assert cfg.exchanger_model == 'ShellTube'
    assert cfg.inlet_temperature == 90.0
    assert cfg.mass_flow_rate == 25.0
    assert cfg.exchanger_area == 15.0
    assert cfg.fouling_factor == 0.0005
    assert cfg.component_length == 8.0
    assert cfg.component_radius == 0.3


def test_configuration_rejects_unknown_model():
    with pytest.raises(ValueError, match='Unknown exchanger model'):
        Configuration(exchanger_model='Tesla')


def test_resolve_model_accepts_label():
    assert resolve_model('Plate Heat Exchanger') == 'Plate'
    assert resolve_model('spiral') == 'Spiral'


def test_update_returns_new_snapshot():
    store = ConfigurationStore()
    before = store.configuration

    after = store.update(inlet_temperature=120)

    assert after is store.configuration
    assert after is not before
    assert before.inlet_temperature == 90.0
    assert after.inlet_temperature == 120.0
    assert after.replace(inlet_temperature=90.0) == before


def test_update_applies_slider_clamps():
    store = ConfigurationStore()
    cfg = store.update(inlet_temperature=500, mass_flow_rate=1,
                       fouling_factor=-0.5, component_radius=2.0)

    assert cfg.inlet_temperature == 150.0
    assert cfg.mass_flow_rate == 5.0
    assert cfg.fouling_factor == 0.0
    assert cfg.component_radius == 0.6


def test_update_model_by_label():
    store = ConfigurationStore()
    assert store.update(exchanger_model='Finned Tube').exchanger_model == 'Finned'


def test_update_unknown_field():
    store = ConfigurationStore()
    with pytest.raises(ValueError, match='Unknown configuration field'):
        store.update(pressure=3.0)
    assert store.configuration == Configuration()


def test_clean_system_resets_only_fouling():
    store = ConfigurationStore()
    store.update(fouling_factor=0.004, inlet_temperature=130, exchanger_area=42)
    before = store.configuration
    assert store.performance().efficiency < 100.0

    after = store.clean_system()

    assert after.fouling_factor == 0.0
    assert after.replace(fouling_factor=before.fouling_factor) == before
    assert store.performance().efficiency == 100.0
    assert store.performance().U_overall == store.performance().U_clean


def test_select_material():
    store = ConfigurationStore()
    copper_q = store.performance().Q

    steel = store.select_material('Steel')

    assert steel is get_material('Steel')
    assert store.material is steel
    assert store.performance().Q < copper_q


def test_performance_is_memoized_by_value():
    store = ConfigurationStore()
    first = store.performance()

    assert store.performance() is first
    store.update(inlet_temperature=store.configuration.inlet_temperature)
    assert store.performance() is first

    store.update(mass_flow_rate=60)
    assert store.performance() is not first
    assert store.performance().U_clean > first.U_clean


def test_subscribe_notifies_on_value_change_only():
    store = ConfigurationStore()
    seen = []
    unsubscribe = store.subscribe(lambda cfg, mat: seen.append((cfg, mat.name)))

    store.update(exchanger_area=20)
    store.update(exchanger_area=20)
    store.select_material('Copper')
    store.select_material('Glass')

    assert [(c.exchanger_area, name) for c, name in seen] == [(20.0, 'Copper'), (20.0, 'Glass')]

    unsubscribe()
    store.clean_system()
    assert len(seen) == 2


def test_store_surfaces_domain_error():
    bad = Material(name='Void', thermal_conductivity=0.0, color='#000000')
    store = ConfigurationStore(material=bad)
    with pytest.raises(DomainError):
        store.performance()


def test_nan_passes_clamp_and_is_refused():
    store = ConfigurationStore()
    store.update(mass_flow_rate=float('nan'))
    with pytest.raises(DomainError):
        store.performance()


def test_slider_ranges_cover_defaults():
    for field, (lo, hi, _) in config.SLIDER_RANGES.items():
        assert lo <= config.DEFAULT_OPERATING_POINT[field] <= hi
