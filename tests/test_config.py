import math

import pytest

from poisonsim.config import ConfigError, SimulationConfig, check_equilibrium_flux, flux_from_query, parse_float
from poisonsim.constants import DEFAULT_CONSTANTS


def test_default_flux_follows_the_constant_set():
    config = SimulationConfig()
    assert config.flux_override is None
    assert config.flux() == DEFAULT_CONSTANTS.phi_0
    assert config.flux(DEFAULT_CONSTANTS.replace(phi_0=1e13)) == 1e13
    assert config.power_state == 1.0
    assert config.duration_days == 0.0


def test_from_query_reads_all_fields():
    params = {
        "time": "2.5",
        "state": "0.4",
        "lastTime": "1",
        "lastIodine": "1e15",
        "lastXenon": "2e14",
        "lastPromethium": "3e15",
        "lastSamarium": "4e14",
        "phi_0": "1e13",
    }
    config = SimulationConfig.from_query(params)
    assert config.duration_days == 2.5
    assert config.power_state == 0.4
    assert config.start_offset_days == 1.0
    assert config.initial_iodine == 1e15
    assert config.initial_xenon == 2e14
    assert config.initial_promethium == 3e15
    assert config.initial_samarium == 4e14
    assert config.flux() == pytest.approx(0.4e13)


def test_from_query_silently_defaults_garbage():
    config = SimulationConfig.from_query({"time": "abc", "state": "", "phi_0": "fast"})
    assert config.duration_days == 0.0
    assert config.power_state == 1.0
    assert config.flux_override is None
    assert config.flux() == DEFAULT_CONSTANTS.phi_0


def test_from_query_uses_configured_reference_flux():
    config = SimulationConfig.from_query({}, reference_flux=5e12)
    assert config.flux_override == 5e12


def test_strict_mode_rejects_garbage():
    with pytest.raises(ConfigError, match="time"):
        SimulationConfig.from_query({"time": "abc"}, strict=True)


@pytest.mark.parametrize(
    "field, value",
    [
        ("duration_days", -1.0),
        ("power_state", -0.5),
        ("start_offset_days", -2.0),
        ("initial_xenon", -1e10),
        ("duration_days", math.inf),
        ("initial_iodine", math.nan),
        ("flux_override", 0.0),
    ],
)
def test_invalid_values_raise(field, value):
    with pytest.raises(ConfigError, match=field):
        SimulationConfig(**{field: value})


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_parse_float():
    assert parse_float(None, 3.0) == 3.0
    assert parse_float("7", 3.0) == 7.0
    assert parse_float("x", 3.0) == 3.0


def test_flux_from_query_allows_zero_but_not_negative():
    assert flux_from_query({"phi_0": "0"}) == 0.0
    assert flux_from_query({}) == DEFAULT_CONSTANTS.phi_0
    with pytest.raises(ConfigError):
        flux_from_query({"phi_0": "-1"})


@pytest.mark.parametrize("value", [-1.0, math.inf, math.nan])
def test_check_equilibrium_flux_rejects_bad_values(value):
    with pytest.raises(ConfigError, match="phi_0"):
        check_equilibrium_flux(value)
