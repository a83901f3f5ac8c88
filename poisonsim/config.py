from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
import math

from .constants import DEFAULT_CONSTANTS, SECONDS_PER_DAY, PhysicalConstants


class ConfigError(ValueError):
    """Raised when a simulation request cannot be turned into a valid config."""


# query name -> (config field, default)
QUERY_FIELDS = {
    "time": ("duration_days", 0.0),
    "state": ("power_state", 1.0),
    "lastTime": ("start_offset_days", 0.0),
    "lastIodine": ("initial_iodine", 0.0),
    "lastXenon": ("initial_xenon", 0.0),
    "lastPromethium": ("initial_promethium", 0.0),
    "lastSamarium": ("initial_samarium", 0.0),
}


@dataclass(frozen=True)
class SimulationConfig:
    """One transient request.

    Times are in days, concentrations in atoms/cm^3, flux in n/cm^2/s.
    ``flux_override`` of None means the reference flux of whichever constant
    set runs the request.
    """
    duration_days: float = 0.0
    power_state: float = 1.0
    start_offset_days: float = 0.0
    initial_iodine: float = 0.0
    initial_xenon: float = 0.0
    initial_promethium: float = 0.0
    initial_samarium: float = 0.0
    flux_override: Optional[float] = None

    def __post_init__(self) -> None:
        for name in (
            "duration_days",
            "power_state",
            "start_offset_days",
            "initial_iodine",
            "initial_xenon",
            "initial_promethium",
            "initial_samarium",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value!r}")
            if value < 0.0:
                raise ConfigError(f"{name} must be >= 0, got {value!r}")
        if self.flux_override is not None and (not math.isfinite(self.flux_override) or self.flux_override <= 0.0):
            raise ConfigError(f"flux_override must be finite and > 0, got {self.flux_override!r}")

    def flux(self, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> float:
        reference = self.flux_override if self.flux_override is not None else constants.phi_0
        return reference * self.power_state

    @property
    def start_seconds(self) -> float:
        return self.start_offset_days * SECONDS_PER_DAY

    @property
    def end_seconds(self) -> float:
        return (self.start_offset_days + self.duration_days) * SECONDS_PER_DAY

    @classmethod
    def from_query(
        cls,
        params: Mapping[str, str],
        reference_flux: Optional[float] = None,
        *,
        strict: bool = False,
    ) -> "SimulationConfig":
        """Build a config from string query parameters.

        Missing or unparsable values fall back to their defaults; with
        ``strict`` an unparsable value raises ConfigError instead. Range
        checks always apply.
        """
        values = {}
        for key, (field_name, default) in QUERY_FIELDS.items():
            values[field_name] = parse_float(params.get(key), default, name=key, strict=strict)
        values["flux_override"] = parse_float(params.get("phi_0"), reference_flux, name="phi_0", strict=strict)
        return cls(**values)


def parse_float(raw: Optional[str], default: Optional[float], *, name: str = "value", strict: bool = False) -> Optional[float]:
    if raw is None:
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        if strict:
            raise ConfigError(f"{name} is not a number: {raw!r}")
        return default


def flux_from_query(
    params: Mapping[str, str],
    reference_flux: Optional[float] = None,
    *,
    strict: bool = False,
) -> float:
    default = reference_flux if reference_flux is not None else DEFAULT_CONSTANTS.phi_0
    return check_equilibrium_flux(parse_float(params.get("phi_0"), default, name="phi_0", strict=strict))


def check_equilibrium_flux(phi: float) -> float:
    """Zero flux is a valid equilibrium request, negative or non-finite is not."""
    if not math.isfinite(phi) or phi < 0.0:
        raise ConfigError(f"phi_0 must be finite and >= 0, got {phi!r}")
    return phi
