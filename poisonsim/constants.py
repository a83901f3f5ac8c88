from __future__ import annotations

from dataclasses import dataclass, fields, replace
import math

BARN_CM2: float = 1e-24
SECONDS_PER_DAY: float = 24.0 * 60.0 * 60.0


@dataclass(frozen=True)
class PhysicalConstants:
    """Nuclear data for the iodine/xenon and promethium/samarium chains.

    Attributes
    ----------
    gamma_i, gamma_xe, gamma_pm: float
        Cumulative fission yields of I-135, Xe-135 and Pm-149
    lambda_i, lambda_xe, lambda_pm: float
        Decay constants (1/s)
    sigma_a_xe, sigma_a_sm: float
        Microscopic absorption cross sections of Xe-135 and Sm-149 (cm^2)
    sigma_f: float
        Macroscopic fission cross section (1/cm)
    sigma_a: float
        Macroscopic absorption cross section used to normalize reactivity (1/cm)
    phi_0: float
        Reference neutron flux at full power (n/cm^2/s)
    """

    gamma_i: float
    gamma_xe: float
    gamma_pm: float
    lambda_i: float
    lambda_xe: float
    lambda_pm: float
    sigma_a_xe: float
    sigma_a_sm: float
    sigma_f: float
    sigma_a: float
    phi_0: float

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{f.name} must be finite and > 0, got {value!r}")

    @classmethod
    def with_absorption_split(
        cls,
        fuel_absorption: float,
        moderator_absorption: float,
        **values: float,
    ) -> "PhysicalConstants":
        """Build a constant set whose Sigma_a is the fuel + moderator sum."""
        base = {f.name: getattr(DEFAULT_CONSTANTS, f.name) for f in fields(cls)}
        base.update(values)
        base["sigma_a"] = fuel_absorption + moderator_absorption
        return cls(**base)

    def replace(self, **changes: float) -> "PhysicalConstants":
        return replace(self, **changes)

    @property
    def xenon_critical_flux(self) -> float:
        """Flux at which xenon burnout equals xenon decay, lambda_Xe / sigma_a_Xe."""
        return self.lambda_xe / self.sigma_a_xe


DEFAULT_CONSTANTS = PhysicalConstants(
    gamma_i=6.386e-2,
    gamma_xe=2.28e-3,
    gamma_pm=1.13e-2,
    lambda_i=2.87e-5,
    lambda_xe=2.09e-5,
    lambda_pm=3.58e-6,
    sigma_a_xe=2.65e6 * BARN_CM2,
    sigma_a_sm=4.014e4 * BARN_CM2,
    sigma_f=0.066,
    sigma_a=0.15,
    phi_0=2.93e13,
)
