from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Tuple
import logging

import numpy as np
import pandas as pd

from .config import SimulationConfig
from .constants import DEFAULT_CONSTANTS, SECONDS_PER_DAY, PhysicalConstants

logger = logging.getLogger(__name__)

STEP_SECONDS: float = 60.0

SERIES = (
    "time",
    "iodine",
    "xenon",
    "promethium",
    "samarium",
    "reactivity_xe",
    "reactivity_sm",
)

Sample = Tuple[float, float, float, float, float, float, float]


class PoisonState(NamedTuple):
    iodine: float
    xenon: float
    promethium: float
    samarium: float


ZERO_STATE = PoisonState(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Trajectory:
    """Seven parallel series, one entry per integration step (time in days)."""
    time: List[float] = field(default_factory=list)
    iodine: List[float] = field(default_factory=list)
    xenon: List[float] = field(default_factory=list)
    promethium: List[float] = field(default_factory=list)
    samarium: List[float] = field(default_factory=list)
    reactivity_xe: List[float] = field(default_factory=list)
    reactivity_sm: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        lengths = {len(getattr(self, name)) for name in SERIES}
        if len(lengths) > 1:
            raise ValueError(f"Trajectory series lengths differ: {sorted(lengths)}")

    def __len__(self) -> int:
        return len(self.time)

    @classmethod
    def empty(cls) -> "Trajectory":
        return cls()

    @classmethod
    def from_samples(cls, samples: List[Sample]) -> "Trajectory":
        columns = [list(col) for col in zip(*samples)] if samples else [[] for _ in SERIES]
        return cls(*columns)

    @classmethod
    def from_dict(cls, data: Dict[str, List[float]]) -> "Trajectory":
        return cls(**{name: [float(v) for v in data[name]] for name in SERIES})

    def samples(self) -> Iterator[Sample]:
        return zip(*(getattr(self, name) for name in SERIES))

    def last_state(self) -> PoisonState:
        if not self.time:
            return ZERO_STATE
        return PoisonState(self.iodine[-1], self.xenon[-1], self.promethium[-1], self.samarium[-1])

    def concat(self, other: "Trajectory") -> "Trajectory":
        return Trajectory(*(getattr(self, name) + getattr(other, name) for name in SERIES))

    def to_dict(self) -> Dict[str, List[float]]:
        return {name: list(getattr(self, name)) for name in SERIES}

    def to_array(self) -> np.ndarray:
        """Array of shape (n_samples, 7), columns in SERIES order."""
        if not self.time:
            return np.zeros((0, len(SERIES)), dtype=float)
        return np.column_stack([np.asarray(getattr(self, name), dtype=float) for name in SERIES])

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.to_dict(), columns=list(SERIES))


@dataclass(frozen=True)
class TransientIntegrator:
    """Explicit Euler integration of the I/Xe and Pm/Sm balance equations.

    dI/dt  = gamma_I * Sf * phi - lambda_I * I
    dXe/dt = gamma_Xe * Sf * phi + lambda_I * I - (lambda_Xe + sigma_Xe * phi) * Xe
    dPm/dt = gamma_Pm * Sf * phi - lambda_Pm * Pm
    dSm/dt = lambda_Pm * Pm - sigma_Sm * Sm * phi
    """
    constants: PhysicalConstants = DEFAULT_CONSTANTS
    dt_s: float = STEP_SECONDS

    def rhs(self, state: PoisonState, phi: float) -> PoisonState:
        c = self.constants
        n_i, n_xe, n_pm, n_sm = state
        dn_i_dt = c.gamma_i * c.sigma_f * phi - c.lambda_i * n_i
        dn_xe_dt = c.gamma_xe * c.sigma_f * phi + c.lambda_i * n_i - (c.lambda_xe + c.sigma_a_xe * phi) * n_xe
        dn_pm_dt = c.gamma_pm * c.sigma_f * phi - c.lambda_pm * n_pm
        dn_sm_dt = c.lambda_pm * n_pm - c.sigma_a_sm * n_sm * phi
        return PoisonState(dn_i_dt, dn_xe_dt, dn_pm_dt, dn_sm_dt)

    def step(self, state: PoisonState, phi: float) -> PoisonState:
        deriv = self.rhs(state, phi)
        return PoisonState(*(s + d * self.dt_s for s, d in zip(state, deriv)))

    def reactivity(self, xenon: float, samarium: float) -> Tuple[float, float]:
        c = self.constants
        return -(c.sigma_a_xe * xenon) / c.sigma_a, -(c.sigma_a_sm * samarium) / c.sigma_a

    def run(self, config: SimulationConfig) -> Trajectory:
        """Integrate from the config's initial state over its time window.

        Each sample holds the state after a step, labelled with the time at
        the start of that step. The end point is inclusive, so a zero-length
        window still yields one sample.
        """
        t = config.start_seconds
        t_end = config.end_seconds
        phi = config.flux(self.constants)
        state = PoisonState(
            config.initial_iodine,
            config.initial_xenon,
            config.initial_promethium,
            config.initial_samarium,
        )
        logger.debug(
            "transient start=%.6g d duration=%.6g d phi=%.6g", config.start_offset_days, config.duration_days, phi
        )

        samples: List[Sample] = []
        while t <= t_end:
            state = self.step(state, phi)
            rho_xe, rho_sm = self.reactivity(state.xenon, state.samarium)
            samples.append((t / SECONDS_PER_DAY, *state, rho_xe, rho_sm))
            t += self.dt_s

        logger.debug("transient produced %d samples", len(samples))
        return Trajectory.from_samples(samples)


def simulate(config: SimulationConfig, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> Trajectory:
    return TransientIntegrator(constants=constants).run(config)
