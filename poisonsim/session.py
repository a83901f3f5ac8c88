from __future__ import annotations

from typing import Callable, Optional
import logging

from .config import ConfigError, SimulationConfig
from .constants import DEFAULT_CONSTANTS, SECONDS_PER_DAY, PhysicalConstants
from .engine import Trajectory, TransientIntegrator

logger = logging.getLogger(__name__)

Runner = Callable[[SimulationConfig], Trajectory]


class TransientSession:
    """Accumulates consecutive transient segments at changing power levels.

    Each extension starts from the last recorded concentrations. The last
    sample is labelled with the start of its step but holds the state at the
    end of it, so the next segment starts one step later on the time axis.
    ``runner`` computes a segment; it defaults to the local integrator and can
    be swapped for a remote call.
    """

    def __init__(self, runner: Optional[Runner] = None, constants: PhysicalConstants = DEFAULT_CONSTANTS):
        self.constants = constants
        integrator = TransientIntegrator(constants=constants)
        self.step_days = integrator.dt_s / SECONDS_PER_DAY
        self.runner: Runner = runner if runner is not None else integrator.run
        self.history = Trajectory.empty()

    def __len__(self) -> int:
        return len(self.history)

    def next_config(self, duration_days: float, power_state: float, flux: Optional[float] = None) -> SimulationConfig:
        if not duration_days > 0:
            raise ConfigError(f"duration_days must be > 0 to extend a session, got {duration_days!r}")
        last = self.history.last_state()
        start = self.history.time[-1] + self.step_days if len(self.history) else 0.0
        return SimulationConfig(
            duration_days=duration_days,
            power_state=power_state,
            start_offset_days=start,
            initial_iodine=last.iodine,
            initial_xenon=last.xenon,
            initial_promethium=last.promethium,
            initial_samarium=last.samarium,
            flux_override=flux if flux is not None else self.constants.phi_0,
        )

    def extend(self, duration_days: float, power_state: float, flux: Optional[float] = None) -> Trajectory:
        config = self.next_config(duration_days, power_state, flux)
        segment = self.runner(config)
        self.history = self.history.concat(segment)
        logger.info(
            "extended %.4g d at %.0f%% power, history now %d samples",
            duration_days,
            power_state * 100.0,
            len(self.history),
        )
        return segment

    def clear(self) -> None:
        self.history = Trajectory.empty()
