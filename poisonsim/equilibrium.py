from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional
import logging

from .constants import DEFAULT_CONSTANTS, SECONDS_PER_DAY, PhysicalConstants
from .engine import STEP_SECONDS, PoisonState, TransientIntegrator

logger = logging.getLogger(__name__)

SEARCH_DAYS: float = 10.0


@dataclass(frozen=True)
class Asymptotics:
    iodine: float
    xenon: float
    promethium: float
    samarium: float
    xe_reactivity: float
    sm_reactivity: float


@dataclass(frozen=True)
class XenonPeak:
    max_xenon: float
    max_xe_reactivity: float
    max_xenon_time: float  # days
    max_xe_reactivity_time: float  # days


@dataclass(frozen=True)
class EquilibriumReport:
    iodine_infinity: float
    xenon_infinity: float
    promethium_infinity: float
    samarium_infinity: float
    xe_reactivity_infinity: float
    sm_reactivity_infinity: float
    max_xenon: float
    max_xe_reactivity: float
    max_xenon_time: float
    max_xe_reactivity_time: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class EquilibriumSolver:
    """Infinite-time poison inventories and the post-shutdown xenon peak.

    The peak search starts from equilibrium iodine and xenon, drops the flux
    to zero and steps forward until xenon starts to fall or ``search_days``
    of simulated time have elapsed.
    """
    constants: PhysicalConstants = DEFAULT_CONSTANTS
    dt_s: float = STEP_SECONDS
    search_days: float = SEARCH_DAYS

    def asymptotic(self, phi: float) -> Asymptotics:
        c = self.constants
        iodine = c.gamma_i * c.sigma_f * phi / c.lambda_i
        xenon = (c.gamma_i + c.gamma_xe) * c.sigma_f * phi / (c.lambda_xe + c.sigma_a_xe * phi)
        promethium = c.gamma_pm * c.sigma_f * phi / c.lambda_pm
        # samarium equilibrium does not depend on flux
        samarium = c.gamma_pm * c.sigma_f / c.sigma_a_sm
        xe_reactivity = -((c.gamma_i + c.gamma_xe) * c.sigma_f / c.sigma_a) * phi / (phi + c.lambda_xe / c.sigma_a_xe)
        sm_reactivity = -samarium * c.sigma_a_sm / c.sigma_a
        return Asymptotics(iodine, xenon, promethium, samarium, xe_reactivity, sm_reactivity)

    def peak_search(self, iodine: float, xenon: float, xe_reactivity: float) -> XenonPeak:
        c = self.constants
        integrator = TransientIntegrator(constants=c, dt_s=self.dt_s)
        t_cap = self.search_days * SECONDS_PER_DAY

        t = 0.0
        state = PoisonState(iodine, xenon, 0.0, 0.0)
        max_xenon = xenon
        max_xe_reactivity = xe_reactivity
        max_xenon_time = 0.0
        max_xe_reactivity_time = 0.0

        while t < t_cap:
            new_state = integrator.step(state, 0.0)
            new_xe_reactivity = -c.sigma_a_xe * new_state.xenon / c.sigma_a

            if new_state.xenon > max_xenon:
                max_xenon = new_state.xenon
                max_xenon_time = t / SECONDS_PER_DAY
            if abs(new_xe_reactivity) > abs(max_xe_reactivity):
                max_xe_reactivity = new_xe_reactivity
                max_xe_reactivity_time = t / SECONDS_PER_DAY

            if new_state.xenon < state.xenon:
                logger.debug("xenon peak %.6g at %.4f d", max_xenon, max_xenon_time)
                break

            state = new_state
            t += self.dt_s
        else:
            logger.debug("xenon still rising after %.1f d, search capped", self.search_days)

        return XenonPeak(max_xenon, max_xe_reactivity, max_xenon_time, max_xe_reactivity_time)

    def solve(self, phi: Optional[float] = None) -> EquilibriumReport:
        phi = self.constants.phi_0 if phi is None else phi
        eq = self.asymptotic(phi)
        peak = self.peak_search(eq.iodine, eq.xenon, eq.xe_reactivity)
        return EquilibriumReport(
            iodine_infinity=eq.iodine,
            xenon_infinity=eq.xenon,
            promethium_infinity=eq.promethium,
            samarium_infinity=eq.samarium,
            xe_reactivity_infinity=eq.xe_reactivity,
            sm_reactivity_infinity=eq.sm_reactivity,
            max_xenon=peak.max_xenon,
            max_xe_reactivity=peak.max_xe_reactivity,
            max_xenon_time=peak.max_xenon_time,
            max_xe_reactivity_time=peak.max_xe_reactivity_time,
        )


def solve_equilibrium(phi: Optional[float] = None, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> EquilibriumReport:
    return EquilibriumSolver(constants=constants).solve(phi)


def equilibrium_state(phi: float, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> PoisonState:
    eq = EquilibriumSolver(constants=constants).asymptotic(phi)
    return PoisonState(eq.iodine, eq.xenon, eq.promethium, eq.samarium)
