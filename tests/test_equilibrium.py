import numpy as np
import pytest

from poisonsim.config import SimulationConfig
from poisonsim.constants import DEFAULT_CONSTANTS, PhysicalConstants
from poisonsim.engine import TransientIntegrator, simulate
from poisonsim.equilibrium import EquilibriumSolver, equilibrium_state, solve_equilibrium

C = DEFAULT_CONSTANTS


def test_closed_forms_at_reference_flux():
    phi = C.phi_0
    report = solve_equilibrium()
    assert report.iodine_infinity == pytest.approx(C.gamma_i * C.sigma_f * phi / C.lambda_i)
    assert report.xenon_infinity == pytest.approx(
        (C.gamma_i + C.gamma_xe) * C.sigma_f * phi / (C.lambda_xe + C.sigma_a_xe * phi)
    )
    assert report.promethium_infinity == pytest.approx(C.gamma_pm * C.sigma_f * phi / C.lambda_pm)
    assert report.samarium_infinity == pytest.approx(C.gamma_pm * C.sigma_f / C.sigma_a_sm)
    # both reactivity forms agree with concentration * sigma / Sigma_a
    assert report.xe_reactivity_infinity == pytest.approx(-C.sigma_a_xe * report.xenon_infinity / C.sigma_a)
    assert report.sm_reactivity_infinity == pytest.approx(-C.sigma_a_sm * report.samarium_infinity / C.sigma_a)


def test_samarium_equilibrium_independent_of_flux():
    low = solve_equilibrium(1e12)
    high = solve_equilibrium(1e14)
    assert low.samarium_infinity == high.samarium_infinity
    assert high.xenon_infinity > low.xenon_infinity


def test_equilibrium_is_a_fixed_point_of_the_integrator():
    phi = C.phi_0
    state = equilibrium_state(phi)
    deriv = TransientIntegrator().rhs(state, phi)
    production = np.array([
        C.gamma_i * C.sigma_f * phi,
        (C.gamma_i + C.gamma_xe) * C.sigma_f * phi,
        C.gamma_pm * C.sigma_f * phi,
        C.gamma_pm * C.sigma_f * phi,
    ])
    assert np.all(np.abs(np.asarray(deriv)) <= 1e-12 * production)

    config = SimulationConfig(
        duration_days=0.1,
        initial_iodine=state.iodine,
        initial_xenon=state.xenon,
        initial_promethium=state.promethium,
        initial_samarium=state.samarium,
    )
    traj = simulate(config)
    assert traj.xenon[-1] == pytest.approx(state.xenon, rel=1e-9)
    assert traj.samarium[-1] == pytest.approx(state.samarium, rel=1e-9)


def test_post_shutdown_xenon_peak():
    report = solve_equilibrium()
    assert report.max_xenon > report.xenon_infinity
    assert report.max_xenon_time > 0.0
    # iodine-fed peak arrives within the first day at this flux
    assert report.max_xenon_time < 1.0
    assert report.max_xe_reactivity < report.xe_reactivity_infinity
    assert report.max_xe_reactivity == pytest.approx(-C.sigma_a_xe * report.max_xenon / C.sigma_a)
    assert abs(report.max_xe_reactivity_time - report.max_xenon_time) <= 60.0 / 86400.0


def test_peak_search_stops_at_first_decline():
    solver = EquilibriumSolver()
    eq = solver.asymptotic(C.phi_0)
    peak = solver.peak_search(eq.iodine, eq.xenon, eq.xe_reactivity)
    # one more step from the peak lowers xenon
    steps = int(round(peak.max_xenon_time * 86400.0 / 60.0))
    integrator = TransientIntegrator()
    state = equilibrium_state(C.phi_0)
    for _ in range(steps + 1):
        state = integrator.step(state, 0.0)
    assert state.xenon == pytest.approx(peak.max_xenon, rel=1e-12)
    after = integrator.step(state, 0.0)
    assert after.xenon < state.xenon


def test_zero_flux_returns_seed_values():
    report = solve_equilibrium(0.0)
    assert report.iodine_infinity == 0.0
    assert report.xenon_infinity == 0.0
    assert report.max_xenon == 0.0
    assert report.max_xenon_time == 0.0
    assert report.max_xe_reactivity == 0.0
    assert report.max_xe_reactivity_time == 0.0


def test_search_cap_when_xenon_keeps_rising():
    solver = EquilibriumSolver(search_days=0.01)
    eq = solver.asymptotic(C.phi_0)
    peak = solver.peak_search(eq.iodine, eq.xenon, eq.xe_reactivity)
    # 864 s window, last step starts at 840 s
    assert peak.max_xenon_time == pytest.approx(840.0 / 86400.0)
    assert peak.max_xenon > eq.xenon


def test_report_dict_has_all_fields():
    data = solve_equilibrium().to_dict()
    assert set(data) == {
        "iodine_infinity",
        "xenon_infinity",
        "promethium_infinity",
        "samarium_infinity",
        "xe_reactivity_infinity",
        "sm_reactivity_infinity",
        "max_xenon",
        "max_xe_reactivity",
        "max_xenon_time",
        "max_xe_reactivity_time",
    }


def test_split_absorption_constants_rescale_reactivity():
    split = PhysicalConstants.with_absorption_split(0.10, 0.20)
    assert split.sigma_a == pytest.approx(0.30)
    base = solve_equilibrium()
    other = solve_equilibrium(constants=split)
    assert other.xenon_infinity == base.xenon_infinity
    assert other.xe_reactivity_infinity == pytest.approx(base.xe_reactivity_infinity * 0.15 / 0.30)


def test_constants_must_be_positive():
    with pytest.raises(ValueError):
        C.replace(lambda_xe=0.0)
    with pytest.raises(ValueError):
        C.replace(sigma_a=float("nan"))
