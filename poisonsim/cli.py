import argparse
import csv
import json
import logging
from typing import List, Optional, Tuple

from .config import ConfigError, SimulationConfig, check_equilibrium_flux
from .constants import DEFAULT_CONSTANTS
from .engine import SERIES, Trajectory, simulate
from .equilibrium import solve_equilibrium
from .session import TransientSession

LOGGER = logging.getLogger("poisonsim.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _parse_segment(text: str) -> Tuple[float, float]:
    try:
        days, state = text.split(":")
        return float(days), float(state)
    except ValueError:
        raise argparse.ArgumentTypeError(f"segment must look like DAYS:STATE, got {text!r}")


def _write_csv(path: str, traj: Trajectory) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time_days"] + list(SERIES[1:]))
        for row in traj.samples():
            writer.writerow(row)


def run_cli(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="PoisonSim - xenon/samarium poisoning transients")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_tr = sub.add_parser("transient", help="Single transient at constant power")
    p_tr.add_argument("--time", type=float, default=0.0, help="Duration (days)")
    p_tr.add_argument("--state", type=float, default=1.0, help="Power fraction of reference flux")
    p_tr.add_argument("--last-time", type=float, default=0.0, help="Start offset (days)")
    p_tr.add_argument("--last-iodine", type=float, default=0.0)
    p_tr.add_argument("--last-xenon", type=float, default=0.0)
    p_tr.add_argument("--last-promethium", type=float, default=0.0)
    p_tr.add_argument("--last-samarium", type=float, default=0.0)
    p_tr.add_argument("--phi0", type=float, default=DEFAULT_CONSTANTS.phi_0, help="Reference flux (n/cm^2/s)")
    p_tr.add_argument("--csv", type=str, default="transient.csv", help="Output CSV path")

    p_eq = sub.add_parser("equilibrium", help="Equilibrium poisons and post-shutdown xenon peak")
    p_eq.add_argument("--phi0", type=float, default=DEFAULT_CONSTANTS.phi_0, help="Flux (n/cm^2/s)")

    p_sch = sub.add_parser("schedule", help="Chain segments at different power levels")
    p_sch.add_argument(
        "--segment", type=_parse_segment, action="append", required=True, help="DAYS:STATE, repeatable"
    )
    p_sch.add_argument("--phi0", type=float, default=DEFAULT_CONSTANTS.phi_0, help="Reference flux (n/cm^2/s)")
    p_sch.add_argument("--csv", type=str, default="schedule.csv", help="Output CSV path")

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        if args.cmd == "transient":
            config = SimulationConfig(
                duration_days=args.time,
                power_state=args.state,
                start_offset_days=args.last_time,
                initial_iodine=args.last_iodine,
                initial_xenon=args.last_xenon,
                initial_promethium=args.last_promethium,
                initial_samarium=args.last_samarium,
                flux_override=args.phi0,
            )
            traj = simulate(config)
            _write_csv(args.csv, traj)
            LOGGER.info("wrote %d samples to %s", len(traj), args.csv)
            return 0

        if args.cmd == "equilibrium":
            report = solve_equilibrium(check_equilibrium_flux(args.phi0))
            print(json.dumps(report.to_dict(), indent=2))
            return 0

        if args.cmd == "schedule":
            session = TransientSession()
            for days, state in args.segment:
                session.extend(days, state, flux=args.phi0)
            _write_csv(args.csv, session.history)
            LOGGER.info("wrote %d samples to %s", len(session), args.csv)
            return 0
    except ConfigError as exc:
        parser.error(str(exc))

    return 1


if __name__ == "__main__":
    raise SystemExit(run_cli())
