"""Command line entry: headless run with console stats, or the pygame viewer."""

import argparse

from .config import SimulationConfig
from .runner import LOGFILE_PATH, PRINT_INTERVAL, run_simulation
from .simulation import Simulation
from .strategies import DEFAULT_ENABLED, short_name


def build_parser():
    parser = argparse.ArgumentParser(description="Iterated Prisoner's Dilemma arena")
    parser.add_argument("--strategies", nargs="+", default=[short_name(s) for s in DEFAULT_ENABLED],
                        help="Enabled strategies by short name (ALLC ALLD TFT TFTT WSLS GRIM RAND)")
    parser.add_argument("--per-strategy", type=int, default=None, help="Initial creatures per strategy")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--steps", type=int, default=6000, help="Ticks to run headless")
    parser.add_argument("--dt", type=float, default=1 / 60, help="Seconds per headless tick")
    parser.add_argument("--print-every", type=int, default=PRINT_INTERVAL)
    parser.add_argument("--log-file", type=str, default=None,
                        help=f"Append dead agents and summary to this file (e.g. {LOGFILE_PATH})")
    parser.add_argument("--interaction-speed", type=float, default=None,
                        help="1..1000, converts to a cooldown of (1010 - speed) ms and scales payoffs")
    parser.add_argument("--headless", action="store_true", help="No window, print stats instead")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    params = {"enabled_strategies": args.strategies}
    if args.per_strategy is not None:
        params["INITIAL_CREATURES_PER_STRATEGY"] = args.per_strategy
    if args.interaction_speed is not None:
        params["INTERACTION_SPEED"] = args.interaction_speed
    config = SimulationConfig.from_params(params)

    if args.headless:
        run_simulation(
            config,
            steps=args.steps,
            dt=args.dt,
            seed=args.seed,
            print_interval=args.print_every,
            log_to_file=args.log_file is not None,
            logfile_path=args.log_file or LOGFILE_PATH,
        )
        return

    from .viewer import run_viewer
    run_viewer(Simulation(config, seed=args.seed))


if __name__ == "__main__":
    main()
