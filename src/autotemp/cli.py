"""Command line entry point for the fan control daemon."""

import argparse
import logging
import signal
import sys
from typing import Sequence

from autotemp.config import ControlConfig
from autotemp.daemon import FanDaemon

log = logging.getLogger("autotemp")


def build_parser() -> argparse.ArgumentParser:
    defaults = ControlConfig()
    p = argparse.ArgumentParser(
        prog="autotemp",
        description="CPU temperature driven fan control for Supermicro boards",
        epilog="Out-of-range values are replaced by safe defaults.",
    )
    p.add_argument(
        "-i",
        "--interval",
        type=int,
        default=defaults.interval_ms,
        help="Loop delay in milliseconds.",
    )
    p.add_argument(
        "-f",
        "--floor",
        type=int,
        default=defaults.floor_speed,
        help="Floor fan speed %% (0-100).",
    )
    p.add_argument(
        "-r",
        "--ramp",
        type=int,
        default=defaults.ramp_start_temp,
        help="Ramp-up threshold temperature (C).",
    )
    p.add_argument(
        "-m",
        "--max",
        type=int,
        default=defaults.max_temp,
        help="Temperature (C) at which the fan runs at 100%%.",
    )
    p.add_argument(
        "-s",
        "--step",
        type=int,
        default=defaults.step,
        help="Fan speed step increment %%.",
    )
    p.add_argument(
        "-p",
        "--path",
        default=defaults.ipmicfg_path,
        help="Path to the IPMICFG executable.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every reading and decision.",
    )
    return p


def parse_config(argv: Sequence[str] | None = None) -> ControlConfig:
    """Parse command-line arguments into a corrected ControlConfig."""
    args = build_parser().parse_args(argv)
    return ControlConfig(
        interval_ms=args.interval,
        floor_speed=args.floor,
        ramp_start_temp=args.ramp,
        max_temp=args.max,
        step=args.step,
        ipmicfg_path=args.path,
        verbose=args.verbose,
    )


def _exit_on_signal(signum: int, _frame: object) -> None:
    raise SystemExit(128 + signum)


def main(argv: Sequence[str] | None = None) -> None:
    # Configure before parsing so corrections are reported
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
    )
    config = parse_config(argv)
    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    for line in config.describe():
        log.info(line)

    signal.signal(signal.SIGTERM, _exit_on_signal)
    signal.signal(signal.SIGINT, _exit_on_signal)

    daemon = FanDaemon.from_config(config)
    sys.exit(daemon.run_forever())


if __name__ == "__main__":
    main()
