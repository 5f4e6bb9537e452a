"""Command line entry point for running the disease model."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List

from .config import SimulationConfig
from .engine import SimulationEngine, build_nervous_system
from .errors import SimulationError

LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parkinson's disease cellular agent model")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Build a population and simulate it")
    run_parser.add_argument("--ticks", type=int, default=None, help="Maximum number of ticks to run")
    run_parser.add_argument("--seed", type=int, default=None, help="Seed of the random generator")
    run_parser.add_argument("--neurons", type=int, default=None, help="Initial number of neurons")
    run_parser.add_argument("--astrocytes", type=int, default=None, help="Initial number of astrocytes")
    run_parser.add_argument("--microglia", type=int, default=None, help="Initial number of microglia")
    run_parser.add_argument("--dimension", type=float, default=None, help="Edge length of the cubic space")
    run_parser.add_argument(
        "--filter-isolated",
        action="store_true",
        help="Remove neurons without connections before the first tick",
    )
    run_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    run_parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    run_parser.add_argument("--log-file", default=None, help="Append log records to this file")

    return parser


def _configure_logging(level: str, log_file: str | None) -> None:
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        raise SimulationError(f"Unknown log level '{level}'")
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a"))
        except OSError as exc:
            raise SimulationError(f"Cannot open log file '{log_file}': {exc}") from exc
    logging.basicConfig(level=numeric, format=LOG_FORMAT, handlers=handlers, force=True)


def _config_from_args(args: argparse.Namespace) -> SimulationConfig:
    dimension = args.dimension
    return SimulationConfig.from_env().replace(
        max_ticks=args.ticks,
        seed=args.seed,
        initial_neurons=args.neurons,
        initial_astrocytes=args.astrocytes,
        initial_microglia=args.microglia,
        dimension_x=dimension,
        dimension_y=dimension,
        dimension_z=dimension,
        filter_isolated_neurons=args.filter_isolated or None,
    )


def _run(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    LOGGER.info("Running simulation with %s", config)
    system = build_nervous_system(config)
    engine = SimulationEngine(system, config)
    report = engine.run()

    if args.json:
        print(json.dumps(report.as_dict(), indent=2))
        return 0

    for snapshot in [*report.history, report.final]:
        print(
            f"tick={snapshot.tick:5d} healthy={snapshot.healthy_neurons:4d} "
            f"degenerating={snapshot.degenerating_neurons:4d} dead={snapshot.dead_neurons:4d} "
            f"dopamine={snapshot.total_dopamine:10.2f} mito={snapshot.mitochondria:5d} "
            f"lewy={snapshot.lewy_bodies:5d} cytokines={snapshot.pro_inflammatory_cytokines:4d}"
        )
    print(f"Stopped after {report.ticks} ticks: {report.stop_reason.value}")
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        _configure_logging(args.log_level, args.log_file)
        if args.command == "run":
            return _run(args)
    except SimulationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    parser.error(f"Unknown command {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover - manual invocation
    sys.exit(main())
