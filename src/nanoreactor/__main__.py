"""Allow running with: python -m nanoreactor

Runs a preset headlessly and prints the species and energies.
"""
import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

import nanoreactor
from nanoreactor.builder import PRESETS, RunSettings, generate_preset, load_config
from nanoreactor.core import SimConfig
from nanoreactor.observer import LoggingObserver, ReactionObserver
from nanoreactor.simulator import ReactiveSimulator

logger = logging.getLogger("nanoreactor")


# ------------------------------------------------------------------ #
#  CLI argument parser
# ------------------------------------------------------------------ #


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m nanoreactor",
        description=f"nanoreactor {nanoreactor.__version__} - headless reactive MD runner.",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Reactant mixture (default: from --config, else hydrogen-combustion)",
    )
    parser.add_argument("--steps", type=int, default=1000, help="Number of steps to run")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--log-interval",
        type=int,
        default=100,
        help="Log a progress line every N steps (default: 100)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def _resolve_settings(args: argparse.Namespace) -> RunSettings:
    settings = load_config(args.config) if args.config else RunSettings(config=SimConfig())
    return RunSettings(
        config=settings.config,
        preset=args.preset or settings.preset,
        seed=args.seed if args.seed is not None else settings.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.steps < 0:
        logger.error("--steps must be non-negative")
        return 2
    try:
        settings = _resolve_settings(args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    rng = np.random.default_rng(settings.seed)
    config = settings.config
    atoms = generate_preset(
        settings.preset, config.confinement_radius, config.target_temperature, rng
    )

    reactions = ReactionObserver()
    simulator = ReactiveSimulator(
        config,
        rng=rng,
        observers=[LoggingObserver(interval=max(args.log_interval, 1)), reactions],
    )
    logger.info("Preset %s: %d atoms, %d steps", settings.preset, len(atoms), args.steps)
    simulator.initialize(atoms)
    snapshot = simulator.run(args.steps)

    print(f"Step {snapshot.step}  time {snapshot.time:.1f} fs  T {snapshot.temperature:.1f} K")
    print(
        f"KE {snapshot.kinetic_energy:.4f} eV  PE {snapshot.potential_energy:.4f} eV  "
        f"E {snapshot.total_energy:.4f} eV"
    )
    print(f"Bonds formed {reactions.bonds_formed}, broken {reactions.bonds_broken}")
    print("Species:")
    for species in snapshot.species:
        print(f"  {species.formula:<8} x{species.count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
