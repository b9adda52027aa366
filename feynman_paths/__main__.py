"""
Command-line driver: generate path-integral ensembles and report or plot them.

    python -m feynman_paths --paths 500 --frames 360 --save ensemble.png
"""

import argparse
import logging

import matplotlib

from .controller import (
    DEFAULT_SEED,
    DESKTOP_REGENERATION_FRAMES,
    EMBEDDED_REGENERATION_FRAMES,
    FRAME_DURATION,
    PathIntegralSimulation,
)
from .parameters import InvalidParameterError, SimulationParameters, load_parameters

CADENCES = {
    "desktop": DESKTOP_REGENERATION_FRAMES,
    "embedded": EMBEDDED_REGENERATION_FRAMES,
}

# Command-line option -> parameter field
OVERRIDES = {
    "paths": "path_count",
    "time_steps": "time_steps",
    "hbar": "hbar",
    "mass": "mass",
    "dt": "time_step_dt",
    "dx": "spatial_step_dx",
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog="feynman-paths",
        description="Sample discretized Feynman paths of a particle in a harmonic potential.",
    )
    parser.add_argument("--config", help="YAML file with simulation parameters")
    parser.add_argument("--paths", type=int, help="number of trajectories per ensemble")
    parser.add_argument("--time-steps", type=int, help="number of time steps per trajectory")
    parser.add_argument("--hbar", type=float, help="reduced Planck constant")
    parser.add_argument("--mass", type=float, help="particle mass")
    parser.add_argument("--dt", type=float, help="duration of one time step")
    parser.add_argument("--dx", type=float, help="spatial unit")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="random seed (default: %(default)s)")
    parser.add_argument("--frames", type=int, default=0, help="frames of %g s to advance" % FRAME_DURATION)
    parser.add_argument("--cadence", choices=sorted(CADENCES), default="desktop",
                        help="periodic regeneration cadence (default: %(default)s)")
    parser.add_argument("--plot", action="store_true", help="show the final ensemble")
    parser.add_argument("--save", help="write a PNG of the final ensemble")
    parser.add_argument("--verbose", action="store_true", help="log every regeneration")
    return parser


def resolve_parameters(args):
    """Combine the config file (if any) with command-line overrides."""
    parameters = load_parameters(args.config) if args.config else SimulationParameters()
    for option, field in OVERRIDES.items():
        value = getattr(args, option)
        if value is not None:
            parameters = parameters.with_value(field, value)
    return parameters


def summarize(ensemble):
    dominant = ensemble.dominant()
    dominant_action = dominant.action if dominant is not None else float("nan")
    minimum_action = min(ensemble.actions) if len(ensemble) else float("nan")
    return (f"generation = {ensemble.generation} | paths = {len(ensemble)} "
            f"| |Σ raw| = {abs(ensemble.amplitude_sum):.4f} "
            f"| |Σ normalized| = {abs(ensemble.total_amplitude()):.4f} "
            f"| normalized = {ensemble.normalized} "
            f"| min S = {minimum_action:.3f} | dominant S = {dominant_action:.3f}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    if args.frames < 0:
        parser.error("--frames must not be negative")
    try:
        parameters = resolve_parameters(args)
    except (InvalidParameterError, FileNotFoundError) as error:
        parser.error(str(error))

    simulation = PathIntegralSimulation(parameters, seed=args.seed, regeneration_frames=CADENCES[args.cadence])
    print(summarize(simulation.current_ensemble()))
    for _ in range(args.frames):
        if simulation.tick(FRAME_DURATION):
            print(summarize(simulation.current_ensemble()))

    if args.plot or args.save:
        if not args.plot:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from .plotting import plot_ensemble

        ax = plot_ensemble(simulation.current_ensemble(), simulation.parameters, simulation.potential)
        if args.save:
            ax.figure.savefig(args.save, dpi=120)
        if args.plot:
            plt.show()
        plt.close(ax.figure)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
