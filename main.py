"""Entry point for the Orienteering Problem solver.

Reads an instance file, runs the S-Algorithm or harmony search (optionally
followed by the reorder/insert improver) and reports the best path found.

Usage::

    python main.py instances/tsiligirides_1.txt --budget 40
    python main.py instances/tsiligirides_1.txt --budget 40 \\
                   --algorithm harmony-search --iterations 2000 \\
                   --improve --seed 7 --output best.json --plot best.png
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

from orienteering.algorithms.base import Chain, PathGenerator
from orienteering.algorithms.harmony_search import HarmonySearch
from orienteering.algorithms.ri_adapter import RIAdapter
from orienteering.algorithms.s_algorithm import SAlgorithm
from orienteering.config import HarmonySearchConfig, RIConfig, SAlgorithmConfig
from orienteering.errors import ConfigurationError, InstanceReadError
from orienteering.events import ConsoleObserver, EventLevel
from orienteering.io.instance_loader import load_instance
from orienteering.models.solution import Solution
from orienteering.schemas import SolutionRecord
from orienteering.visualization import plot_solution, to_dot

_VERBOSITY = {0: EventLevel.INFO, 1: EventLevel.DEBUG}


def build_algorithm(args: argparse.Namespace) -> tuple[str, PathGenerator]:
    """Construct the configured generator (and improver chain).

    Raises:
        ConfigurationError: If any algorithm parameter is out of range.
    """
    rng = random.Random(args.seed)
    observer = ConsoleObserver(_VERBOSITY.get(args.verbose, EventLevel.TRACE))

    generator: PathGenerator
    if args.algorithm == "harmony-search":
        config = HarmonySearchConfig(
            harmony_memory_size=args.memory_size,
            hmcr=args.hmcr,
            par=args.par,
            iterations=args.iterations,
        )
        generator = HarmonySearch(config, rng, observer)
    else:
        generator = SAlgorithm(
            SAlgorithmConfig(args.power_factor, args.num_considered), rng, observer
        )

    name = args.algorithm
    if args.improve:
        generator = Chain(generator, RIAdapter(RIConfig(args.rounds), observer))
        name += "+ri"
    return name, generator


def print_solution(solution: Solution, name: str) -> None:
    """Print a human-readable summary of a solution to stdout.

    Args:
        solution: The solution to display.
        name: Algorithm (chain) that produced it.
    """
    separator = "*" * 50
    print(separator)
    print(f"Algorithm: {name}")
    print(f"Score: {solution.score:.4f}")
    print(f"Cost:  {solution.cost:.4f}")
    print(f"Path ({len(solution.path)} vertices): {list(solution.path)}")
    print(separator)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Orienteering Problem solver: S-Algorithm and harmony search"
    )
    parser.add_argument("instance", type=Path, help="Path to the instance file.")
    parser.add_argument(
        "--budget", type=float, required=True, help="Maximum total path cost."
    )
    parser.add_argument(
        "--algorithm",
        choices=("s-algorithm", "harmony-search"),
        default="s-algorithm",
        help="Path construction algorithm (default: s-algorithm).",
    )
    parser.add_argument(
        "--start", type=int, default=0, help="Start vertex (default: 0)."
    )
    parser.add_argument(
        "--end", type=int, default=None, help="End vertex (default: last vertex)."
    )
    parser.add_argument("--power-factor", type=float, default=0.5)
    parser.add_argument("--num-considered", type=int, default=10)
    parser.add_argument("--memory-size", type=int, default=10)
    parser.add_argument("--hmcr", type=float, default=0.9)
    parser.add_argument("--par", type=float, default=0.3)
    parser.add_argument("--iterations", type=int, default=1000)
    parser.add_argument(
        "--improve",
        action="store_true",
        help="Post-process the path with the reorder/insert improver.",
    )
    parser.add_argument("--rounds", type=int, default=10)
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducible runs."
    )
    parser.add_argument(
        "--output", type=Path, default=None, help="Write the best path as JSON."
    )
    parser.add_argument(
        "--plot", type=Path, default=None, help="Save a PNG of the best path."
    )
    parser.add_argument(
        "--dot", type=Path, default=None, help="Write the graph as Graphviz DOT."
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Show search events (-v debug, -vv trace).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the solver.

    Returns:
        ``0`` on success, ``1`` when no feasible path exists, ``2`` on
        configuration or instance errors.
    """
    args = _parser().parse_args(argv)

    try:
        instance = load_instance(args.instance)
        name, algorithm = build_algorithm(args)
    except (ConfigurationError, InstanceReadError, FileNotFoundError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    graph = instance.graph
    end = len(graph) - 1 if args.end is None else args.end
    print(f"Loaded {args.instance}: {len(graph)} vertices.")
    if args.seed is not None:
        print(f"Random seed: {args.seed}")

    try:
        best = algorithm.generate_path(graph, args.start, end, args.budget)
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    if best is None:
        print(
            f"No path from {args.start} to {end} fits the budget {args.budget}.",
            file=sys.stderr,
        )
        return 1

    violations = best.validate_feasibility(graph, args.start, end, args.budget)
    if violations:
        print("\nWARNING: Solution has feasibility violations:", file=sys.stderr)
        for v in violations:
            print(f"  - {v}", file=sys.stderr)

    print_solution(best, name)

    if args.output is not None:
        record = SolutionRecord.from_solution(best, name, args.start, end, args.budget)
        args.output.write_text(record.model_dump_json(indent=2))
        print(f"Wrote {args.output}")
    if args.dot is not None:
        args.dot.write_text(to_dot(graph, best))
        print(f"Wrote {args.dot}")
    if args.plot is not None:
        plot_solution(instance.positions, graph, best, args.plot, show=False)
        print(f"Wrote {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
