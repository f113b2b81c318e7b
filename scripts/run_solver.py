#!/usr/bin/env python3
"""
Script to solve a single swap puzzle.

Grids are given as rows separated by ';' with a trailing '*' on locked tiles.

Usage:
    python scripts/run_solver.py --start "1 2;2 1" --target "1 1;2 2"
    python scripts/run_solver.py --start "3 1 2;4 5 6" --target "1 2 3;4 5 6" --verbose
"""

import sys

import click

from patterncipher.core.goals import DirectMatchGoal
from patterncipher.core.utils import PuzzleConverter, path_to_string, setup_logger
from patterncipher.solvers import SolverConfig, get_solver


@click.command()
@click.option('--start', '-s', type=str, required=True,
              help='Start grid, e.g. "1 2;2 1"')
@click.option('--target', '-g', type=str, required=True,
              help='Target grid, e.g. "1 1;2 2"')
@click.option('--algorithm', '-a', type=click.Choice(['astar']), default='astar',
              help='Solving algorithm to use')
@click.option('--time-limit', '-t', type=float, default=60.0,
              help='Time limit in seconds')
@click.option('--max-expansions', type=int, default=None,
              help='Maximum number of node expansions')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
def main(start, target, algorithm, time_limit, max_expansions, verbose):
    """Solve a swap puzzle and print its optimal move sequence."""

    logger = setup_logger("PuzzleSolver", level="DEBUG" if verbose else "INFO")

    try:
        start_grid = PuzzleConverter.from_string(start)
        target_grid = PuzzleConverter.from_string(target)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    config = SolverConfig(
        time_limit=time_limit,
        max_expansions=max_expansions,
        verbose=verbose,
    )
    solver = get_solver(algorithm, config)

    if verbose:
        def progress_callback(expansions, elapsed, stats):
            logger.debug(f"Expansions {expansions} ({elapsed:.1f}s): {stats}")

        solver.add_progress_callback(progress_callback)

    logger.info(f"Starting {algorithm} solver on {start_grid.rows}x{start_grid.columns} grid")
    result = solver.solve(start_grid, DirectMatchGoal(target_grid))

    # Display results
    click.echo("=" * 50)
    click.echo(f"Algorithm: {algorithm}")
    click.echo(f"Status: {result.status.value.upper()}")
    click.echo(f"Time: {result.solve_time:.3f} seconds")
    click.echo(f"Expansions: {result.expansions}")
    click.echo(f"Memory: {result.memory_used:.1f} MB")
    if result.message:
        click.echo(f"Message: {result.message}")
    click.echo("=" * 50)

    if result.success:
        click.echo(f"Par: {result.solution.par}")
        click.echo(f"Solution: {path_to_string(result.solution) or '(already solved)'}")
    else:
        click.echo("No valid solution found.")
        sys.exit(2)


if __name__ == '__main__':
    main()
