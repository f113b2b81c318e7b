#!/usr/bin/env python3
"""
Script to generate swap puzzles with a proven par.

Usage:
    python scripts/generate_puzzles.py --size 3x3 --symbols 9 --min-moves 5 --count 3
    python scripts/generate_puzzles.py --size 4x4 --symbols 4 --min-moves 6 --seed 42 --json
    python scripts/generate_puzzles.py --size 3x3 --min-moves 12 --fallback 4
"""

import json
import sys

import click

from patterncipher.core.exceptions import GenerationExhausted
from patterncipher.core.puzzle import DifficultyProfile
from patterncipher.core.utils import path_to_string, calculate_solution_stats
from patterncipher.generators.puzzle_generator import PuzzleGenerator, PuzzleGeneratorConfig
from patterncipher.solvers import SolverConfig


@click.command()
@click.option('--size', '-s', type=str, default='3x3',
              help='Grid size (format: WIDTHxHEIGHT)')
@click.option('--symbols', '-k', type=int, default=None,
              help='Number of unique symbols (default: one per cell)')
@click.option('--min-moves', '-m', type=int, default=4,
              help='Minimum number of moves in the optimal solution')
@click.option('--count', '-n', type=int, default=1,
              help='Number of puzzles to generate')
@click.option('--attempts', type=int, default=20,
              help='Attempts per puzzle before giving up')
@click.option('--workers', '-w', type=int, default=1,
              help='Parallel attempts per puzzle')
@click.option('--time-limit', '-t', type=float, default=30.0,
              help='Solver time limit per attempt in seconds')
@click.option('--fallback', type=int, default=0,
              help='Lower the minimum move count up to this many times on failure')
@click.option('--seed', type=int, default=None,
              help='Random seed for reproducibility')
@click.option('--json', 'as_json', is_flag=True,
              help='Print puzzles as JSON')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
def main(size, symbols, min_moves, count, attempts, workers, time_limit, fallback,
         seed, as_json, verbose):
    """Generate swap puzzles whose par is proven by the A* solver."""

    try:
        width, height = map(int, size.lower().split('x'))
    except ValueError:
        click.echo(f"Error: Invalid size format '{size}' (use WIDTHxHEIGHT)", err=True)
        sys.exit(1)

    try:
        difficulty = DifficultyProfile(
            grid_width=width,
            grid_height=height,
            unique_symbol_count=symbols or width * height,
            minimum_solution_moves=min_moves,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    generator = PuzzleGenerator(PuzzleGeneratorConfig(
        max_attempts=attempts,
        workers=workers,
        random_seed=seed,
        verbose=verbose,
        solver_config=SolverConfig(time_limit=time_limit, verbose=verbose),
    ))

    results = []
    for i in range(count):
        try:
            if fallback:
                result = generator.generate_with_fallback(difficulty, simplify_steps=fallback)
            else:
                result = generator.generate(difficulty)
        except GenerationExhausted as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(2)
        results.append(result)

        if not as_json:
            click.echo("=" * 50)
            click.echo(f"Puzzle {i + 1}/{count}  id={result.id}")
            click.echo(f"Par: {result.solution.par}  (attempts: {result.attempts}, {result.elapsed:.2f}s)")
            click.echo("Start grid:")
            click.echo(str(result.grid))
            click.echo("Target grid:")
            click.echo(str(result.goal.target_grid))
            click.echo(f"Solution: {path_to_string(result.solution) or '(already solved)'}")
            if verbose:
                click.echo(f"Stats: {calculate_solution_stats(result.puzzle)}")

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))


if __name__ == '__main__':
    main()
