"""
patterncipher: procedural swap-puzzle generation with an A*-proven par.

Usage:
    from patterncipher import PuzzleGenerator, PuzzleGeneratorConfig, DifficultyProfile

    generator = PuzzleGenerator(PuzzleGeneratorConfig(random_seed=7))
    result = generator.generate(DifficultyProfile(
        grid_width=3, grid_height=3, unique_symbol_count=9, minimum_solution_moves=4
    ))
    print(result.grid)
    print(result.solution.par)
"""

from .core import (
    Grid, GridPosition, Tile, Move, MoveType,
    DirectMatchGoal, RuleBasedGoal, heuristic,
    Puzzle, PuzzleType, SolutionPath, DifficultyProfile, GenerationResult,
    IllegalSwap, NoSolutionFound, SearchBudgetExceeded, SearchCancelled,
    GenerationExhausted, UnsupportedGoalKind
)
from .solvers import AStarSolver, SolverConfig, SolverResult, SearchStatus, get_solver
from .generators import PuzzleGenerator, PuzzleGeneratorConfig

__version__ = "0.1.0"

__all__ = [
    # Grid model and goals
    'Grid', 'GridPosition', 'Tile', 'Move', 'MoveType',
    'DirectMatchGoal', 'RuleBasedGoal', 'heuristic',

    # Puzzle data
    'Puzzle', 'PuzzleType', 'SolutionPath', 'DifficultyProfile', 'GenerationResult',

    # Errors
    'IllegalSwap', 'NoSolutionFound', 'SearchBudgetExceeded', 'SearchCancelled',
    'GenerationExhausted', 'UnsupportedGoalKind',

    # Solving and generation
    'AStarSolver', 'SolverConfig', 'SolverResult', 'SearchStatus', 'get_solver',
    'PuzzleGenerator', 'PuzzleGeneratorConfig',
]
