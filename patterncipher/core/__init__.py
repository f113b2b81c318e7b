# patterncipher/core/__init__.py
"""
Core data structures and utilities for swap puzzles.
"""

from .exceptions import (
    PatternCipherError, IllegalSwap, NoSolutionFound,
    SearchBudgetExceeded, SearchCancelled,
    GenerationExhausted, UnsupportedGoalKind
)
from .grid import (
    Grid, GridPosition, Tile, Move, MoveType,
    swap, neighbors, apply_moves
)
from .goals import (
    PuzzleGoal, DirectMatchGoal, RuleBasedGoal, GridRule,
    SymbolAtPositionRule, RowUniformRule, ColumnUniformRule,
    heuristic, is_satisfied
)
from .puzzle import (
    Puzzle, PuzzleType, SolutionPath,
    DifficultyProfile, GenerationResult
)
from .validator import PuzzleValidator, ValidationResult
from .utils import (
    setup_logger, timer, memory_usage,
    PuzzleConverter, path_to_string,
    calculate_solution_stats, calculate_efficiency_bonus
)

__all__ = [
    # Errors
    'PatternCipherError', 'IllegalSwap', 'NoSolutionFound',
    'SearchBudgetExceeded', 'SearchCancelled',
    'GenerationExhausted', 'UnsupportedGoalKind',

    # Grid model
    'Grid', 'GridPosition', 'Tile', 'Move', 'MoveType',
    'swap', 'neighbors', 'apply_moves',

    # Goals
    'PuzzleGoal', 'DirectMatchGoal', 'RuleBasedGoal', 'GridRule',
    'SymbolAtPositionRule', 'RowUniformRule', 'ColumnUniformRule',
    'heuristic', 'is_satisfied',

    # Puzzle data
    'Puzzle', 'PuzzleType', 'SolutionPath',
    'DifficultyProfile', 'GenerationResult',

    # Validation
    'PuzzleValidator', 'ValidationResult',

    # Utilities
    'setup_logger', 'timer', 'memory_usage',
    'PuzzleConverter', 'path_to_string',
    'calculate_solution_stats', 'calculate_efficiency_bonus'
]
