"""
Puzzle generators for swap puzzles.
"""

from .puzzle_generator import PuzzleGenerator, PuzzleGeneratorConfig, AttemptOutcome

__all__ = [
    'PuzzleGenerator',
    'PuzzleGeneratorConfig',
    'AttemptOutcome',
]
