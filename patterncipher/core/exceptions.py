"""
Exception types raised by the puzzle core.
"""

from typing import Optional


class PatternCipherError(Exception):
    """Base class for all puzzle core errors"""
    pass


class IllegalSwap(PatternCipherError, ValueError):
    """A swap violates the bounds, lock or adjacency constraints of the grid"""

    def __init__(self, position_a, position_b, reason: str):
        self.position_a = position_a
        self.position_b = position_b
        self.reason = reason
        super().__init__(f"Illegal swap {position_a} <-> {position_b}: {reason}")


class NoSolutionFound(PatternCipherError):
    """The search space was exhausted without reaching the goal"""
    pass


class SearchBudgetExceeded(PatternCipherError):
    """The solver gave up after hitting its expansion or time limit"""

    def __init__(self, message: str, expansions: int = 0, elapsed: float = 0.0):
        self.expansions = expansions
        self.elapsed = elapsed
        super().__init__(message)


class SearchCancelled(PatternCipherError):
    """The solver was asked to stop through its cancellation token"""
    pass


class GenerationExhausted(PatternCipherError):
    """No attempt produced a puzzle meeting the difficulty constraints"""

    def __init__(self, attempts: int, difficulty: Optional[object] = None):
        self.attempts = attempts
        self.difficulty = difficulty
        super().__init__(
            f"Failed to generate a valid puzzle within {attempts} attempts"
            + (f" for {difficulty}" if difficulty is not None else "")
        )


class UnsupportedGoalKind(PatternCipherError):
    """The requested puzzle type has no construction rule"""

    def __init__(self, puzzle_type):
        self.puzzle_type = puzzle_type
        super().__init__(f"Puzzle generation for type '{puzzle_type}' is not implemented")
