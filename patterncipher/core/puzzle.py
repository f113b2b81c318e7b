"""
Puzzle-level data structures: solution paths, difficulty profiles and results.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple

from .goals import DirectMatchGoal, PuzzleGoal
from .grid import Grid, Move


class PuzzleType(Enum):
    """Kinds of puzzle goals"""
    DIRECT_MATCH = "direct_match"
    RULE_BASED = "rule_based"


class SolutionPath:
    """Ordered move sequence reaching the goal; its length is the par"""

    def __init__(self, moves: Iterable[Move] = ()):
        self.moves: Tuple[Move, ...] = tuple(moves)

    @property
    def par(self) -> int:
        return len(self.moves)

    def __len__(self):
        return len(self.moves)

    def __iter__(self):
        return iter(self.moves)

    def __eq__(self, other):
        if isinstance(other, SolutionPath):
            return self.moves == other.moves
        return False

    def __hash__(self):
        return hash(self.moves)

    def to_dict(self) -> dict:
        return {'par': self.par, 'moves': [m.to_dict() for m in self.moves]}

    def __repr__(self):
        return f"SolutionPath(par={self.par})"


@dataclass(frozen=True)
class DifficultyProfile:
    """Caller-supplied parameters for one generation request"""
    grid_width: int
    grid_height: int
    unique_symbol_count: int
    minimum_solution_moves: int
    puzzle_type: PuzzleType = PuzzleType.DIRECT_MATCH

    def __post_init__(self):
        if self.grid_width <= 0 or self.grid_height <= 0:
            raise ValueError(f"Invalid grid dimensions {self.grid_width}x{self.grid_height}")
        if self.unique_symbol_count <= 0:
            raise ValueError(f"unique_symbol_count must be positive, got {self.unique_symbol_count}")
        if self.minimum_solution_moves < 0:
            raise ValueError(f"minimum_solution_moves must be non-negative, got {self.minimum_solution_moves}")

    def simplified(self, step: int = 1) -> 'DifficultyProfile':
        """Same profile with the minimum move count lowered by step"""
        return DifficultyProfile(
            grid_width=self.grid_width,
            grid_height=self.grid_height,
            unique_symbol_count=self.unique_symbol_count,
            minimum_solution_moves=max(0, self.minimum_solution_moves - step),
            puzzle_type=self.puzzle_type,
        )

    def __str__(self):
        return (f"{self.puzzle_type.value} {self.grid_width}x{self.grid_height}, "
                f"{self.unique_symbol_count} symbols, min {self.minimum_solution_moves} moves")


class Puzzle:
    """A start grid, its goal and the proven optimal solution"""

    def __init__(self, grid: Grid, goal: PuzzleGoal, solution: Optional[SolutionPath] = None,
                 puzzle_id: Optional[str] = None):
        if grid is None:
            raise ValueError("Puzzle requires a grid")
        if goal is None:
            raise ValueError("Puzzle requires a goal")
        self.id = puzzle_id or str(uuid.uuid4())
        self.grid = grid
        self.goal = goal
        self.solution = solution if solution is not None else SolutionPath()

    @property
    def par(self) -> int:
        return self.solution.par

    def is_solved(self) -> bool:
        return self.goal.is_satisfied_by(self.grid)

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'goal': self.goal.kind,
            'grid': self.grid.to_dict(),
            'solution': self.solution.to_dict(),
        }
        if isinstance(self.goal, DirectMatchGoal):
            data['target'] = self.goal.target_grid.to_dict()
        return data

    def __repr__(self):
        return f"Puzzle({self.id[:8]}, {self.grid.rows}x{self.grid.columns}, par={self.par})"


@dataclass
class GenerationResult:
    """A successfully generated puzzle and how long it took to find"""
    puzzle: Puzzle
    attempts: int = 1
    elapsed: float = 0.0
    difficulty: Optional[DifficultyProfile] = field(default=None)

    @property
    def id(self) -> str:
        return self.puzzle.id

    @property
    def grid(self) -> Grid:
        return self.puzzle.grid

    @property
    def goal(self) -> PuzzleGoal:
        return self.puzzle.goal

    @property
    def solution(self) -> SolutionPath:
        return self.puzzle.solution

    def to_dict(self) -> dict:
        data = self.puzzle.to_dict()
        data['attempts'] = self.attempts
        data['elapsed'] = round(self.elapsed, 4)
        return data
