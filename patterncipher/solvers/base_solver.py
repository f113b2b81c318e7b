"""
Base solver class for swap puzzles.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Callable, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
import threading
import time

from .. import config as defaults
from ..core.exceptions import NoSolutionFound, SearchBudgetExceeded, SearchCancelled
from ..core.goals import PuzzleGoal
from ..core.grid import Grid, Move
from ..core.puzzle import Puzzle, SolutionPath
from ..core.validator import PuzzleValidator
from ..core.utils import setup_logger, memory_usage


class SearchStatus(Enum):
    """Outcome of a single search"""
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    BUDGET_EXCEEDED = "budget_exceeded"
    CANCELLED = "cancelled"
    INVALID = "invalid"


@dataclass
class SolverConfig:
    """Configuration for puzzle solvers"""
    time_limit: Optional[float] = defaults.SOLVER_TIME_LIMIT  # seconds, None for unbounded
    max_expansions: Optional[int] = defaults.SOLVER_MAX_EXPANSIONS
    verbose: bool = False
    log_file: Optional[Path] = None
    validate_solution: bool = True
    progress_interval: int = 1000  # expansions between progress callbacks

    # Algorithm-specific parameters
    extra_params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SolverResult:
    """Result from puzzle solver"""
    status: SearchStatus
    solution: Optional[SolutionPath] = None
    solve_time: float = 0.0
    expansions: int = 0
    generated: int = 0
    memory_used: float = 0.0  # MB
    message: str = ""
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status == SearchStatus.SOLVED

    @property
    def par(self) -> Optional[int]:
        return self.solution.par if self.solution is not None else None

    def __repr__(self):
        return (f"SolverResult({self.status.value}, par={self.par}, "
                f"time={self.solve_time:.2f}s, expansions={self.expansions})")


@dataclass
class SearchContext:
    """
    Per-search bookkeeping: budget counters and the cancellation token.

    One context is created for every call to solve(), so a single solver
    instance can be shared by several threads.
    """
    time_limit: Optional[float] = None
    max_expansions: Optional[int] = None
    cancel_event: threading.Event = field(default_factory=threading.Event)
    start_time: float = field(default_factory=time.perf_counter)
    expansions: int = 0
    generated: int = 0

    def is_cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def elapsed_time(self) -> float:
        return time.perf_counter() - self.start_time

    def tick(self):
        """
        Count one node expansion and enforce the budget.

        Raises:
            SearchCancelled: If the cancellation token is set
            SearchBudgetExceeded: If the expansion or time limit is exceeded
        """
        if self.cancel_event.is_set():
            raise SearchCancelled(f"Search cancelled after {self.expansions} expansions")

        self.expansions += 1
        if self.max_expansions is not None and self.expansions > self.max_expansions:
            raise SearchBudgetExceeded(
                f"Maximum expansions ({self.max_expansions}) exceeded",
                self.expansions, self.elapsed_time()
            )
        if self.time_limit is not None and self.elapsed_time() > self.time_limit:
            raise SearchBudgetExceeded(
                f"Time limit ({self.time_limit}s) exceeded",
                self.expansions, self.elapsed_time()
            )


PuzzleOrGrid = Union[Puzzle, Grid]


class BaseSolver(ABC):
    """Abstract base class for swap puzzle solvers"""

    name: str = "base"

    def __init__(self, config: Optional[SolverConfig] = None):
        """Initialize solver with configuration."""
        self.config = config or SolverConfig()
        self.logger = setup_logger(
            self.__class__.__name__,
            self.config.log_file,
            "DEBUG" if self.config.verbose else "INFO"
        )

        # Callbacks for monitoring progress
        self._progress_callbacks: List[Callable] = []

    def add_progress_callback(self, callback: Callable):
        """Add a callback function called as callback(expansions, elapsed, stats)."""
        self._progress_callbacks.append(callback)

    def solve(self, grid: Grid, goal: PuzzleGoal,
              cancel_event: Optional[threading.Event] = None) -> SolverResult:
        """Search for an optimal move sequence from grid to goal."""
        self.logger.debug(f"Starting {self.__class__.__name__} on {grid!r} towards {goal!r}")

        # Validate input
        validation = PuzzleValidator.validate_grid_structure(grid)
        validation.merge(PuzzleValidator.validate_goal(grid, goal))
        if not validation:
            return SolverResult(
                status=SearchStatus.INVALID,
                message=f"Invalid puzzle: {'; '.join(validation.errors)}"
            )

        context = SearchContext(
            time_limit=self.config.time_limit,
            max_expansions=self.config.max_expansions,
        )
        if cancel_event is not None:
            context.cancel_event = cancel_event
        initial_memory = memory_usage()

        try:
            path = self._search(grid, goal, context)
        except SearchBudgetExceeded as e:
            self.logger.warning(f"Search gave up: {e}")
            return self._finish(SearchStatus.BUDGET_EXCEEDED, None, context, initial_memory, str(e))
        except SearchCancelled as e:
            self.logger.debug(str(e))
            return self._finish(SearchStatus.CANCELLED, None, context, initial_memory, str(e))

        if path is None:
            self.logger.info(f"No solution exists ({context.expansions} expansions)")
            return self._finish(SearchStatus.UNSOLVABLE, None, context, initial_memory,
                                "No solution exists from this state")

        # Validate solution if found
        if self.config.validate_solution:
            check = PuzzleValidator.validate_solution_path(grid, goal, path)
            if not check:
                message = f"Invalid solution: {'; '.join(check.errors)}"
                self.logger.error(message)
                return self._finish(SearchStatus.INVALID, None, context, initial_memory, message)

        result = self._finish(SearchStatus.SOLVED, path, context, initial_memory, "")
        self.logger.info(
            f"Solved with par {path.par} in {result.solve_time:.2f}s ({result.expansions} expansions)"
        )
        return result

    def _finish(self, status: SearchStatus, path: Optional[SolutionPath], context: SearchContext,
                initial_memory: float, message: str) -> SolverResult:
        return SolverResult(
            status=status,
            solution=path,
            solve_time=context.elapsed_time(),
            expansions=context.expansions,
            generated=context.generated,
            memory_used=memory_usage() - initial_memory,
            message=message,
        )

    @abstractmethod
    def _search(self, grid: Grid, goal: PuzzleGoal, context: SearchContext) -> Optional[SolutionPath]:
        """Implement the specific search; return None when no solution exists."""
        pass

    def _call_progress_callbacks(self, context: SearchContext, stats: Optional[Dict[str, Any]] = None):
        """Call all registered progress callbacks"""
        for callback in self._progress_callbacks:
            try:
                callback(context.expansions, context.elapsed_time(), stats or {})
            except Exception as e:
                self.logger.error(f"Error in progress callback: {e}")

    # -- solvability validator contract --------------------------------------

    @staticmethod
    def _unpack(puzzle: PuzzleOrGrid, goal: Optional[PuzzleGoal]) -> Tuple[Grid, PuzzleGoal]:
        if isinstance(puzzle, Puzzle):
            return puzzle.grid, goal or puzzle.goal
        if goal is None:
            raise ValueError("A goal is required when solving a bare grid")
        return puzzle, goal

    def try_find_solution(self, puzzle: PuzzleOrGrid, goal: Optional[PuzzleGoal] = None,
                          cancel_event: Optional[threading.Event] = None) -> Optional[SolutionPath]:
        """
        Find the optimal solution path, or None if none exists.

        Raises:
            SearchBudgetExceeded: If the search hit its expansion or time limit
            SearchCancelled: If the cancellation token was set
            ValueError: If the grid or goal is malformed
        """
        grid, goal = self._unpack(puzzle, goal)
        result = self.solve(grid, goal, cancel_event)

        if result.status == SearchStatus.SOLVED:
            return result.solution
        if result.status == SearchStatus.BUDGET_EXCEEDED:
            raise SearchBudgetExceeded(result.message, result.expansions, result.solve_time)
        if result.status == SearchStatus.CANCELLED:
            raise SearchCancelled(result.message)
        if result.status == SearchStatus.INVALID:
            raise ValueError(result.message)
        return None

    def find_solution(self, puzzle: PuzzleOrGrid, goal: Optional[PuzzleGoal] = None,
                      cancel_event: Optional[threading.Event] = None) -> SolutionPath:
        """Like try_find_solution() but raises NoSolutionFound instead of returning None."""
        path = self.try_find_solution(puzzle, goal, cancel_event)
        if path is None:
            raise NoSolutionFound("No solution exists from this state")
        return path

    def hint(self, puzzle: PuzzleOrGrid, goal: Optional[PuzzleGoal] = None) -> Optional[Move]:
        """First move of an optimal path from the current state, None if solved or unsolvable."""
        path = self.try_find_solution(puzzle, goal)
        if not path:
            return None
        return path.moves[0]
