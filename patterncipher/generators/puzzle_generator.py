"""
Puzzle generator: shuffle a solved grid, then prove its par with the solver.
"""

import threading
import time
import uuid
from concurrent.futures import CancelledError, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .. import config as defaults
from ..core.exceptions import GenerationExhausted, SearchBudgetExceeded, SearchCancelled, UnsupportedGoalKind
from ..core.goals import DirectMatchGoal
from ..core.grid import Grid, GridPosition, Tile
from ..core.puzzle import DifficultyProfile, GenerationResult, Puzzle, PuzzleType, SolutionPath
from ..core.utils import setup_logger, timer
from ..solvers import BaseSolver, SolverConfig, get_solver


# Puzzle types with a construction rule
CONSTRUCTIBLE_TYPES = (PuzzleType.DIRECT_MATCH,)


class PuzzleGeneratorConfig:
    """Configuration for puzzle generator"""

    def __init__(self, **kwargs):
        self.max_attempts: int = kwargs.get('max_attempts', defaults.MAX_GENERATION_ATTEMPTS)
        self.random_seed: Optional[int] = kwargs.get('random_seed', None)
        self.workers: int = kwargs.get('workers', defaults.GENERATION_WORKERS)
        self.shuffle_multiplier: float = kwargs.get('shuffle_multiplier', defaults.SHUFFLE_MULTIPLIER)
        self.shuffle_padding: int = kwargs.get('shuffle_padding', defaults.SHUFFLE_PADDING)
        self.solver_name: str = kwargs.get('solver_name', 'astar')
        self.solver_config: SolverConfig = kwargs.get('solver_config') or SolverConfig()
        self.verbose: bool = kwargs.get('verbose', False)
        self.log_file = kwargs.get('log_file', None)

        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")


@dataclass
class AttemptOutcome:
    """What happened in one generation attempt"""
    index: int
    puzzle: Optional[Puzzle] = None
    reason: str = ""
    shuffle_moves: int = 0


class PuzzleGenerator:
    """Generate puzzles whose optimal solution meets a minimum move count"""

    def __init__(self, config: Optional[PuzzleGeneratorConfig] = None,
                 solver: Optional[BaseSolver] = None):
        self.config = config or PuzzleGeneratorConfig()
        self.logger = setup_logger(
            self.__class__.__name__,
            self.config.log_file,
            "DEBUG" if self.config.verbose else "INFO"
        )
        self.solver = solver or get_solver(self.config.solver_name, self.config.solver_config)

        # Every attempt gets its own child stream, so results never depend on
        # which worker ran which attempt
        self._seed_sequence = np.random.SeedSequence(self.config.random_seed)

    def shuffle_count(self, difficulty: DifficultyProfile) -> int:
        return int(difficulty.minimum_solution_moves * self.config.shuffle_multiplier) + self.config.shuffle_padding

    @timer
    def generate(self, difficulty: DifficultyProfile) -> GenerationResult:
        """
        Generate a puzzle for the given difficulty profile.

        Raises:
            UnsupportedGoalKind: If the puzzle type has no construction rule
            GenerationExhausted: If no attempt met the minimum move count
        """
        if difficulty.puzzle_type not in CONSTRUCTIBLE_TYPES:
            raise UnsupportedGoalKind(difficulty.puzzle_type.value)

        self.logger.info(f"Generating puzzle: {difficulty}")
        start_time = time.perf_counter()
        seeds = self._seed_sequence.spawn(self.config.max_attempts)

        if self.config.workers > 1:
            outcome = self._run_parallel(difficulty, seeds)
        else:
            outcome = self._run_sequential(difficulty, seeds)

        if outcome is None:
            self.logger.error(f"Failed to generate valid puzzle after {self.config.max_attempts} attempts")
            raise GenerationExhausted(self.config.max_attempts, difficulty)

        elapsed = time.perf_counter() - start_time
        self.logger.info(
            f"Successfully generated puzzle on attempt {outcome.index + 1} "
            f"(par {outcome.puzzle.par}, {elapsed:.2f}s)"
        )
        return GenerationResult(
            puzzle=outcome.puzzle,
            attempts=outcome.index + 1,
            elapsed=elapsed,
            difficulty=difficulty,
        )

    def generate_with_fallback(self, difficulty: DifficultyProfile, simplify_steps: int = 3,
                               step: int = 1) -> GenerationResult:
        """
        Generate, lowering the minimum move count when the attempt budget runs out.

        Tries the given profile first, then up to simplify_steps simplified
        profiles, each with the minimum lowered by another step.

        Raises:
            UnsupportedGoalKind: If the puzzle type has no construction rule
            GenerationExhausted: If every profile exhausted its attempts
        """
        total_attempts = 0
        current = difficulty
        for level in range(simplify_steps + 1):
            try:
                result = self.generate(current)
            except GenerationExhausted as e:
                total_attempts += e.attempts
                if current.minimum_solution_moves == 0:
                    break
                current = difficulty.simplified(step * (level + 1))
                self.logger.warning(f"Simplifying parameters: {current}")
                continue
            result.attempts += total_attempts
            return result

        raise GenerationExhausted(total_attempts, difficulty)

    # -- attempt scheduling ---------------------------------------------------

    def _run_sequential(self, difficulty: DifficultyProfile,
                        seeds: List[np.random.SeedSequence]) -> Optional[AttemptOutcome]:
        for index, seed in enumerate(seeds):
            outcome = self._attempt(index, difficulty, np.random.default_rng(seed))
            if outcome.puzzle is not None:
                return outcome
            self.logger.debug(f"Attempt {index + 1} rejected: {outcome.reason}")
        return None

    def _run_parallel(self, difficulty: DifficultyProfile,
                      seeds: List[np.random.SeedSequence]) -> Optional[AttemptOutcome]:
        """
        Run attempts on a thread pool.

        The lowest-indexed successful attempt wins, as it would sequentially.
        Once attempt k succeeds, searches for attempts after k are cancelled.
        """
        cancel_events = [threading.Event() for _ in seeds]
        best: Optional[AttemptOutcome] = None

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = {
                executor.submit(self._attempt, index, difficulty,
                                np.random.default_rng(seed), cancel_events[index]): index
                for index, seed in enumerate(seeds)
            }

            for future in as_completed(futures):
                index = futures[future]
                try:
                    outcome = future.result()
                except (SearchCancelled, CancelledError):
                    continue

                if outcome.puzzle is None:
                    self.logger.debug(f"Attempt {index + 1} rejected: {outcome.reason}")
                    continue

                if best is None or outcome.index < best.index:
                    best = outcome
                    for later in range(index + 1, len(seeds)):
                        cancel_events[later].set()
                    for other, other_index in futures.items():
                        if other_index > index:
                            other.cancel()

        return best

    # -- single attempt -------------------------------------------------------

    def _attempt(self, index: int, difficulty: DifficultyProfile, rng: np.random.Generator,
                 cancel_event: Optional[threading.Event] = None) -> AttemptOutcome:
        """Build, shuffle and validate one candidate puzzle"""
        solved_grid = self._create_solved_grid(difficulty, rng)
        goal = DirectMatchGoal(solved_grid)
        shuffled_grid, ideal_path = self._shuffle_grid(solved_grid, difficulty, rng)
        puzzle_id = str(uuid.UUID(bytes=rng.bytes(16), version=4))

        try:
            optimal = self.solver.try_find_solution(shuffled_grid, goal, cancel_event)
        except SearchBudgetExceeded as e:
            return AttemptOutcome(index, reason=f"search budget exceeded ({e})",
                                  shuffle_moves=ideal_path.par)

        if optimal is None:
            return AttemptOutcome(index, reason="shuffled grid has no solution",
                                  shuffle_moves=ideal_path.par)

        if optimal.par < difficulty.minimum_solution_moves:
            return AttemptOutcome(
                index,
                reason=f"too easy: par {optimal.par} < {difficulty.minimum_solution_moves}",
                shuffle_moves=ideal_path.par,
            )

        puzzle = Puzzle(shuffled_grid, goal, optimal, puzzle_id=puzzle_id)
        return AttemptOutcome(index, puzzle=puzzle, shuffle_moves=ideal_path.par)

    def _create_solved_grid(self, difficulty: DifficultyProfile, rng: np.random.Generator) -> Grid:
        """Fill cells row-major, drawing symbols without replacement from a refilling pool"""
        symbols = list(range(1, difficulty.unique_symbol_count + 1))
        available: List[int] = []
        tiles = []

        for row in range(difficulty.grid_height):
            for col in range(difficulty.grid_width):
                if not available:
                    available.extend(symbols)
                symbol = available.pop(int(rng.integers(len(available))))
                tiles.append(Tile(GridPosition(row, col), symbol, False))

        return Grid(difficulty.grid_height, difficulty.grid_width, tiles)

    def _shuffle_grid(self, goal_grid: Grid, difficulty: DifficultyProfile,
                      rng: np.random.Generator) -> Tuple[Grid, SolutionPath]:
        """
        Apply random legal swaps to the solved grid.

        Returns the shuffled grid and the reversed swap record, which leads
        back to the solved state but is not necessarily optimal.
        """
        grid = goal_grid
        applied = []

        for _ in range(self.shuffle_count(difficulty)):
            moves = grid.legal_moves()
            if not moves:
                break
            move = moves[int(rng.integers(len(moves)))]
            grid = grid.apply(move)
            applied.append(move)

        applied.reverse()
        return grid, SolutionPath(applied)
