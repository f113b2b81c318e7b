"""
Validator for grid structure, solution paths and generated puzzles.
"""

from typing import List, Optional

from .goals import DirectMatchGoal, PuzzleGoal, RuleBasedGoal
from .grid import Grid, MoveType
from .puzzle import DifficultyProfile, Puzzle, SolutionPath


class ValidationResult:
    """Result of puzzle validation"""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)

    def merge(self, other: 'ValidationResult'):
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        status = "Valid" if self.is_valid else "Invalid"
        return f"ValidationResult({status}, {len(self.errors)} errors, {len(self.warnings)} warnings)"


class PuzzleValidator:
    """Validates grids, goals and solution paths"""

    @staticmethod
    def validate_grid_structure(grid: Grid) -> ValidationResult:
        """Validate basic grid structure"""
        result = ValidationResult()

        if grid.rows <= 0 or grid.columns <= 0:
            result.add_error("Invalid grid dimensions")

        if len(grid.symbols) != grid.rows * grid.columns:
            result.add_error(f"Grid holds {len(grid.symbols)} tiles, expected {grid.rows * grid.columns}")

        for symbol in grid.symbols:
            if symbol < 0:
                result.add_error(f"Invalid symbol id: {symbol}")
                break

        for pos in grid.locked_positions:
            if not grid.in_bounds(pos):
                result.add_error(f"Locked position {pos} is outside the grid")

        if grid.size > 1 and not grid.legal_moves():
            result.add_warning("Grid has no legal swaps")

        return result

    @staticmethod
    def validate_goal(grid: Grid, goal: PuzzleGoal) -> ValidationResult:
        """Check that a goal can in principle be evaluated against a grid"""
        result = ValidationResult()

        if isinstance(goal, DirectMatchGoal):
            target = goal.target_grid
            if (target.rows, target.columns) != (grid.rows, grid.columns):
                result.add_error(
                    f"Target grid is {target.rows}x{target.columns}, start grid is {grid.rows}x{grid.columns}"
                )
            elif not goal.is_reachable_from(grid):
                result.add_warning("Start and target grids hold different symbols; the goal is unreachable")
            else:
                for pos in grid.locked_positions:
                    if grid.symbol_at(pos) != target.symbol_at(pos):
                        result.add_warning(f"Locked tile at {pos} does not match the target")
        elif isinstance(goal, RuleBasedGoal):
            if not goal.rules:
                result.add_warning("Rule-based goal has no rules")
        else:
            result.add_error(f"Unknown goal type: {type(goal).__name__}")

        return result

    @staticmethod
    def validate_solution_path(grid: Grid, goal: PuzzleGoal, path: SolutionPath) -> ValidationResult:
        """Replay a path from the start grid and check it reaches the goal"""
        result = ValidationResult()

        current = grid
        for step, move in enumerate(path.moves):
            if move.kind != MoveType.SWAP:
                result.add_error(f"Move {step} has unsupported type {move.kind}")
                return result
            if not current.is_move_valid(move):
                result.add_error(f"Move {step} {move} is illegal")
                return result
            current = current.apply(move)

        if not goal.is_satisfied_by(current):
            result.add_error("Path does not reach the goal")

        return result

    @staticmethod
    def validate_puzzle(puzzle: Puzzle, difficulty: Optional[DifficultyProfile] = None) -> ValidationResult:
        """Validate a finished puzzle, optionally against its difficulty profile"""
        result = ValidationResult()
        result.merge(PuzzleValidator.validate_grid_structure(puzzle.grid))
        result.merge(PuzzleValidator.validate_goal(puzzle.grid, puzzle.goal))
        result.merge(PuzzleValidator.validate_solution_path(puzzle.grid, puzzle.goal, puzzle.solution))

        if difficulty is not None:
            if (puzzle.grid.rows, puzzle.grid.columns) != (difficulty.grid_height, difficulty.grid_width):
                result.add_error("Grid dimensions do not match the difficulty profile")
            if puzzle.par < difficulty.minimum_solution_moves:
                result.add_error(
                    f"Par {puzzle.par} is below the minimum of {difficulty.minimum_solution_moves} moves"
                )

        return result

    @staticmethod
    def get_puzzle_statistics(puzzle: Puzzle) -> dict:
        """Get various statistics about the puzzle"""
        grid = puzzle.grid
        stats = {
            'rows': grid.rows,
            'columns': grid.columns,
            'num_tiles': grid.size,
            'num_locked': len(grid.locked_positions),
            'num_symbols': len(grid.symbol_counts()),
            'symbol_distribution': grid.symbol_counts(),
            'legal_moves': len(grid.legal_moves()),
            'par': puzzle.par,
            'is_solved': puzzle.is_solved(),
        }

        if isinstance(puzzle.goal, DirectMatchGoal):
            target = puzzle.goal.target_grid
            misplaced = sum(1 for a, b in zip(grid.symbols, target.symbols) if a != b)
            stats['misplaced_tiles'] = misplaced
            if puzzle.goal.is_reachable_from(grid):
                stats['heuristic'] = puzzle.goal.heuristic(grid)

        return stats
