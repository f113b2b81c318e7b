"""
Utility functions for the puzzle core.
"""

import logging
import os
import time
from functools import wraps
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import psutil

from .. import config
from .grid import Grid
from .puzzle import Puzzle, SolutionPath


def setup_logger(name: str, log_file: Optional[Path] = None, level: str = config.LOG_LEVEL) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator to time function execution"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        execution_time = time.time() - start_time

        # Try to get logger from first argument (usually self)
        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {execution_time:.3f} seconds")
        else:
            logging.getLogger(func.__module__).debug(f"{func.__name__} took {execution_time:.3f} seconds")

        return result
    return wrapper


def memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class PuzzleConverter:
    """Convert grids between different representations"""

    @staticmethod
    def to_array(grid: Grid) -> np.ndarray:
        """Symbol ids as a (rows, columns) integer array"""
        return np.array(grid.symbols, dtype=int).reshape(grid.rows, grid.columns)

    @staticmethod
    def locked_mask(grid: Grid) -> np.ndarray:
        mask = np.zeros((grid.rows, grid.columns), dtype=bool)
        for pos in grid.locked_positions:
            mask[pos.row, pos.col] = True
        return mask

    @staticmethod
    def from_array(array: np.ndarray, locked_mask: Optional[np.ndarray] = None) -> Grid:
        """Create a grid from a 2D symbol array and an optional boolean lock mask"""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {array.shape}")
        locked = []
        if locked_mask is not None:
            locked = [(int(r), int(c)) for r, c in np.argwhere(np.asarray(locked_mask, dtype=bool))]
        return Grid.from_rows(array.astype(int).tolist(), locked)

    @staticmethod
    def to_string(grid: Grid) -> str:
        """Rows separated by ';', symbols by spaces, locked tiles suffixed with '*'"""
        rows = []
        for row in range(grid.rows):
            cells = []
            for col in range(grid.columns):
                text = str(grid.symbol_at((row, col)))
                if grid.is_locked((row, col)):
                    text += '*'
                cells.append(text)
            rows.append(' '.join(cells))
        return ';'.join(rows)

    @staticmethod
    def from_string(s: str) -> Grid:
        """
        Create a grid from its string form.

        Rows are separated by ';' or newlines and symbols by whitespace or
        commas. A trailing '*' marks a locked tile, e.g. ``"1 2*;2 1"``.
        """
        lines = [line.strip() for line in s.replace(';', '\n').splitlines() if line.strip()]
        rows: List[List[int]] = []
        locked = []
        for row_idx, line in enumerate(lines):
            cells = line.replace(',', ' ').split()
            row = []
            for col_idx, cell in enumerate(cells):
                if cell.endswith('*'):
                    locked.append((row_idx, col_idx))
                    cell = cell[:-1]
                try:
                    row.append(int(cell))
                except ValueError:
                    raise ValueError(f"Cannot parse symbol '{cell}' at ({row_idx}, {col_idx})")
            rows.append(row)
        return Grid.from_rows(rows, locked)


def path_to_string(path: SolutionPath) -> str:
    """Compact form like '(0, 1)<->(1, 1) | (1, 0)<->(1, 1)'"""
    return ' | '.join(f"{m.position_a}<->{m.position_b}" for m in path.moves)


def calculate_solution_stats(puzzle: Puzzle) -> Dict[str, Any]:
    """Calculate statistics for a puzzle's solution path"""
    moves = puzzle.solution.moves
    stats: Dict[str, Any] = {
        'par': puzzle.par,
        'horizontal_swaps': sum(1 for m in moves if m.position_a.row == m.position_b.row),
        'vertical_swaps': sum(1 for m in moves if m.position_a.col == m.position_b.col),
    }

    # Cells touched by the solution
    touched = set()
    for move in moves:
        touched.add(move.position_a)
        touched.add(move.position_b)
    stats['cells_touched'] = len(touched)
    stats['coverage'] = len(touched) / puzzle.grid.size if puzzle.grid.size else 0.0

    return stats


def calculate_efficiency_bonus(par: int, moves_taken: int) -> int:
    """
    Score bonus for finishing a puzzle at or under par.

    Args:
        par: Optimal number of moves for the puzzle
        moves_taken: Number of moves the player used

    Returns:
        A flat bonus for matching par plus points for every move saved,
        or 0 when par was exceeded or is not positive
    """
    if moves_taken > par or par <= 0:
        return 0
    return (par - moves_taken) * config.POINTS_PER_MOVE_SAVED + config.PAR_BONUS
