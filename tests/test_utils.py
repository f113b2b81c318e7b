import logging

import numpy as np
import pytest

from patterncipher.core.goals import DirectMatchGoal
from patterncipher.core.grid import Grid, Move
from patterncipher.core.puzzle import Puzzle, SolutionPath
from patterncipher.core.utils import (
    PuzzleConverter, calculate_efficiency_bonus, calculate_solution_stats, memory_usage, path_to_string, setup_logger, timer
)


def test_string_conversion_with_locks():
    grid = PuzzleConverter.from_string("1 2*;2 1")
    assert grid.to_rows() == [[1, 2], [2, 1]]
    assert grid.is_locked((0, 1))
    assert PuzzleConverter.to_string(grid) == "1 2*;2 1"


def test_from_string_accepts_newlines_and_commas():
    grid = PuzzleConverter.from_string("1,2,3\n4,5,6\n")
    assert grid.to_rows() == [[1, 2, 3], [4, 5, 6]]


@pytest.mark.parametrize("text", ["1 x;2 1", "1 2;3", ""])
def test_from_string_rejects_bad_input(text):
    with pytest.raises(ValueError):
        PuzzleConverter.from_string(text)


def test_array_conversion():
    grid = Grid.from_rows([[1, 2, 3], [4, 5, 6]], locked=[(1, 2)])
    array = PuzzleConverter.to_array(grid)
    mask = PuzzleConverter.locked_mask(grid)

    assert array.shape == (2, 3)
    assert array[1, 0] == 4
    assert mask.sum() == 1 and mask[1, 2]
    assert PuzzleConverter.from_array(array, mask) == grid


def test_from_array_requires_2d():
    with pytest.raises(ValueError):
        PuzzleConverter.from_array(np.arange(4))


def test_path_to_string():
    path = SolutionPath([Move.swap((0, 1), (1, 1)), Move.swap((1, 0), (1, 1))])
    assert path_to_string(path) == "(0, 1)<->(1, 1) | (1, 0)<->(1, 1)"
    assert path_to_string(SolutionPath()) == ""


def test_calculate_solution_stats():
    grid = Grid.from_rows([[3, 1, 2]])
    path = SolutionPath([Move.swap((0, 0), (0, 1)), Move.swap((0, 1), (0, 2))])
    stats = calculate_solution_stats(Puzzle(grid, DirectMatchGoal(Grid.from_rows([[1, 2, 3]])), path))

    assert stats['par'] == 2
    assert stats['horizontal_swaps'] == 2
    assert stats['vertical_swaps'] == 0
    assert stats['cells_touched'] == 3
    assert stats['coverage'] == 1.0


@pytest.mark.parametrize("par, moves_taken, bonus", [
    (5, 5, 50),
    (5, 3, 250),
    (5, 6, 0),
    (0, 0, 0),
])
def test_calculate_efficiency_bonus(par, moves_taken, bonus):
    assert calculate_efficiency_bonus(par, moves_taken) == bonus


def test_setup_logger_replaces_handlers(tmp_path):
    log_file = tmp_path / "solver.log"
    setup_logger("patterncipher.test", log_file=log_file, level="DEBUG")
    logger = setup_logger("patterncipher.test", log_file=log_file, level="DEBUG")

    assert len(logger.handlers) == 2
    assert logger.level == logging.DEBUG

    logger.debug("written to file")
    for handler in logger.handlers:
        handler.flush()
    assert "written to file" in log_file.read_text()


def test_timer_logs_through_owner_logger(caplog):
    class Worker:
        logger = logging.getLogger("patterncipher.test.timer")

        @timer
        def run(self, value):
            return value * 2

    with caplog.at_level(logging.DEBUG, logger="patterncipher.test.timer"):
        assert Worker().run(21) == 42
    assert any("run took" in record.message for record in caplog.records)


def test_memory_usage_is_positive():
    assert memory_usage() > 0
