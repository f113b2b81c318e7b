from patterncipher.core.goals import DirectMatchGoal, PuzzleGoal, RuleBasedGoal
from patterncipher.core.grid import Grid, Move
from patterncipher.core.puzzle import DifficultyProfile, Puzzle, SolutionPath
from patterncipher.core.validator import PuzzleValidator, ValidationResult


class AlwaysSatisfied(PuzzleGoal):
    def is_satisfied_by(self, grid):
        return True

    def heuristic(self, grid):
        return 0


def test_validation_result_merge():
    first = ValidationResult()
    first.add_warning("w1")
    second = ValidationResult()
    second.add_error("e1")

    first.merge(second)
    assert not first
    assert first.errors == ["e1"]
    assert first.warnings == ["w1"]


def test_grid_without_swaps_only_warns():
    grid = Grid.from_rows([[1, 2]], locked=[(0, 0)])
    result = PuzzleValidator.validate_grid_structure(grid)
    assert result
    assert result.warnings == ["Grid has no legal swaps"]


def test_single_cell_grid_is_clean():
    result = PuzzleValidator.validate_grid_structure(Grid.from_rows([[1]]))
    assert result and not result.warnings


def test_goal_shape_mismatch_is_an_error():
    result = PuzzleValidator.validate_goal(
        Grid.from_rows([[1, 2]]), DirectMatchGoal(Grid.from_rows([[1], [2]]))
    )
    assert not result


def test_goal_warnings():
    unreachable = PuzzleValidator.validate_goal(
        Grid.from_rows([[1, 1]]), DirectMatchGoal(Grid.from_rows([[1, 2]]))
    )
    assert unreachable and len(unreachable.warnings) == 1

    stuck = PuzzleValidator.validate_goal(
        Grid.from_rows([[2, 1]], locked=[(0, 0)]), DirectMatchGoal(Grid.from_rows([[1, 2]]))
    )
    assert stuck and "Locked tile" in stuck.warnings[0]

    empty = PuzzleValidator.validate_goal(Grid.from_rows([[1, 2]]), RuleBasedGoal([]))
    assert empty and empty.warnings


def test_unknown_goal_type_is_an_error():
    assert not PuzzleValidator.validate_goal(Grid.from_rows([[1]]), AlwaysSatisfied())


def test_solution_path_replay():
    start = Grid.from_rows([[2, 1]])
    goal = DirectMatchGoal(Grid.from_rows([[1, 2]]))

    assert PuzzleValidator.validate_solution_path(start, goal, SolutionPath([Move.swap((0, 0), (0, 1))]))
    assert not PuzzleValidator.validate_solution_path(start, goal, SolutionPath())
    assert not PuzzleValidator.validate_solution_path(start, goal, SolutionPath([Move.swap((0, 0), (0, 2))]))


def test_validate_puzzle_against_profile():
    start = Grid.from_rows([[2, 1]])
    goal = DirectMatchGoal(Grid.from_rows([[1, 2]]))
    puzzle = Puzzle(start, goal, SolutionPath([Move.swap((0, 0), (0, 1))]))

    easy = DifficultyProfile(grid_width=2, grid_height=1, unique_symbol_count=2, minimum_solution_moves=1)
    hard = DifficultyProfile(grid_width=2, grid_height=1, unique_symbol_count=2, minimum_solution_moves=3)
    wrong_shape = DifficultyProfile(grid_width=1, grid_height=2, unique_symbol_count=2, minimum_solution_moves=1)

    assert PuzzleValidator.validate_puzzle(puzzle, easy)
    assert not PuzzleValidator.validate_puzzle(puzzle, hard)
    assert not PuzzleValidator.validate_puzzle(puzzle, wrong_shape)


def test_puzzle_statistics():
    start = Grid.from_rows([[2, 1, 3]], locked=[(0, 2)])
    puzzle = Puzzle(start, DirectMatchGoal(Grid.from_rows([[1, 2, 3]])),
                    SolutionPath([Move.swap((0, 0), (0, 1))]))
    stats = PuzzleValidator.get_puzzle_statistics(puzzle)

    assert stats['num_locked'] == 1
    assert stats['legal_moves'] == 1
    assert stats['par'] == 1
    assert stats['misplaced_tiles'] == 2
    assert stats['heuristic'] == 1
    assert stats['is_solved'] is False


def test_statistics_skip_heuristic_when_unreachable():
    puzzle = Puzzle(Grid.from_rows([[1, 1]]), DirectMatchGoal(Grid.from_rows([[1, 2]])))
    assert 'heuristic' not in PuzzleValidator.get_puzzle_statistics(puzzle)
