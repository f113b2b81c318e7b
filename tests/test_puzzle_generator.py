import numpy as np
import pytest

from patterncipher.core.exceptions import GenerationExhausted, UnsupportedGoalKind
from patterncipher.core.grid import apply_moves
from patterncipher.core.puzzle import DifficultyProfile, PuzzleType
from patterncipher.core.validator import PuzzleValidator
from patterncipher.generators import PuzzleGenerator, PuzzleGeneratorConfig
from patterncipher.solvers import SolverConfig


def make_generator(seed=7, **kwargs):
    kwargs.setdefault('solver_config', SolverConfig(time_limit=None, max_expansions=None))
    return PuzzleGenerator(PuzzleGeneratorConfig(random_seed=seed, **kwargs))


@pytest.fixture
def medium_profile():
    return DifficultyProfile(grid_width=3, grid_height=3, unique_symbol_count=9, minimum_solution_moves=4)


def test_generated_puzzle_meets_minimum(medium_profile):
    result = make_generator().generate(medium_profile)

    assert result.solution.par >= 4
    assert (result.grid.rows, result.grid.columns) == (3, 3)
    assert not result.puzzle.is_solved()
    assert result.goal.is_satisfied_by(apply_moves(result.grid, result.solution.moves))
    assert 1 <= result.attempts <= 20
    assert PuzzleValidator.validate_puzzle(result.puzzle, medium_profile)


def test_generated_par_is_optimal(medium_profile, solver):
    result = make_generator(seed=3).generate(medium_profile)
    again = solver.find_solution(result.grid, result.goal)
    assert again.par == result.solution.par


def test_same_seed_same_puzzle(medium_profile):
    first = make_generator(seed=42).generate(medium_profile)
    second = make_generator(seed=42).generate(medium_profile)

    assert first.id == second.id
    assert first.grid == second.grid
    assert first.goal.target_grid == second.goal.target_grid
    assert first.solution == second.solution
    assert first.attempts == second.attempts


def test_different_seeds_give_different_ids(medium_profile):
    first = make_generator(seed=1).generate(medium_profile)
    second = make_generator(seed=2).generate(medium_profile)
    assert first.id != second.id


def test_parallel_attempts_match_sequential():
    profile = DifficultyProfile(grid_width=3, grid_height=3, unique_symbol_count=9, minimum_solution_moves=5)
    sequential = make_generator(seed=5).generate(profile)
    parallel = make_generator(seed=5, workers=4).generate(profile)

    assert parallel.id == sequential.id
    assert parallel.grid == sequential.grid
    assert parallel.solution == sequential.solution
    assert parallel.attempts == sequential.attempts


def test_single_cell_grid():
    profile = DifficultyProfile(grid_width=1, grid_height=1, unique_symbol_count=1, minimum_solution_moves=0)
    result = make_generator().generate(profile)

    assert result.attempts == 1
    assert result.solution.par == 0
    assert result.grid.to_rows() == [[1]]
    assert result.puzzle.is_solved()


def test_exhaustion_raises():
    profile = DifficultyProfile(grid_width=2, grid_height=2, unique_symbol_count=4, minimum_solution_moves=50)
    with pytest.raises(GenerationExhausted) as exc_info:
        make_generator(max_attempts=5).generate(profile)

    assert exc_info.value.attempts == 5
    assert exc_info.value.difficulty == profile


def test_solver_budget_hits_count_as_failed_attempts():
    profile = DifficultyProfile(grid_width=3, grid_height=3, unique_symbol_count=9, minimum_solution_moves=6)
    generator = make_generator(max_attempts=4, solver_config=SolverConfig(max_expansions=2))

    with pytest.raises(GenerationExhausted) as exc_info:
        generator.generate(profile)
    assert exc_info.value.attempts == 4


def test_rule_based_generation_is_unsupported():
    profile = DifficultyProfile(grid_width=3, grid_height=3, unique_symbol_count=3,
                                minimum_solution_moves=2, puzzle_type=PuzzleType.RULE_BASED)
    with pytest.raises(UnsupportedGoalKind):
        make_generator().generate(profile)


def test_fallback_lowers_minimum_until_it_succeeds():
    profile = DifficultyProfile(grid_width=2, grid_height=2, unique_symbol_count=4, minimum_solution_moves=50)
    result = make_generator(max_attempts=2).generate_with_fallback(profile, simplify_steps=5, step=10)

    assert result.difficulty.minimum_solution_moves == 0
    assert result.attempts == 11


def test_fallback_gives_up_after_its_steps():
    profile = DifficultyProfile(grid_width=2, grid_height=2, unique_symbol_count=4, minimum_solution_moves=50)
    with pytest.raises(GenerationExhausted) as exc_info:
        make_generator(max_attempts=2).generate_with_fallback(profile, simplify_steps=1)
    assert exc_info.value.attempts == 4


def test_shuffle_count():
    generator = make_generator()
    profile = DifficultyProfile(grid_width=3, grid_height=3, unique_symbol_count=9, minimum_solution_moves=4)
    assert generator.shuffle_count(profile) == 11
    assert generator.shuffle_count(profile.simplified(4)) == 5


def test_shuffle_record_leads_back_to_solved_grid(medium_profile):
    generator = make_generator()
    rng = np.random.default_rng(0)
    solved = generator._create_solved_grid(medium_profile, rng)
    shuffled, record = generator._shuffle_grid(solved, medium_profile, rng)

    assert record.par == 11
    assert apply_moves(shuffled, record.moves) == solved


@pytest.mark.parametrize("width, height, symbols", [(3, 3, 3), (2, 2, 3), (4, 2, 8), (3, 1, 5)])
def test_solved_grid_draws_from_refilling_pool(width, height, symbols):
    profile = DifficultyProfile(grid_width=width, grid_height=height, unique_symbol_count=symbols,
                                minimum_solution_moves=0)
    grid = make_generator()._create_solved_grid(profile, np.random.default_rng(1))
    counts = grid.symbol_counts()
    cells = width * height

    assert set(counts) <= set(range(1, symbols + 1))
    assert sum(counts.values()) == cells
    full_rounds, remainder = divmod(cells, symbols)
    assert all(full_rounds <= c <= full_rounds + 1 for c in counts.values())
    assert sum(1 for c in counts.values() if c == full_rounds + 1) == remainder


def test_invalid_config():
    with pytest.raises(ValueError):
        PuzzleGeneratorConfig(max_attempts=0)
    with pytest.raises(ValueError):
        PuzzleGeneratorConfig(workers=0)


@pytest.mark.parametrize("kwargs", [
    dict(grid_width=0, grid_height=3, unique_symbol_count=2, minimum_solution_moves=1),
    dict(grid_width=3, grid_height=3, unique_symbol_count=0, minimum_solution_moves=1),
    dict(grid_width=3, grid_height=3, unique_symbol_count=2, minimum_solution_moves=-1),
])
def test_invalid_difficulty_profile(kwargs):
    with pytest.raises(ValueError):
        DifficultyProfile(**kwargs)


def test_generation_result_to_dict(medium_profile):
    data = make_generator().generate(medium_profile).to_dict()
    assert data['goal'] == 'direct_match'
    assert data['solution']['par'] == len(data['solution']['moves'])
    assert data['target']['rows'] == 3
    assert data['attempts'] >= 1
