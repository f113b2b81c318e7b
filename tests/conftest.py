from collections import deque

import numpy as np
import pytest

from patterncipher.core.goals import DirectMatchGoal
from patterncipher.core.grid import Grid
from patterncipher.solvers import AStarSolver, SolverConfig


@pytest.fixture
def solver():
    """An unbounded A* solver"""
    return AStarSolver(SolverConfig(time_limit=None, max_expansions=None))


@pytest.fixture
def one_swap_puzzle():
    """Start grid one swap away from its target: (0, 1) <-> (1, 1)"""
    start = Grid.from_rows([[1, 2], [2, 1]])
    target = Grid.from_rows([[1, 1], [2, 2]])
    return start, DirectMatchGoal(target)


@pytest.fixture
def two_swap_puzzle():
    """The 3 must travel two cells to the right"""
    start = Grid.from_rows([[3, 1, 2]])
    target = Grid.from_rows([[1, 2, 3]])
    return start, DirectMatchGoal(target)


@pytest.fixture
def bfs_par():
    """Returns a function computing the true shortest swap distance by breadth-first search"""
    def _bfs(grid, goal):
        if goal.is_satisfied_by(grid):
            return 0
        seen = {grid.fingerprint()}
        queue = deque([(grid, 0)])
        while queue:
            current, depth = queue.popleft()
            for _, nxt in current.neighbors():
                key = nxt.fingerprint()
                if key in seen:
                    continue
                if goal.is_satisfied_by(nxt):
                    return depth + 1
                seen.add(key)
                queue.append((nxt, depth + 1))
        return None
    return _bfs


@pytest.fixture
def random_pairs():
    """Returns a function building (start, goal) pairs of shuffled small grids"""
    def _pairs(rows, columns, symbols, count, seed=0):
        rng = np.random.default_rng(seed)
        pairs = []
        for _ in range(count):
            target = Grid.from_flat(rows, columns, rng.permutation(symbols).tolist())
            start = Grid.from_flat(rows, columns, rng.permutation(symbols).tolist())
            pairs.append((start, DirectMatchGoal(target)))
        return pairs
    return _pairs
