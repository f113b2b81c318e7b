"""
Solvers for swap puzzles.
"""

from .base_solver import BaseSolver, SolverConfig, SolverResult, SearchContext, SearchStatus
from .astar_solver import AStarSolver

__all__ = [
    # Base classes
    'BaseSolver',
    'SolverConfig',
    'SolverResult',
    'SearchContext',
    'SearchStatus',

    # A* solver
    'AStarSolver',
]


# Solver registry for easy access
SOLVER_REGISTRY = {
    'astar': AStarSolver,
}


def get_solver(name: str, config: SolverConfig = None) -> BaseSolver:
    """
    Get a solver by name.

    Args:
        name: Solver name (astar)
        config: Optional solver configuration

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name is not recognized
    """
    solver_class = SOLVER_REGISTRY.get(name.lower())
    if not solver_class:
        raise ValueError(f"Unknown solver: {name}. Available: {list(SOLVER_REGISTRY.keys())}")

    return solver_class(config or SolverConfig())
