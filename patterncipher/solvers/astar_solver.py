"""
A* solver over grid states reachable by adjacent swaps.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from .base_solver import BaseSolver, SearchContext
from ..core.goals import DirectMatchGoal, PuzzleGoal
from ..core.grid import Grid, Move
from ..core.puzzle import SolutionPath


class _Node:
    """Search tree node; parent links are only used to rebuild the path"""

    __slots__ = ('grid', 'parent', 'move', 'g', 'h')

    def __init__(self, grid: Grid, parent: Optional['_Node'], move: Optional[Move], g: int, h: int):
        self.grid = grid
        self.parent = parent
        self.move = move
        self.g = g
        self.h = h

    @property
    def f(self) -> int:
        return self.g + self.h


class AStarSolver(BaseSolver):
    """
    Best-first search returning a minimum-move solution.

    The open set is a binary heap keyed by (f, h, insertion order): lowest
    total cost first, then lowest heuristic, then the node queued earliest.
    A cheaper path to a state already queued pushes a new entry and the old
    one is skipped when it surfaces.
    """

    name = "astar"

    def _search(self, grid: Grid, goal: PuzzleGoal, context: SearchContext) -> Optional[SolutionPath]:
        if isinstance(goal, DirectMatchGoal) and not goal.is_reachable_from(grid):
            self.logger.debug("Start grid holds different symbols than the target")
            return None

        counter = itertools.count()
        start = _Node(grid, None, None, 0, goal.heuristic(grid))
        open_heap: List[Tuple[int, int, int, _Node]] = [(start.f, start.h, next(counter), start)]
        open_costs: Dict[str, int] = {grid.fingerprint(): 0}
        closed: Set[str] = set()
        context.generated = 1

        while open_heap:
            _, _, _, current = heapq.heappop(open_heap)
            key = current.grid.fingerprint()
            if open_costs.get(key) != current.g:
                continue  # replaced by a cheaper entry

            if current.h == 0:
                return self._reconstruct_path(current)

            del open_costs[key]
            closed.add(key)
            context.tick()

            interval = self.config.progress_interval
            if self._progress_callbacks and interval and context.expansions % interval == 0:
                self._call_progress_callbacks(context, {
                    'open': len(open_costs),
                    'closed': len(closed),
                    'f': current.f,
                })

            g = current.g + 1
            for move, neighbor in current.grid.neighbors():
                neighbor_key = neighbor.fingerprint()
                if neighbor_key in closed:
                    continue

                known = open_costs.get(neighbor_key)
                if known is not None and known <= g:
                    continue

                h = goal.heuristic(neighbor)
                node = _Node(neighbor, current, move, g, h)
                open_costs[neighbor_key] = g
                heapq.heappush(open_heap, (node.f, node.h, next(counter), node))
                context.generated += 1

        return None

    @staticmethod
    def _reconstruct_path(goal_node: _Node) -> SolutionPath:
        moves = []
        node = goal_node
        while node.parent is not None:
            moves.append(node.move)
            node = node.parent
        moves.reverse()
        return SolutionPath(moves)
