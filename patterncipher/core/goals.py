"""
Puzzle goals and the heuristics the solver uses to estimate distance to them.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Tuple

from .grid import Grid, GridPosition, PositionLike, as_position


class PuzzleGoal(ABC):
    """Abstract objective of a puzzle"""

    kind: str = "base"

    @abstractmethod
    def is_satisfied_by(self, grid: Grid) -> bool:
        """Check if the grid state meets the goal"""
        pass

    @abstractmethod
    def heuristic(self, grid: Grid) -> int:
        """
        Estimate the number of moves still needed.

        Must be zero exactly when the goal is satisfied.
        """
        pass


class DirectMatchGoal(PuzzleGoal):
    """Every cell must hold the symbol of the same cell in a target grid"""

    kind = "direct_match"

    def __init__(self, target_grid: Grid):
        self.target_grid = target_grid

        # Where each symbol should be, built once per goal
        self._target_positions: Dict[int, Tuple[GridPosition, ...]] = {}
        targets: Dict[int, List[GridPosition]] = {}
        for tile in target_grid.tiles():
            targets.setdefault(tile.symbol, []).append(tile.position)
        self._target_positions = {symbol: tuple(positions) for symbol, positions in targets.items()}

    def is_satisfied_by(self, grid: Grid) -> bool:
        return (grid.rows == self.target_grid.rows
                and grid.columns == self.target_grid.columns
                and grid.symbols == self.target_grid.symbols)

    def is_reachable_from(self, grid: Grid) -> bool:
        """Swaps only permute symbols, so shape and symbol counts must agree"""
        return (grid.rows == self.target_grid.rows
                and grid.columns == self.target_grid.columns
                and grid.symbol_counts() == self.target_grid.symbol_counts())

    def heuristic(self, grid: Grid) -> int:
        """
        Half the summed Manhattan displacement of misplaced tiles.

        A single adjacent swap moves two tiles by one step each, so it can
        reduce the total by at most 2. When a symbol occurs in several target
        cells, a tile's displacement is its distance to the nearest of them.

        Raises:
            ValueError: If the grid shape differs from the target or holds a
                symbol the target never uses
        """
        if grid.rows != self.target_grid.rows or grid.columns != self.target_grid.columns:
            raise ValueError(
                f"Grid shape {grid.rows}x{grid.columns} does not match target "
                f"{self.target_grid.rows}x{self.target_grid.columns}"
            )

        target_symbols = self.target_grid.symbols
        total_distance = 0
        for index, symbol in enumerate(grid.symbols):
            if target_symbols[index] == symbol:
                continue
            targets = self._target_positions.get(symbol)
            if targets is None:
                raise ValueError(f"Symbol {symbol} does not appear in the target grid")
            pos = GridPosition(index // grid.columns, index % grid.columns)
            total_distance += min(pos.manhattan(target) for target in targets)

        if total_distance == 0:
            return 0
        # Keeps h == 0 exactly when the goal is satisfied
        return max(1, total_distance // 2)

    def __repr__(self):
        return f"DirectMatchGoal(target={self.target_grid!r})"


class GridRule(ABC):
    """A predicate over a grid state, independently testable"""

    @abstractmethod
    def is_satisfied_by(self, grid: Grid) -> bool:
        pass


class SymbolAtPositionRule(GridRule):
    """A given cell must hold a given symbol"""

    def __init__(self, position: PositionLike, symbol: int):
        self.position = as_position(position)
        self.symbol = symbol

    def is_satisfied_by(self, grid: Grid) -> bool:
        return grid.in_bounds(self.position) and grid.symbol_at(self.position) == self.symbol

    def __repr__(self):
        return f"SymbolAtPositionRule({self.position}, symbol={self.symbol})"


class RowUniformRule(GridRule):
    """Every cell of a row must hold the same symbol"""

    def __init__(self, row: int):
        self.row = row

    def is_satisfied_by(self, grid: Grid) -> bool:
        if not 0 <= self.row < grid.rows:
            return False
        start = self.row * grid.columns
        return len(set(grid.symbols[start:start + grid.columns])) == 1

    def __repr__(self):
        return f"RowUniformRule(row={self.row})"


class ColumnUniformRule(GridRule):
    """Every cell of a column must hold the same symbol"""

    def __init__(self, col: int):
        self.col = col

    def is_satisfied_by(self, grid: Grid) -> bool:
        if not 0 <= self.col < grid.columns:
            return False
        return len(set(grid.symbols[self.col::grid.columns])) == 1

    def __repr__(self):
        return f"ColumnUniformRule(col={self.col})"


class RuleBasedGoal(PuzzleGoal):
    """All rules of an ordered rule set must hold"""

    kind = "rule_based"

    def __init__(self, rules: Iterable[GridRule]):
        self.rules: Tuple[GridRule, ...] = tuple(rules)

    def is_satisfied_by(self, grid: Grid) -> bool:
        return all(rule.is_satisfied_by(grid) for rule in self.rules)

    def heuristic(self, grid: Grid) -> int:
        # Number of unsatisfied rules. Only admissible while no single rule
        # needs more than one move to fix.
        return sum(1 for rule in self.rules if not rule.is_satisfied_by(grid))

    def __repr__(self):
        return f"RuleBasedGoal({len(self.rules)} rules)"


def heuristic(grid: Grid, goal: PuzzleGoal) -> int:
    """Non-negative estimate of moves from grid to goal; zero iff satisfied"""
    return goal.heuristic(grid)


def is_satisfied(grid: Grid, goal: PuzzleGoal) -> bool:
    return goal.is_satisfied_by(grid)
