"""
Grid and move model for swap puzzles.

A grid is an immutable value: the symbol layout is kept as a flat row-major
tuple of symbol ids and the locked cells as a frozenset of positions, so a
swap only ever produces a new small tuple.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .exceptions import IllegalSwap


class MoveType(Enum):
    """Kinds of moves a player can make"""
    SWAP = "swap"


@dataclass(frozen=True, order=True)
class GridPosition:
    """A (row, column) cell address"""
    row: int
    col: int

    def is_adjacent_to(self, other: 'GridPosition') -> bool:
        """Check if the two cells differ by exactly one row or one column"""
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def manhattan(self, other: 'GridPosition') -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def __repr__(self):
        return f"({self.row}, {self.col})"


PositionLike = Union[GridPosition, Tuple[int, int]]


def as_position(value: PositionLike) -> GridPosition:
    """Accept either a GridPosition or a plain (row, col) tuple"""
    if isinstance(value, GridPosition):
        return value
    row, col = value
    return GridPosition(int(row), int(col))


@dataclass(frozen=True)
class Tile:
    """A symbol occupying one cell; locked tiles never move"""
    position: GridPosition
    symbol: int
    is_locked: bool = False


@dataclass(frozen=True)
class Move:
    """A player move. Swaps are their own inverse."""
    position_a: GridPosition
    position_b: GridPosition
    kind: MoveType = MoveType.SWAP

    @classmethod
    def swap(cls, position_a: PositionLike, position_b: PositionLike) -> 'Move':
        return cls(as_position(position_a), as_position(position_b), MoveType.SWAP)

    def inverse(self) -> 'Move':
        return self

    def to_dict(self) -> dict:
        return {
            'kind': self.kind.value,
            'a': [self.position_a.row, self.position_a.col],
            'b': [self.position_b.row, self.position_b.col],
        }

    def __repr__(self):
        return f"Move({self.kind.value} {self.position_a}<->{self.position_b})"


class Grid:
    """Fixed-shape container of tiles addressed by (row, column)"""

    def __init__(self, rows: int, columns: int, tiles: Iterable[Tile]):
        """
        Build a grid from one tile per cell.

        Args:
            rows: Number of rows (must be positive)
            columns: Number of columns (must be positive)
            tiles: Exactly rows * columns tiles covering every cell once

        Raises:
            ValueError: If the dimensions or the tile layout are invalid
        """
        if rows <= 0:
            raise ValueError("Grid must have a positive number of rows")
        if columns <= 0:
            raise ValueError("Grid must have a positive number of columns")

        tile_list = list(tiles)
        if len(tile_list) != rows * columns:
            raise ValueError(
                f"Expected {rows * columns} tiles for a {rows}x{columns} grid, got {len(tile_list)}"
            )

        symbols: List[Optional[int]] = [None] * (rows * columns)
        locked = set()
        for tile in tile_list:
            pos = tile.position
            if not (0 <= pos.row < rows and 0 <= pos.col < columns):
                raise ValueError(f"Tile at {pos} lies outside the {rows}x{columns} grid")
            index = pos.row * columns + pos.col
            if symbols[index] is not None:
                raise ValueError(f"Duplicate tile at position {pos}")
            symbols[index] = int(tile.symbol)
            if tile.is_locked:
                locked.add(pos)

        self._rows = rows
        self._columns = columns
        self._symbols: Tuple[int, ...] = tuple(symbols)
        self._locked = frozenset(locked)

    @classmethod
    def _from_state(cls, rows: int, columns: int, symbols: Tuple[int, ...],
                    locked: frozenset) -> 'Grid':
        """Wrap an already validated state without re-checking it"""
        grid = cls.__new__(cls)
        grid._rows = rows
        grid._columns = columns
        grid._symbols = symbols
        grid._locked = locked
        return grid

    @classmethod
    def from_flat(cls, rows: int, columns: int, symbols: Sequence[int],
                  locked: Iterable[PositionLike] = ()) -> 'Grid':
        """
        Create a grid from a flat row-major symbol list.

        Example::

            Grid.from_flat(2, 2, [1, 2, 2, 1])
        """
        if len(symbols) != rows * columns:
            raise ValueError(
                f"Expected {rows * columns} symbols for a {rows}x{columns} grid, got {len(symbols)}"
            )
        locked_set = {as_position(p) for p in locked}
        tiles = []
        for index, symbol in enumerate(symbols):
            pos = GridPosition(index // columns, index % columns)
            tiles.append(Tile(pos, int(symbol), pos in locked_set))
        if len(locked_set) != sum(1 for t in tiles if t.is_locked):
            raise ValueError("Locked positions must lie inside the grid")
        return cls(rows, columns, tiles)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]],
                  locked: Iterable[PositionLike] = ()) -> 'Grid':
        """Create a grid from nested rows of symbols"""
        if not rows or not rows[0]:
            raise ValueError("Grid must have a positive number of rows and columns")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length")
        flat = [symbol for row in rows for symbol in row]
        return cls.from_flat(len(rows), width, flat, locked)

    # -- queries --------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def size(self) -> int:
        return self._rows * self._columns

    @property
    def symbols(self) -> Tuple[int, ...]:
        """Row-major symbol ids"""
        return self._symbols

    @property
    def locked_positions(self) -> frozenset:
        return self._locked

    def in_bounds(self, position: PositionLike) -> bool:
        pos = as_position(position)
        return 0 <= pos.row < self._rows and 0 <= pos.col < self._columns

    def _index(self, pos: GridPosition) -> int:
        return pos.row * self._columns + pos.col

    def symbol_at(self, position: PositionLike) -> int:
        pos = as_position(position)
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} is not on the grid")
        return self._symbols[self._index(pos)]

    def is_locked(self, position: PositionLike) -> bool:
        return as_position(position) in self._locked

    def get_tile_at(self, position: PositionLike) -> Tile:
        pos = as_position(position)
        return Tile(pos, self.symbol_at(pos), pos in self._locked)

    def positions(self) -> Iterator[GridPosition]:
        for row in range(self._rows):
            for col in range(self._columns):
                yield GridPosition(row, col)

    def tiles(self) -> Iterator[Tile]:
        """Iterate over every tile in row-major order"""
        for pos in self.positions():
            yield Tile(pos, self._symbols[self._index(pos)], pos in self._locked)

    def symbol_counts(self) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for symbol in self._symbols:
            counts[symbol] = counts.get(symbol, 0) + 1
        return counts

    def fingerprint(self) -> str:
        """Canonical row-major string of symbol ids, used for closed-set membership"""
        return ','.join(str(symbol) for symbol in self._symbols)

    # -- moves ----------------------------------------------------------------

    def _check_swap(self, pos_a: GridPosition, pos_b: GridPosition) -> Optional[str]:
        """Return the reason a swap is illegal, or None if it is legal"""
        if not self.in_bounds(pos_a) or not self.in_bounds(pos_b):
            return "position out of bounds"
        if not pos_a.is_adjacent_to(pos_b):
            return "positions are not adjacent"
        if pos_a in self._locked or pos_b in self._locked:
            return "tile is locked"
        return None

    def is_move_valid(self, move: Move) -> bool:
        if move.kind != MoveType.SWAP:
            return False
        return self._check_swap(move.position_a, move.position_b) is None

    def swap(self, position_a: PositionLike, position_b: PositionLike) -> 'Grid':
        """
        Return a new grid with the two tiles exchanged.

        Raises:
            IllegalSwap: If either position is out of bounds, either tile is
                locked, or the positions are not adjacent
        """
        pos_a = as_position(position_a)
        pos_b = as_position(position_b)
        reason = self._check_swap(pos_a, pos_b)
        if reason is not None:
            raise IllegalSwap(pos_a, pos_b, reason)
        return self._swapped(self._index(pos_a), self._index(pos_b))

    def _swapped(self, i: int, j: int) -> 'Grid':
        symbols = list(self._symbols)
        symbols[i], symbols[j] = symbols[j], symbols[i]
        return Grid._from_state(self._rows, self._columns, tuple(symbols), self._locked)

    def apply(self, move: Move) -> 'Grid':
        if move.kind != MoveType.SWAP:
            raise ValueError(f"Unsupported move type: {move.kind}")
        return self.swap(move.position_a, move.position_b)

    def legal_moves(self) -> List[Move]:
        """All legal swaps: each cell tries its right then its bottom neighbour"""
        moves = []
        for row in range(self._rows):
            for col in range(self._columns):
                pos = GridPosition(row, col)
                if pos in self._locked:
                    continue
                if col + 1 < self._columns:
                    right = GridPosition(row, col + 1)
                    if right not in self._locked:
                        moves.append(Move(pos, right))
                if row + 1 < self._rows:
                    below = GridPosition(row + 1, col)
                    if below not in self._locked:
                        moves.append(Move(pos, below))
        return moves

    def neighbors(self) -> Iterator[Tuple[Move, 'Grid']]:
        """Lazily enumerate every state reachable by one legal swap"""
        for move in self.legal_moves():
            yield move, self._swapped(self._index(move.position_a), self._index(move.position_b))

    # -- conversion -----------------------------------------------------------

    def to_rows(self) -> List[List[int]]:
        return [list(self._symbols[r * self._columns:(r + 1) * self._columns])
                for r in range(self._rows)]

    def to_dict(self) -> dict:
        return {
            'rows': self._rows,
            'columns': self._columns,
            'symbols': self.to_rows(),
            'locked': sorted([p.row, p.col] for p in self._locked),
        }

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._rows == other._rows and self._columns == other._columns
                and self._symbols == other._symbols and self._locked == other._locked)

    def __hash__(self):
        return hash((self._rows, self._columns, self._symbols, self._locked))

    def __str__(self):
        """Rows of symbols; locked tiles are marked with '*'"""
        width = max(len(str(s)) for s in self._symbols)
        lines = []
        for pos in self.positions():
            if pos.col == 0:
                lines.append([])
            text = str(self._symbols[self._index(pos)]).rjust(width)
            lines[-1].append(text + ('*' if pos in self._locked else ' '))
        return '\n'.join(' '.join(line).rstrip() for line in lines)

    def __repr__(self):
        return f"Grid({self._rows}x{self._columns}, {len(self._locked)} locked)"


def swap(grid: Grid, position_a: PositionLike, position_b: PositionLike) -> Grid:
    """Swap two adjacent unlocked tiles, raising IllegalSwap otherwise"""
    return grid.swap(position_a, position_b)


def neighbors(grid: Grid) -> Iterator[Tuple[Move, Grid]]:
    """Lazily enumerate every (move, resulting grid) pair from a state"""
    return grid.neighbors()


def apply_moves(grid: Grid, moves: Iterable[Move]) -> Grid:
    """Replay a sequence of moves, returning the final grid"""
    for move in moves:
        grid = grid.apply(move)
    return grid
