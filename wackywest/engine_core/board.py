"""
Board Model - Fixed 10x15 grid of buildings, outhouses and placed tiles.

The board is immutable: occupy() returns a new Board. A cell is either
empty (None), a Building, an Outhouse or a PlacedTile. Buildings and
outhouses are laid out once at game creation; tiles are written by the
placement resolver and never removed.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from .errors import OutOfBoundsError


ROWS = 10
COLS = 15

Position = tuple[int, int]


class TileFamily(Enum):
    """Tile families. Each family is driven by its own worker(s)."""
    RAILROAD = "railroad"
    RIVER = "river"
    STREET = "street"


class BuildingType(Enum):
    """The six building types. Each player secretly protects one."""
    GENERAL_STORE = "general_store"
    SALOON = "saloon"
    JAIL = "jail"
    BANK = "bank"
    SCHOOL = "school"
    STABLE = "stable"

    @property
    def display_name(self) -> str:
        return BUILDING_CATALOG[self][0]

    @property
    def color(self) -> str:
        return BUILDING_CATALOG[self][1]


# type -> (display name, colour)
BUILDING_CATALOG: dict[BuildingType, tuple[str, str]] = {
    BuildingType.GENERAL_STORE: ("General Store", "#4B0082"),
    BuildingType.SALOON: ("Saloon", "#228B22"),
    BuildingType.JAIL: ("Jail", "#708090"),
    BuildingType.BANK: ("Bank", "#FF8C00"),
    BuildingType.SCHOOL: ("School", "#DC143C"),
    BuildingType.STABLE: ("Stable", "#FFD700"),
}

# (row, col, value) per building type
BUILDING_LAYOUT: dict[BuildingType, list[tuple[int, int, int]]] = {
    BuildingType.GENERAL_STORE: [(1, 2, 1), (8, 3, 1), (2, 7, 2), (7, 11, 3), (4, 7, 4), (5, 8, 5)],
    BuildingType.SALOON: [(2, 1, 1), (1, 12, 2), (8, 13, 1), (3, 8, 3), (6, 6, 4), (5, 7, 5)],
    BuildingType.JAIL: [(8, 1, 1), (7, 2, 2), (1, 10, 1), (2, 11, 3), (4, 9, 4), (6, 8, 5)],
    BuildingType.BANK: [(3, 2, 2), (8, 11, 1), (1, 6, 3), (7, 8, 4), (5, 6, 5), (4, 8, 4)],
    BuildingType.SCHOOL: [(2, 13, 1), (7, 1, 2), (8, 8, 3), (3, 6, 4), (5, 9, 5), (6, 7, 4)],
    BuildingType.STABLE: [(1, 1, 1), (8, 12, 2), (2, 9, 1), (7, 7, 3), (4, 6, 4), (6, 9, 5)],
}

OUTHOUSE_LAYOUT: list[Position] = [
    (3, 4), (6, 3), (2, 8), (7, 9), (4, 11), (5, 5), (1, 14), (8, 6),
]


class Direction(Enum):
    """Orthogonal direction as a (row delta, col delta) pair."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]

    def step(self, position: Position, distance: int = 1) -> Position:
        row, col = position
        return (row + self.d_row * distance, col + self.d_col * distance)

    @classmethod
    def between(cls, origin: Position, target: Position) -> Direction | None:
        """Direction from origin to an orthogonally adjacent target, else None."""
        delta = (target[0] - origin[0], target[1] - origin[1])
        for direction in cls:
            if direction.value == delta:
                return direction
        return None


@dataclass(frozen=True)
class Building:
    building_type: BuildingType
    value: int


@dataclass(frozen=True)
class Outhouse:
    pass


@dataclass(frozen=True)
class PlacedTile:
    family: TileFamily


Cell = Union[Building, Outhouse, PlacedTile]


@dataclass(frozen=True)
class Board:
    """
    Immutable grid of cells.

    grid[row][col] holds a Cell or None for an empty square.
    """
    grid: tuple[tuple[Cell | None, ...], ...]

    @classmethod
    def empty(cls) -> Board:
        return cls(grid=tuple(tuple(None for _ in range(COLS)) for _ in range(ROWS)))

    @classmethod
    def initial(cls) -> Board:
        """Build the fixed starting layout. Outhouses never replace buildings."""
        rows = [[None] * COLS for _ in range(ROWS)]

        for building_type, positions in BUILDING_LAYOUT.items():
            for row, col, value in positions:
                if row < ROWS and col < COLS:
                    rows[row][col] = Building(building_type=building_type, value=value)

        for row, col in OUTHOUSE_LAYOUT:
            if row < ROWS and col < COLS and rows[row][col] is None:
                rows[row][col] = Outhouse()

        return cls(grid=tuple(tuple(r) for r in rows))

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return 0 <= row < ROWS and 0 <= col < COLS

    def cell_at(self, row: int, col: int) -> Cell | None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(f"({row}, {col}) is outside the {ROWS}x{COLS} board")
        return self.grid[row][col]

    def occupy(self, row: int, col: int, tile: PlacedTile) -> Board:
        """
        Return a new board with a tile written at (row, col).

        Whatever was there before is overwritten; occupancy rules are
        enforced by the move validator, not here.
        """
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(f"({row}, {col}) is outside the {ROWS}x{COLS} board")
        new_row = self.grid[row][:col] + (tile,) + self.grid[row][col + 1:]
        return Board(grid=self.grid[:row] + (new_row,) + self.grid[row + 1:])

    def is_tile(self, row: int, col: int) -> bool:
        """True if (row, col) is on the board and already holds a tile."""
        return self.in_bounds(row, col) and isinstance(self.grid[row][col], PlacedTile)

    def is_outhouse(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and isinstance(self.grid[row][col], Outhouse)

    @staticmethod
    def neighbors(row: int, col: int) -> list[Position]:
        """Orthogonal neighbours in UP, DOWN, LEFT, RIGHT order (may be off-board)."""
        return [direction.step((row, col)) for direction in Direction]

    def is_walled_in(self, row: int, col: int) -> bool:
        """All four neighbours are off the board or covered by tiles."""
        return all(
            not self.in_bounds(r, c) or self.is_tile(r, c)
            for r, c in self.neighbors(row, col)
        )

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate (row, col, cell) over every non-empty square."""
        for row, cells in enumerate(self.grid):
            for col, cell in enumerate(cells):
                if cell is not None:
                    yield row, col, cell

    def buildings(self) -> Iterator[tuple[int, int, Building]]:
        """Uncovered buildings still on the board."""
        for row, col, cell in self.cells():
            if isinstance(cell, Building):
                yield row, col, cell
