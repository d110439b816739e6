"""The Rush Hour puzzle: cars on a grid and the moves between states."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Optional

#: Standard Rush Hour board size.
BOARD_SIZE = 6

#: Cell that the red car (id 1) must reach to win, as (row, col).
EXIT_CELL = (2, 5)


class Direction(enum.Enum):
    """A direction a car can be moved in."""

    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()


class Orientation(enum.Enum):
    """The axis a car lies along."""

    VERTICAL = enum.auto()
    HORIZONTAL = enum.auto()


_STEPS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


@dataclass
class Car:
    """A car with its top-left cell, length in cells and orientation."""

    id: int
    col: int
    row: int
    length: int
    orientation: Orientation


def _occupied_cells(car: Car) -> Iterator[tuple[int, int]]:
    vertical = car.orientation is Orientation.VERTICAL
    for step in range(car.length):
        yield (car.row + step if vertical else car.row,
               car.col if vertical else car.col + step)


class GameBoard:
    """A square grid of car ids, where 0 marks an empty cell."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        if size <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        self.size = size
        self._cells = [[0] * size for _ in range(size)]

    @property
    def grid(self) -> list[list[int]]:
        """A copy of the cells, one list per row."""
        return [list(row) for row in self._cells]

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"cell ({row}, {col}) is outside a {self.size}x{self.size} board")

    def clean(self) -> None:
        """Empty every cell."""
        for row in self._cells:
            row[:] = [0] * self.size

    def cell(self, row: int, col: int) -> int:
        """The car id in a cell, or 0 when it is empty."""
        self._check(row, col)
        return self._cells[row][col]

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Store ``value`` in a cell."""
        self._check(row, col)
        self._cells[row][col] = value


class GameState:
    """Cars placed on a board, with whether the placement is legal.

    A state built without a list of cars is invalid. Car ``n`` is the
    ``n``-th car of the list.
    """

    def __init__(self, board: Optional[GameBoard] = None,
                 cars: Optional[Iterable[Car]] = None) -> None:
        self._board = GameBoard() if board is None else copy.deepcopy(board)
        self._cars = [] if cars is None else [replace(car) for car in cars]
        self._valid = False if cars is None else self._check_validity()

    @property
    def cars(self) -> list[Car]:
        """Copies of the cars in this state."""
        return [replace(car) for car in self._cars]

    @property
    def board(self) -> GameBoard:
        """A copy of the board as filled by the last validity check."""
        return copy.deepcopy(self._board)

    @property
    def is_valid(self) -> bool:
        """True when every car lies on the board without overlapping another."""
        return self._valid

    def has_won(self) -> bool:
        """True when the red car occupies the exit cell."""
        return self._board.cell(*EXIT_CELL) == 1

    def _check_validity(self) -> bool:
        self._board.clean()
        size = self._board.size
        for car in self._cars:
            for row, col in _occupied_cells(car):
                if not (0 <= row < size and 0 <= col < size):
                    return False
                if self._board.cell(row, col) != 0:
                    return False
                self._board.set_cell(row, col, car.id)
        return True

    def make_move(self, car_id: int, direction: Direction) -> None:
        """Move a car one cell; the state becomes invalid if the move is illegal.

        Moving a car across its axis invalidates the state without moving it.
        """
        if not 1 <= car_id <= len(self._cars):
            raise ValueError(f"no car with id {car_id}")
        car = self._cars[car_id - 1]
        horizontal = car.orientation is Orientation.HORIZONTAL
        if horizontal != (direction in (Direction.LEFT, Direction.RIGHT)):
            self._valid = False
            return
        d_row, d_col = _STEPS[direction]
        car.row += d_row
        car.col += d_col
        self._valid = self._check_validity()

    def render(self) -> str:
        """The board as rows of two-digit car ids, or ``Invalid state!``."""
        if not self._valid:
            return "Invalid state!"
        return "\n".join(
            "".join(f" {'0' if value < 10 else ''}{value}" for value in row)
            for row in self._board.grid
        )