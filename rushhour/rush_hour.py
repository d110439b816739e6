"""The game controller tying the puzzle state to the scene."""

from __future__ import annotations

import copy
from typing import Optional

from rushhour.cameras import Camera
from rushhour.engine import Engine
from rushhour.game import Car, Direction, GameBoard, GameState, Orientation
from rushhour.mesh import Mesh
from rushhour.node import Node
from rushhour.scene_object import SceneObject

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL

_LEVELS: dict[int, tuple[tuple[int, int, int, int, Orientation], ...]] = {
    1: (
        (1, 1, 2, 2, H),
        (2, 2, 3, 2, V),
        (3, 3, 3, 2, H),
        (4, 4, 0, 3, V),
    ),
    2: (
        (1, 1, 2, 2, H),
        (2, 3, 2, 2, V),
        (3, 1, 3, 2, V),
        (4, 3, 0, 3, H),
        (5, 2, 4, 3, H),
        (6, 5, 4, 2, V),
        (7, 0, 0, 2, V),
        (8, 2, 0, 2, V),
    ),
    3: (
        (1, 2, 2, 2, H),
        (2, 2, 1, 2, H),
        (3, 1, 0, 2, V),
        (4, 4, 0, 3, V),
        (5, 1, 2, 3, V),
        (6, 3, 4, 2, V),
        (7, 0, 5, 3, H),
        (8, 4, 4, 2, H),
        (9, 5, 0, 2, V),
    ),
}

_CELL_SIZE = 20.0
_SELECTED_EMISSION = (0.5, 0.5, 0.5)
_NO_EMISSION = (0.0, 0.0, 0.0)


def level_cars(level: int) -> list[Car]:
    """The starting cars of level 1, 2 or 3."""
    try:
        layout = _LEVELS[level]
    except KeyError:
        raise ValueError(f"unknown level {level}") from None
    return [Car(*spec) for spec in layout]


class RushHour:
    """Keeps the game state and mirrors it onto the car objects of the scene.

    Car ``n`` is drawn by the scene object named ``Car00<n>``.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.camera: Optional[Camera] = None
        self.gameboard = GameBoard()
        self.game_state = GameState()
        self.selected_car = 0

    def _car_object(self, car_id: int) -> Optional[SceneObject]:
        return self.engine.find_object_by_name(f"Car00{car_id}")

    def set_perspective_camera(self, camera: Optional[Camera]) -> None:
        """Set the camera that follows the selected car."""
        self.camera = camera

    def load_level(self, level: int) -> None:
        """Start ``level`` afresh and select car 1."""
        self.game_state = GameState(self.gameboard, level_cars(level))
        print(self.game_state.render())
        self.select_vehicle(1)

    def select_vehicle(self, car_id: int) -> None:
        """Highlight and select a car; ids with no car are ignored."""
        if not 1 <= car_id <= len(self.game_state.cars):
            return
        previous = self._car_object(self.selected_car)
        if isinstance(previous, Mesh):
            previous.material.emission_color = _NO_EMISSION
        selected = self._car_object(car_id)
        if isinstance(selected, Mesh):
            selected.material.emission_color = _SELECTED_EMISSION
        self.selected_car = car_id
        print(f"Selected car: {car_id}")
        self._update_graphics()

    def move(self, direction: Direction) -> None:
        """Move the selected car one cell if the move is legal, then print the board."""
        candidate = copy.deepcopy(self.game_state)
        candidate.make_move(self.selected_car, direction)
        if candidate.is_valid:
            self.game_state = candidate
            self._update_graphics()
        if candidate.has_won():
            print("You won!")
        print()
        print(self.game_state.render())
        print()

    def _update_graphics(self) -> None:
        cars = self.game_state.cars
        for car in cars:
            node = self._car_object(car.id)
            if not isinstance(node, Node):
                continue
            node.position = (car.col * _CELL_SIZE, 0.0, car.row * _CELL_SIZE)
            if car.orientation is Orientation.HORIZONTAL:
                node.rotation = (0.0, 90.0, 0.0)

        if self.camera is None or not 1 <= self.selected_car <= len(cars):
            return
        current = cars[self.selected_car - 1]
        selected = self._car_object(self.selected_car)
        if not isinstance(selected, Node):
            return
        x, y, z = selected.position
        if current.orientation is Orientation.HORIZONTAL:
            self.camera.position = (x - 100.0, y + 75.0, z - 50.0)
            self.camera.rotation = (-75.0, -90.0, 25.0)
        else:
            self.camera.position = (x - 50.0, y + 75.0, z)
            self.camera.rotation = (-75.0, 0.0, 0.0)