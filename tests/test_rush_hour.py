import numpy as np
import pytest

from rushhour.cameras import PerspectiveCamera
from rushhour.engine import Engine
from rushhour.game import Direction, Orientation
from rushhour.mesh import Plane
from rushhour.node import Node
from rushhour.rush_hour import RushHour, level_cars

LEVEL_BOARDS = {
    1: [
        " 00 00 00 00 04 00",
        " 00 00 00 00 04 00",
        " 00 01 01 00 04 00",
        " 00 00 02 03 03 00",
        " 00 00 02 00 00 00",
        " 00 00 00 00 00 00",
    ],
    2: [
        " 07 00 08 04 04 04",
        " 07 00 08 00 00 00",
        " 00 01 01 02 00 00",
        " 00 03 00 02 00 00",
        " 00 03 05 05 05 06",
        " 00 00 00 00 00 06",
    ],
    3: [
        " 00 03 00 00 04 09",
        " 00 03 02 02 04 09",
        " 00 05 01 01 04 00",
        " 00 05 00 00 00 00",
        " 00 05 00 06 08 08",
        " 07 07 07 06 00 00",
    ],
}


def make_game():
    engine = Engine()
    root = Node("Scene Root")
    for car_id in range(1, 10):
        root.add_child(Plane(f"Car00{car_id}"))
    engine.set_scene(root)
    return engine, RushHour(engine)


@pytest.mark.parametrize("level", [1, 2, 3])
def test_levels_match_reference_boards(level, capsys):
    _, game = make_game()
    game.load_level(level)
    assert game.game_state.is_valid
    assert game.game_state.render() == "\n".join(LEVEL_BOARDS[level])
    out = capsys.readouterr().out
    assert "\n".join(LEVEL_BOARDS[level]) in out
    assert "Selected car: 1" in out


def test_unknown_level_raises():
    with pytest.raises(ValueError):
        level_cars(4)


def test_level_cars_ids_are_sequential():
    for level in (1, 2, 3):
        ids = [car.id for car in level_cars(level)]
        assert ids == list(range(1, len(ids) + 1))


def test_load_level_selects_and_highlights_first_car():
    engine, game = make_game()
    game.load_level(1)
    assert game.selected_car == 1
    car = engine.find_object_by_name("Car001")
    assert np.allclose(car.material.emission_color, (0.5, 0.5, 0.5))


def test_car_nodes_follow_cars():
    engine, game = make_game()
    game.load_level(1)
    node = engine.find_object_by_name("Car001")
    assert np.allclose(node.position, (20.0, 0.0, 40.0))
    assert np.allclose(node.rotation, (0.0, 90.0, 0.0))
    vertical = engine.find_object_by_name("Car002")
    assert np.allclose(vertical.rotation, (0.0, 0.0, 0.0))


def test_select_vehicle_moves_highlight():
    engine, game = make_game()
    game.load_level(1)
    game.select_vehicle(2)
    assert game.selected_car == 2
    assert np.allclose(engine.find_object_by_name("Car001").material.emission_color, 0.0)
    assert np.allclose(
        engine.find_object_by_name("Car002").material.emission_color, (0.5, 0.5, 0.5)
    )


def test_select_missing_vehicle_is_ignored(capsys):
    _, game = make_game()
    game.load_level(1)
    capsys.readouterr()
    game.select_vehicle(9)
    assert game.selected_car == 1
    assert "Selected car" not in capsys.readouterr().out


def test_valid_move_updates_state_and_node():
    engine, game = make_game()
    game.load_level(1)
    game.move(Direction.RIGHT)
    assert game.game_state.cars[0].col == level_cars(1)[0].col + 1
    node = engine.find_object_by_name("Car001")
    assert np.allclose(node.position, (40.0, 0.0, 40.0))


def test_invalid_move_keeps_state(capsys):
    _, game = make_game()
    game.load_level(1)
    capsys.readouterr()
    game.move(Direction.UP)
    assert game.game_state.is_valid
    assert game.game_state.cars == level_cars(1)
    assert "\n".join(LEVEL_BOARDS[1]) in capsys.readouterr().out


def test_move_before_loading_raises():
    _, game = make_game()
    with pytest.raises(ValueError):
        game.move(Direction.LEFT)


def test_solving_level_one_wins(capsys):
    _, game = make_game()
    game.load_level(1)
    moves = [
        (2, Direction.DOWN),
        (3, Direction.LEFT),
        (3, Direction.LEFT),
        (4, Direction.DOWN),
        (4, Direction.DOWN),
        (4, Direction.DOWN),
        (1, Direction.RIGHT),
        (1, Direction.RIGHT),
    ]
    for car_id, direction in moves:
        game.select_vehicle(car_id)
        game.move(direction)
    capsys.readouterr()
    assert game.game_state.has_won() is False
    game.move(Direction.RIGHT)
    assert game.game_state.has_won() is True
    assert "You won!" in capsys.readouterr().out


def test_camera_follows_horizontal_car():
    engine, game = make_game()
    camera = PerspectiveCamera()
    game.set_perspective_camera(camera)
    game.load_level(1)
    node = engine.find_object_by_name("Car001")
    assert game.game_state.cars[0].orientation is Orientation.HORIZONTAL
    assert np.allclose(camera.position - node.position, (-100.0, 75.0, -50.0))
    assert np.allclose(camera.rotation, (-75.0, -90.0, 25.0))


def test_camera_follows_vertical_car():
    engine, game = make_game()
    camera = PerspectiveCamera()
    game.set_perspective_camera(camera)
    game.load_level(1)
    game.select_vehicle(2)
    node = engine.find_object_by_name("Car002")
    assert np.allclose(camera.position - node.position, (-50.0, 75.0, 0.0))
    assert np.allclose(camera.rotation, (-75.0, 0.0, 0.0))