import pytest

from rushhour.game import Car, Direction, GameBoard, GameState, Orientation

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL

LEVEL_ONE_BOARD = "\n".join(
    [
        " 00 00 00 00 04 00",
        " 00 00 00 00 04 00",
        " 00 01 01 00 04 00",
        " 00 00 02 03 03 00",
        " 00 00 02 00 00 00",
        " 00 00 00 00 00 00",
    ]
)


def level_one():
    return [
        Car(1, 1, 2, 2, H),
        Car(2, 2, 3, 2, V),
        Car(3, 3, 3, 2, H),
        Car(4, 4, 0, 3, V),
    ]


def test_level_one_renders_reference_board():
    state = GameState(GameBoard(), level_one())
    assert state.is_valid
    assert state.render() == LEVEL_ONE_BOARD


def test_default_state_is_invalid():
    state = GameState()
    assert state.is_valid is False
    assert state.render() == "Invalid state!"


def test_state_without_cars_is_valid():
    assert GameState(GameBoard(), []).is_valid is True


def test_overlapping_cars_are_invalid():
    state = GameState(GameBoard(), [Car(1, 0, 0, 2, H), Car(2, 1, 0, 2, V)])
    assert state.is_valid is False
    assert state.render() == "Invalid state!"


@pytest.mark.parametrize(
    "car",
    [Car(1, -1, 0, 2, H), Car(1, 5, 0, 2, H), Car(1, 0, 5, 2, V), Car(1, 0, -1, 2, V)],
)
def test_cars_off_the_board_are_invalid(car):
    assert GameState(GameBoard(), [car]).is_valid is False


def test_move_right_shifts_car():
    state = GameState(GameBoard(), level_one())
    before = state.cars[0]
    state.make_move(1, Direction.RIGHT)
    after = state.cars[0]
    assert state.is_valid
    assert after.col == before.col + 1
    assert after.row == before.row


def test_move_down_shifts_vertical_car():
    state = GameState(GameBoard(), level_one())
    before = state.cars[1]
    state.make_move(2, Direction.DOWN)
    assert state.is_valid
    assert state.cars[1].row == before.row + 1


def test_move_across_axis_invalidates_without_moving():
    state = GameState(GameBoard(), level_one())
    before = state.cars[0]
    state.make_move(1, Direction.UP)
    assert state.is_valid is False
    assert state.cars[0] == before


def test_collision_is_invalid():
    state = GameState(GameBoard(), level_one())
    state.make_move(1, Direction.RIGHT)
    state.make_move(1, Direction.RIGHT)
    assert state.is_valid is False


def test_moving_off_board_is_invalid():
    state = GameState(GameBoard(), level_one())
    state.make_move(4, Direction.UP)
    assert state.is_valid is False


def test_reaching_exit_wins():
    state = GameState(GameBoard(), [Car(1, 3, 2, 2, H)])
    assert state.has_won() is False
    state.make_move(1, Direction.RIGHT)
    assert state.is_valid
    assert state.has_won() is True


def test_level_one_is_not_won():
    assert GameState(GameBoard(), level_one()).has_won() is False


@pytest.mark.parametrize("car_id", [0, 5, -1])
def test_unknown_car_raises(car_id):
    state = GameState(GameBoard(), level_one())
    with pytest.raises(ValueError):
        state.make_move(car_id, Direction.LEFT)


def test_cars_are_copies():
    state = GameState(GameBoard(), level_one())
    cars = state.cars
    cars[0].col = 0
    assert state.cars[0].col == level_one()[0].col


def test_state_does_not_change_given_board():
    board = GameBoard()
    GameState(board, level_one())
    assert all(value == 0 for row in board.grid for value in row)


def test_two_digit_ids_are_not_padded():
    state = GameState(GameBoard(), [Car(12, 0, 0, 2, H)])
    assert state.render().splitlines()[0].startswith(" 12 12 00")


def test_board_cells_round_trip_and_clean():
    board = GameBoard()
    board.set_cell(3, 4, 7)
    assert board.cell(3, 4) == 7
    board.clean()
    assert board.cell(3, 4) == 0


def test_board_default_size():
    board = GameBoard()
    assert board.size == 6
    assert len(board.grid) == board.size
    assert all(len(row) == board.size for row in board.grid)


@pytest.mark.parametrize("row, col", [(6, 0), (0, 6), (-1, 0)])
def test_board_rejects_cells_outside(row, col):
    with pytest.raises(IndexError):
        GameBoard().cell(row, col)


def test_board_rejects_bad_size():
    with pytest.raises(ValueError):
        GameBoard(0)