"""Tests for the configuration stage."""

import pytest

from battleship_rules.engine import pregame as pregame_module
from battleship_rules.engine.errors import (
    ConfigurationConsumed,
    DuplicatePlacement,
    IncompletePlacement,
    InvalidDimensions,
    InvalidShipLength,
    OutOfBounds,
    Overlap,
    UnknownShipType,
)
from battleship_rules.engine.game import Game
from battleship_rules.engine.pregame import PreGame
from battleship_rules.engine.types import CellStatus, Coordinate, Orientation, Player


@pytest.mark.parametrize("width,height", [(0, 0), (0, 5), (5, 0), (1, 2), (2, 1), (-3, 4)])
def test_constructor_rejects_small_dimensions(width: int, height: int) -> None:
    with pytest.raises(InvalidDimensions):
        PreGame(width, height)


@pytest.mark.parametrize("width,height", [(2, 2), (2, 3), (10, 10), (25, 4)])
def test_constructor_accepts_valid_dimensions(width: int, height: int) -> None:
    pregame = PreGame(width, height)
    assert (pregame.width, pregame.height) == (width, height)


def test_define_ship_type_assigns_sequential_ids() -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)
    submarine = pregame.define_ship_type("Submarine", 1)

    assert corvette != submarine
    assert [t.id for t in pregame.ship_types] == [corvette, submarine]
    assert pregame.ship_type(corvette).name == "Corvette"
    assert pregame.ship_type(corvette).length == 2


@pytest.mark.parametrize("length", [0, -1, -10])
def test_define_ship_type_rejects_non_positive_length(length: int) -> None:
    pregame = PreGame(3, 3)
    with pytest.raises(InvalidShipLength):
        pregame.define_ship_type("Jetski", length)
    assert pregame.ship_types == ()


def test_define_ship_type_accepts_lengths_longer_than_battlefield() -> None:
    pregame = PreGame(3, 3)
    battleship = pregame.define_ship_type("Battleship", 4)

    with pytest.raises(OutOfBounds):
        pregame.place_ship(Player.P1, battleship, 0, 0, Orientation.HORIZONTAL)


def test_place_ship_marks_cells_horizontally_and_vertically() -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)

    placement = pregame.place_ship(Player.P1, corvette, 0, 0, Orientation.HORIZONTAL)
    pregame.place_ship(Player.P2, corvette, 2, 1, Orientation.VERTICAL)

    assert placement.cells() == (Coordinate(0, 0), Coordinate(1, 0))
    assert pregame.get_cell(Player.P1, 0, 0) is CellStatus.SHIP
    assert pregame.get_cell(Player.P1, 1, 0) is CellStatus.SHIP
    assert pregame.get_cell(Player.P1, 0, 1) is CellStatus.EMPTY
    assert pregame.get_cell(Player.P2, 2, 1) is CellStatus.SHIP
    assert pregame.get_cell(Player.P2, 2, 2) is CellStatus.SHIP
    assert pregame.get_cell(Player.P2, 0, 0) is CellStatus.EMPTY


def test_place_ship_rejects_unknown_ship_type() -> None:
    pregame = PreGame(3, 3)
    pregame.define_ship_type("Jetski", 1)

    with pytest.raises(UnknownShipType):
        pregame.place_ship(Player.P1, 7, 0, 0, Orientation.HORIZONTAL)
    with pytest.raises(UnknownShipType):
        pregame.place_ship(Player.P1, -1, 0, 0, Orientation.HORIZONTAL)


def test_ship_type_ids_are_scoped_to_their_configuration() -> None:
    other = PreGame(3, 3)
    other.define_ship_type("Jetski", 1)
    foreign_id = other.define_ship_type("Car", 1)

    pregame = PreGame(3, 3)
    pregame.define_ship_type("Jetski", 1)
    with pytest.raises(UnknownShipType):
        pregame.place_ship(Player.P1, foreign_id, 0, 0, Orientation.HORIZONTAL)


@pytest.mark.parametrize(
    "x,y,orientation",
    [
        (2, 0, Orientation.HORIZONTAL),
        (0, 2, Orientation.VERTICAL),
        (3, 0, Orientation.VERTICAL),
        (0, 3, Orientation.HORIZONTAL),
        (-1, 0, Orientation.HORIZONTAL),
        (0, -1, Orientation.VERTICAL),
    ],
)
def test_place_ship_rejects_out_of_bounds(x: int, y: int, orientation: Orientation) -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)

    with pytest.raises(OutOfBounds):
        pregame.place_ship(Player.P1, corvette, x, y, orientation)
    assert pregame.placements(Player.P1) == ()


def test_place_ship_rejects_overlap_for_same_player_only() -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)
    submarine = pregame.define_ship_type("Submarine", 2)
    pregame.place_ship(Player.P1, corvette, 0, 0, Orientation.HORIZONTAL)

    with pytest.raises(Overlap) as excinfo:
        pregame.place_ship(Player.P1, submarine, 1, 0, Orientation.VERTICAL)
    assert (excinfo.value.x, excinfo.value.y) == (1, 0)
    assert pregame.get_cell(Player.P1, 1, 1) is CellStatus.EMPTY

    pregame.place_ship(Player.P2, corvette, 0, 0, Orientation.HORIZONTAL)
    pregame.place_ship(Player.P2, submarine, 0, 1, Orientation.HORIZONTAL)


def test_place_ship_rejects_second_ship_of_same_type() -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)
    pregame.place_ship(Player.P1, corvette, 0, 0, Orientation.HORIZONTAL)

    with pytest.raises(DuplicatePlacement):
        pregame.place_ship(Player.P1, corvette, 0, 1, Orientation.HORIZONTAL)
    assert pregame.get_cell(Player.P1, 0, 1) is CellStatus.EMPTY
    assert len(pregame.placements(Player.P1)) == 1


def test_get_cell_out_of_bounds_raises_index_error() -> None:
    pregame = PreGame(3, 3)
    with pytest.raises(IndexError):
        pregame.get_cell(Player.P1, 3, 0)
    with pytest.raises(IndexError):
        pregame.get_cell(Player.P2, 0, -1)


def test_start_requires_ship_types() -> None:
    pregame = PreGame(3, 3)
    with pytest.raises(IncompletePlacement) as excinfo:
        pregame.start()
    assert excinfo.value.missing == ()
    assert not pregame.is_consumed


def test_start_requires_every_ship_of_both_players() -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)
    submarine = pregame.define_ship_type("Submarine", 1)
    pregame.place_ship(Player.P1, corvette, 0, 0, Orientation.HORIZONTAL)
    pregame.place_ship(Player.P1, submarine, 0, 1, Orientation.HORIZONTAL)
    pregame.place_ship(Player.P2, corvette, 0, 0, Orientation.HORIZONTAL)

    assert not pregame.is_ready
    with pytest.raises(IncompletePlacement) as excinfo:
        pregame.start()
    assert [(player, t.id) for player, t in excinfo.value.missing] == [(Player.P2, submarine)]

    pregame.place_ship(Player.P2, submarine, 2, 2, Orientation.VERTICAL)
    assert pregame.is_ready
    game = pregame.start()
    assert isinstance(game, Game)


def test_start_consumes_configuration() -> None:
    pregame = PreGame(2, 2)
    sub = pregame.define_ship_type("Submarine", 1)
    pregame.place_ship(Player.P1, sub, 0, 0, Orientation.HORIZONTAL)
    pregame.place_ship(Player.P2, sub, 0, 0, Orientation.HORIZONTAL)
    game = pregame.start()

    assert pregame.is_consumed
    with pytest.raises(ConfigurationConsumed):
        pregame.start()
    with pytest.raises(ConfigurationConsumed):
        pregame.define_ship_type("Jetski", 1)
    with pytest.raises(ConfigurationConsumed):
        pregame.place_ship(Player.P1, sub, 1, 1, Orientation.HORIZONTAL)
    assert game.get_cell(Player.P1, 1, 1) is CellStatus.EMPTY


def test_duplicate_is_reported_before_overlap() -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)
    pregame.place_ship(Player.P1, corvette, 0, 0, Orientation.HORIZONTAL)

    with pytest.raises(DuplicatePlacement):
        pregame.place_ship(Player.P1, corvette, 0, 0, Orientation.VERTICAL)


def test_duplicate_is_reported_before_out_of_bounds() -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)
    pregame.place_ship(Player.P1, corvette, 0, 0, Orientation.HORIZONTAL)

    with pytest.raises(DuplicatePlacement):
        pregame.place_ship(Player.P1, corvette, 5, 5, Orientation.HORIZONTAL)


def test_unknown_type_is_reported_before_out_of_bounds() -> None:
    pregame = PreGame(3, 3)
    pregame.define_ship_type("Corvette", 2)

    with pytest.raises(UnknownShipType):
        pregame.place_ship(Player.P1, 9, -4, 7, Orientation.VERTICAL)


def test_out_of_bounds_is_reported_before_overlap() -> None:
    pregame = PreGame(3, 3)
    corvette = pregame.define_ship_type("Corvette", 2)
    frigate = pregame.define_ship_type("Frigate", 2)
    pregame.place_ship(Player.P1, corvette, 1, 0, Orientation.HORIZONTAL)

    # (2,0) is taken by the corvette and (3,0) is off the board.
    with pytest.raises(OutOfBounds):
        pregame.place_ship(Player.P1, frigate, 2, 0, Orientation.HORIZONTAL)
    assert len(pregame.placements(Player.P1)) == 1


@pytest.mark.parametrize(
    ("x", "y", "orientation"),
    [
        (1.0, 0, Orientation.HORIZONTAL),
        (0, 1.0, Orientation.VERTICAL),
        (True, 0, Orientation.HORIZONTAL),
        (0, True, Orientation.VERTICAL),
        ("1", 0, Orientation.HORIZONTAL),
    ],
)
def test_place_ship_rejects_non_integer_coordinates(x, y, orientation: Orientation) -> None:
    pregame = PreGame(3, 3)
    submarine = pregame.define_ship_type("Submarine", 1)

    with pytest.raises(OutOfBounds):
        pregame.place_ship(Player.P1, submarine, x, y, orientation)
    assert len(pregame.placements(Player.P1)) == 0
    assert pregame.get_cell(Player.P1, 1, 0) is CellStatus.EMPTY
    assert pregame.get_cell(Player.P1, 0, 1) is CellStatus.EMPTY


def test_game_class_is_a_module_import() -> None:
    assert pregame_module.Game is Game
