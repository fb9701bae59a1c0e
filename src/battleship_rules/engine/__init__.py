"""Rules engine: configuration stage, match stage and their value types."""

from .errors import (
    AlreadyShot,
    ConfigurationConsumed,
    DuplicatePlacement,
    GameOver,
    IncompletePlacement,
    InvalidDimensions,
    InvalidShipLength,
    NotYourTurn,
    OutOfBounds,
    Overlap,
    RulesError,
    SetupError,
    ShotError,
    UnknownShipType,
)
from .game import Game, MatchPhase, MatchState
from .instrumented_game import InstrumentedGame
from .pregame import PreGame
from .types import CellStatus, Coordinate, Orientation, Placement, Player, ShipType, ShootOutcome

__all__ = [
    "AlreadyShot",
    "CellStatus",
    "ConfigurationConsumed",
    "Coordinate",
    "DuplicatePlacement",
    "Game",
    "GameOver",
    "IncompletePlacement",
    "InstrumentedGame",
    "InvalidDimensions",
    "InvalidShipLength",
    "MatchPhase",
    "MatchState",
    "NotYourTurn",
    "Orientation",
    "OutOfBounds",
    "Overlap",
    "Placement",
    "Player",
    "PreGame",
    "RulesError",
    "SetupError",
    "ShipType",
    "ShootOutcome",
    "ShotError",
    "UnknownShipType",
]
