"""Rules core for two-player grid-based naval combat."""

from battleship_rules.engine import (
    CellStatus,
    Game,
    Orientation,
    Player,
    PreGame,
    RulesError,
    ShootOutcome,
)
from battleship_rules.presets import CLASSIC_FLEET, FleetConfig, ShipClassConfig

__all__ = [
    "CLASSIC_FLEET",
    "CellStatus",
    "FleetConfig",
    "Game",
    "Orientation",
    "Player",
    "PreGame",
    "RulesError",
    "ShipClassConfig",
    "ShootOutcome",
]
