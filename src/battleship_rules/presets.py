"""Declarative fleet definitions that build a ready-to-place ``PreGame``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from battleship_rules.engine.pregame import PreGame


class ShipClassConfig(BaseModel):
    """One ship class and how many ships of it each player gets."""

    model_config = ConfigDict(frozen=True)

    name: str
    length: int
    count: int = Field(default=1, ge=1)


class FleetConfig(BaseModel):
    """Battlefield size plus the ship classes of a match.

    Sizes and lengths are checked by ``PreGame`` so a bad preset raises the
    same errors as direct calls.
    """

    model_config = ConfigDict(frozen=True)

    width: int = 10
    height: int = 10
    ships: tuple[ShipClassConfig, ...] = ()

    def create_pregame(self) -> PreGame:
        """Return a ``PreGame`` with one ship type defined per ship to place."""
        pregame = PreGame(self.width, self.height)
        for ship_class in self.ships:
            for number in range(ship_class.count):
                name = ship_class.name if ship_class.count == 1 else f"{ship_class.name} {number + 1}"
                pregame.define_ship_type(name, ship_class.length)
        return pregame


CLASSIC_FLEET = FleetConfig(
    width=10,
    height=10,
    ships=(
        ShipClassConfig(name="Carrier", length=5),
        ShipClassConfig(name="Battleship", length=4),
        ShipClassConfig(name="Cruiser", length=3),
        ShipClassConfig(name="Submarine", length=3),
        ShipClassConfig(name="Destroyer", length=2),
    ),
)
