"""Value types shared by the configuration and match stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Player(Enum):
    """The two sides of a match."""

    P1 = "p1"
    P2 = "p2"

    def opponent(self) -> Player:
        """Return the opposing player."""
        return Player.P2 if self is Player.P1 else Player.P1


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class CellStatus(Enum):
    """Visible state of a single cell from a given viewer's perspective."""

    EMPTY = "empty"
    SHIP = "ship"
    HIT = "hit"
    MISS = "miss"


class ShootOutcome(Enum):
    """Result of an accepted shot."""

    MISS = "miss"
    HIT = "hit"
    DESTROYED = "destroyed"
    WINNING_SHOT = "winning_shot"

    @property
    def keeps_turn(self) -> bool:
        """Whether the shooter fires again after this outcome."""
        return self in (ShootOutcome.HIT, ShootOutcome.DESTROYED)


@dataclass(frozen=True)
class Coordinate:
    """Immutable battlefield coordinate; x is the column, y the row."""

    x: int
    y: int


@dataclass(frozen=True)
class ShipType:
    """A ship class defined on a configuration."""

    id: int
    name: str
    length: int


@dataclass(frozen=True)
class Placement:
    """A ship type anchored on one player's battlefield."""

    player: Player
    ship_type: ShipType
    anchor: Coordinate
    orientation: Orientation

    def cells(self) -> tuple[Coordinate, ...]:
        """Return the ordered coordinates occupied by the ship."""
        if self.orientation is Orientation.HORIZONTAL:
            return tuple(
                Coordinate(self.anchor.x + offset, self.anchor.y)
                for offset in range(self.ship_type.length)
            )
        return tuple(
            Coordinate(self.anchor.x, self.anchor.y + offset)
            for offset in range(self.ship_type.length)
        )
