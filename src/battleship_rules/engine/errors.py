"""Exceptions raised when the rules engine rejects a request.

Every rejection leaves the configuration or match exactly as it was before the
call, so callers can correct the request and retry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .types import Player, ShipType


class RulesError(Exception):
    """Base class for every rejection reported by the engine."""


class SetupError(RulesError):
    """Rejected configuration-stage request."""


class ShotError(RulesError):
    """Rejected match-stage request."""


class OutOfBounds(RulesError, ValueError):
    """A ship placement or a shot falls outside the battlefield."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"({x}, {y}) lies outside the {width}x{height} battlefield")
        self.x = x
        self.y = y


class InvalidDimensions(SetupError, ValueError):
    def __init__(self, width: object, height: object) -> None:
        super().__init__(f"battlefield must be at least 2x2, got {width}x{height}")
        self.width = width
        self.height = height


class InvalidShipLength(SetupError, ValueError):
    def __init__(self, length: object) -> None:
        super().__init__(f"ship length must be at least 1, got {length}")
        self.length = length


class UnknownShipType(SetupError, LookupError):
    def __init__(self, ship_type_id: object) -> None:
        super().__init__(f"no ship type with id {ship_type_id!r}")
        self.ship_type_id = ship_type_id


class Overlap(SetupError):
    def __init__(self, player: Player, x: int, y: int) -> None:
        super().__init__(f"cell ({x}, {y}) of {player.name} is already occupied")
        self.player = player
        self.x = x
        self.y = y


class DuplicatePlacement(SetupError):
    def __init__(self, player: Player, ship_type: ShipType) -> None:
        super().__init__(f"{player.name} already placed a {ship_type.name}")
        self.player = player
        self.ship_type = ship_type


class IncompletePlacement(SetupError):
    """Raised by ``start()`` while a player still has ships to place."""

    def __init__(self, missing: tuple[tuple[Player, ShipType], ...]) -> None:
        if missing:
            detail = ", ".join(f"{player.name}:{ship_type.name}" for player, ship_type in missing)
            message = f"ships not placed yet: {detail}"
        else:
            message = "no ship types have been defined"
        super().__init__(message)
        self.missing = missing


class ConfigurationConsumed(SetupError):
    """The configuration already started a match and cannot be reused."""

    def __init__(self) -> None:
        super().__init__("configuration has already been started")


class NotYourTurn(ShotError):
    def __init__(self, shooter: Player, current: Player) -> None:
        super().__init__(f"it is {current.name}'s turn, not {shooter.name}'s")
        self.shooter = shooter
        self.current = current


class AlreadyShot(ShotError):
    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"cell ({x}, {y}) has already been targeted")
        self.x = x
        self.y = y


class GameOver(ShotError):
    def __init__(self, winner: Player) -> None:
        super().__init__(f"the match is over, {winner.name} won")
        self.winner = winner
