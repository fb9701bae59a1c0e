"""Match stage: turn order and shot resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Sequence

from battleship_rules.telemetry import get_meter, get_tracer

from .battlefield import Battlefield
from .errors import AlreadyShot, GameOver, NotYourTurn, OutOfBounds
from .types import CellStatus, Coordinate, Placement, Player, ShipType, ShootOutcome

logger = logging.getLogger(__name__)
tracer = get_tracer("battleship_rules.engine.game")
meter = get_meter("battleship_rules.engine.game")

SHOT_COUNTER = meter.create_counter(
    "battleship_rules_shots",
    unit="1",
    description="Shots resolved by Game, by outcome",
)

STARTING_PLAYER = Player.P1


class MatchPhase(Enum):
    """Lifecycle of a running match."""

    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class MatchState:
    """Immutable snapshot of the match state machine."""

    phase: MatchPhase
    current_player: Player
    winner: Player | None


@dataclass
class ShipState:
    """Damage tracking for one placed ship."""

    ship_type: ShipType
    cells: frozenset[Coordinate]
    hits: set[Coordinate] = field(default_factory=set)

    @property
    def is_destroyed(self) -> bool:
        return self.hits >= self.cells

    def hit(self, coord: Coordinate) -> None:
        self.hits.add(coord)


class Game:
    """A running match between two fleets.

    Normally obtained from ``PreGame.start()``, which hands over copies of the
    validated battlefields. ``P1`` always shoots first.
    """

    def __init__(
        self,
        width: int,
        height: int,
        ship_types: Sequence[ShipType],
        placements: Mapping[Player, Sequence[Placement]],
        battlefields: Mapping[Player, Battlefield],
    ) -> None:
        self._width = width
        self._height = height
        self._ship_types = tuple(ship_types)
        self._battlefields: dict[Player, Battlefield] = dict(battlefields)
        self._ships: dict[Player, dict[int, ShipState]] = {
            player: {
                placement.ship_type.id: ShipState(
                    placement.ship_type, frozenset(placement.cells())
                )
                for placement in placements[player]
            }
            for player in Player
        }
        self._current_player = STARTING_PLAYER
        self._winner: Player | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def ship_types(self) -> tuple[ShipType, ...]:
        return self._ship_types

    @property
    def current_player(self) -> Player:
        """The player whose turn it is (the winner once the match is over)."""
        return self._current_player

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def is_finished(self) -> bool:
        return self._winner is not None

    @property
    def state(self) -> MatchState:
        phase = MatchPhase.FINISHED if self.is_finished else MatchPhase.IN_PROGRESS
        return MatchState(phase=phase, current_player=self._current_player, winner=self._winner)

    def shoot(self, shooter: Player, x: int, y: int) -> ShootOutcome:
        """Fire at the opponent's battlefield.

        Checks, in order: match over, turn order, bounds, repeated target.
        A hit keeps the turn with the shooter; a miss hands it over.
        """
        with tracer.start_as_current_span("game.shoot") as span:
            span.set_attribute("shooter", shooter.value)
            span.set_attribute("x", x)
            span.set_attribute("y", y)

            target = shooter.opponent()
            battlefield = self._battlefields[target]
            if self._winner is not None:
                self._reject("shot_rejected_game_over", shooter, x, y)
                raise GameOver(self._winner)
            if shooter is not self._current_player:
                self._reject("shot_rejected_wrong_player", shooter, x, y)
                raise NotYourTurn(shooter, self._current_player)
            if not battlefield.contains(x, y):
                self._reject("shot_rejected_out_of_bounds", shooter, x, y)
                raise OutOfBounds(x, y, self._width, self._height)
            if battlefield.is_shot(x, y):
                self._reject("shot_rejected_already_shot", shooter, x, y)
                raise AlreadyShot(x, y)

            outcome = self._resolve(shooter, target, battlefield, Coordinate(x, y))

            span.set_attribute("shot.outcome", outcome.value)
            span.set_attribute("next_player", self._current_player.value)
            SHOT_COUNTER.add(1, attributes={"outcome": outcome.value, "player": shooter.value})
            logger.info(
                "shot_resolved",
                extra={"player": shooter.value, "x": x, "y": y, "outcome": outcome.value},
            )
            if outcome is ShootOutcome.WINNING_SHOT:
                span.set_attribute("game.winner", shooter.value)
                logger.info("match_finished", extra={"winner": shooter.value})
            return outcome

    def _resolve(
        self, shooter: Player, target: Player, battlefield: Battlefield, coord: Coordinate
    ) -> ShootOutcome:
        ship_type_id = battlefield.mark_shot(coord.x, coord.y)
        if ship_type_id is None:
            self._current_player = target
            return ShootOutcome.MISS

        ship = self._ships[target][ship_type_id]
        ship.hit(coord)
        if self.ships_afloat(target) == 0:
            self._winner = shooter
            return ShootOutcome.WINNING_SHOT
        if ship.is_destroyed:
            return ShootOutcome.DESTROYED
        return ShootOutcome.HIT

    def _reject(self, event: str, shooter: Player, x: int, y: int) -> None:
        SHOT_COUNTER.add(1, attributes={"outcome": "rejected", "player": shooter.value})
        logger.warning(
            event,
            extra={"player": shooter.value, "x": x, "y": y, "current": self._current_player.value},
        )

    def ships_afloat(self, player: Player) -> int:
        """Number of ``player``'s ships that are not destroyed yet."""
        return sum(1 for ship in self._ships[player].values() if not ship.is_destroyed)

    def get_cell(self, player: Player, x: int, y: int) -> CellStatus:
        """Status of a cell on ``player``'s own battlefield.

        Raises ``IndexError`` for coordinates outside the battlefield.
        """
        return self._battlefields[player].owner_status(x, y)

    def get_opponent_cell(self, player: Player, x: int, y: int) -> CellStatus:
        """Status of a cell on the opponent's battlefield as ``player`` sees it.

        Raises ``IndexError`` for coordinates outside the battlefield.
        """
        return self._battlefields[player.opponent()].opponent_status(x, y)

    def valid_targets(self, player: Player) -> list[Coordinate]:
        """Cells ``player`` may legally shoot at right now."""
        if self.is_finished or player is not self._current_player:
            return []
        battlefield = self._battlefields[player.opponent()]
        return [
            coord for coord in battlefield.coordinates() if not battlefield.is_shot(coord.x, coord.y)
        ]
