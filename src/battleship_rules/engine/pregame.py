"""Configuration stage: battlefield size, ship types and fleet placement."""

from __future__ import annotations

import logging

from battleship_rules.telemetry import get_meter, get_tracer

from .battlefield import Battlefield
from .errors import (
    ConfigurationConsumed,
    DuplicatePlacement,
    IncompletePlacement,
    InvalidDimensions,
    InvalidShipLength,
    OutOfBounds,
    Overlap,
    SetupError,
    UnknownShipType,
)
from .game import Game
from .types import CellStatus, Coordinate, Orientation, Placement, Player, ShipType

MIN_DIMENSION = 2

logger = logging.getLogger(__name__)
tracer = get_tracer("battleship_rules.engine.pregame")
meter = get_meter("battleship_rules.engine.pregame")

PLACEMENT_COUNTER = meter.create_counter(
    "battleship_rules_placements",
    unit="1",
    description="Number of attempted ship placements",
)


class PreGame:
    """Builder for a match: collects ship types and both players' fleets.

    Every placement is fully validated when it is made, so ``start()`` only
    has to check that both fleets are complete.
    """

    def __init__(self, width: int, height: int) -> None:
        if not _is_dimension(width) or not _is_dimension(height):
            logger.warning(
                "pregame_rejected_dimensions", extra={"width": width, "height": height}
            )
            raise InvalidDimensions(width, height)
        self._width = width
        self._height = height
        self._ship_types: list[ShipType] = []
        self._placements: dict[Player, dict[int, Placement]] = {player: {} for player in Player}
        self._battlefields: dict[Player, Battlefield] = {
            player: Battlefield(width, height, owner=player.value) for player in Player
        }
        self._consumed = False
        logger.debug("pregame_created", extra={"width": width, "height": height})

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def ship_types(self) -> tuple[ShipType, ...]:
        """All defined ship types, ordered by id."""
        return tuple(self._ship_types)

    @property
    def is_consumed(self) -> bool:
        return self._consumed

    @property
    def is_ready(self) -> bool:
        """True when ``start()`` would succeed."""
        return not self._consumed and bool(self._ship_types) and not self.missing_placements()

    def ship_type(self, ship_type_id: int) -> ShipType:
        """Look up a ship type defined on this configuration."""
        if (
            isinstance(ship_type_id, bool)
            or not isinstance(ship_type_id, int)
            or not 0 <= ship_type_id < len(self._ship_types)
        ):
            raise UnknownShipType(ship_type_id)
        return self._ship_types[ship_type_id]

    def define_ship_type(self, name: str, length: int) -> int:
        """Add a ship type and return its id."""
        self._ensure_open()
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            logger.warning("ship_type_rejected", extra={"ship_name": name, "length": length})
            raise InvalidShipLength(length)
        ship_type = ShipType(id=len(self._ship_types), name=name, length=length)
        self._ship_types.append(ship_type)
        logger.info(
            "ship_type_defined",
            extra={"ship_type_id": ship_type.id, "ship_name": name, "length": length},
        )
        return ship_type.id

    def place_ship(
        self,
        player: Player,
        ship_type_id: int,
        x: int,
        y: int,
        orientation: Orientation,
    ) -> Placement:
        """Place one ship of a defined type on ``player``'s battlefield."""
        self._ensure_open()
        with tracer.start_as_current_span("pregame.place_ship") as span:
            span.set_attribute("player", player.value)
            span.set_attribute("ship.type_id", str(ship_type_id))
            span.set_attribute("ship.x", x)
            span.set_attribute("ship.y", y)
            span.set_attribute("ship.orientation", orientation.value)
            try:
                placement = self._validate_placement(player, ship_type_id, x, y, orientation)
            except SetupError as exc:
                span.set_attribute("placement.rejected", type(exc).__name__)
                PLACEMENT_COUNTER.add(
                    1, attributes={"result": type(exc).__name__, "player": player.value}
                )
                logger.warning(
                    "ship_placement_rejected",
                    extra={
                        "player": player.value,
                        "ship_type_id": ship_type_id,
                        "x": x,
                        "y": y,
                        "orientation": orientation.value,
                        "reason": type(exc).__name__,
                    },
                )
                raise

            self._battlefields[player].occupy(placement.cells(), placement.ship_type.id)
            self._placements[player][placement.ship_type.id] = placement
            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "player": player.value})
            logger.info(
                "ship_placed",
                extra={
                    "player": player.value,
                    "ship_type": placement.ship_type.name,
                    "x": x,
                    "y": y,
                    "orientation": orientation.value,
                },
            )
            return placement

    def placements(self, player: Player) -> tuple[Placement, ...]:
        """Ships placed so far by ``player``, ordered by ship type id."""
        by_type = self._placements[player]
        return tuple(by_type[type_id] for type_id in sorted(by_type))

    def missing_placements(self) -> tuple[tuple[Player, ShipType], ...]:
        """Every ``(player, ship type)`` pair that still needs a ship."""
        return tuple(
            (player, ship_type)
            for player in Player
            for ship_type in self._ship_types
            if ship_type.id not in self._placements[player]
        )

    def get_cell(self, player: Player, x: int, y: int) -> CellStatus:
        """Return EMPTY or SHIP for a cell of ``player``'s battlefield.

        Raises ``IndexError`` for coordinates outside the battlefield.
        """
        self._ensure_open()
        if self._battlefields[player].ship_at(x, y) is None:
            return CellStatus.EMPTY
        return CellStatus.SHIP

    def start(self, game_cls: type[Game] | None = None) -> Game:
        """Consume the configuration and return the running match."""
        self._ensure_open()
        with tracer.start_as_current_span("pregame.start") as span:
            missing = self.missing_placements()
            if not self._ship_types or missing:
                span.set_attribute("pregame.missing", len(missing))
                logger.warning(
                    "pregame_start_rejected",
                    extra={
                        "ship_types": len(self._ship_types),
                        "missing": [f"{p.value}:{t.name}" for p, t in missing],
                    },
                )
                raise IncompletePlacement(missing)

            factory = game_cls or Game
            game = factory(
                self._width,
                self._height,
                self.ship_types,
                {player: self.placements(player) for player in Player},
                {player: field.copy() for player, field in self._battlefields.items()},
            )
            self._consumed = True
            span.set_attribute("pregame.ship_types", len(self._ship_types))
            logger.info(
                "pregame_started",
                extra={
                    "width": self._width,
                    "height": self._height,
                    "ship_types": len(self._ship_types),
                },
            )
            return game

    def _validate_placement(
        self,
        player: Player,
        ship_type_id: int,
        x: int,
        y: int,
        orientation: Orientation,
    ) -> Placement:
        ship_type = self.ship_type(ship_type_id)
        if ship_type.id in self._placements[player]:
            raise DuplicatePlacement(player, ship_type)

        battlefield = self._battlefields[player]
        # Offsets turn a bool anchor into an int, so the anchor is checked as given.
        if not battlefield.contains(x, y):
            raise OutOfBounds(x, y, self._width, self._height)
        placement = Placement(player, ship_type, Coordinate(x, y), orientation)
        cells = placement.cells()
        for cell in cells:
            if not battlefield.contains(cell.x, cell.y):
                raise OutOfBounds(cell.x, cell.y, self._width, self._height)
        for cell in cells:
            if battlefield.ship_at(cell.x, cell.y) is not None:
                raise Overlap(player, cell.x, cell.y)
        return placement

    def _ensure_open(self) -> None:
        if self._consumed:
            raise ConfigurationConsumed()


def _is_dimension(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= MIN_DIMENSION
