"""Single-player battlefield grid for the rules engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .types import CellStatus, Coordinate


@dataclass
class Battlefield:
    """A player's grid, stored row-major as ``width * height`` cells.

    Each cell records which ship type occupies it (``None`` when empty) and
    whether it has been shot at.
    """

    width: int
    height: int
    owner: str = "unknown"
    _ships: list[int | None] = field(init=False, repr=False)
    _shot: list[bool] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._ships = [None] * (self.width * self.height)
        self._shot = [False] * (self.width * self.height)

    def contains(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies inside the battlefield.

        Only plain ints count as coordinates; floats and bools never match.
        """
        if not (_is_index(x) and _is_index(y)):
            return False
        return 0 <= x < self.width and 0 <= y < self.height

    def coordinates(self) -> Iterator[Coordinate]:
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def ship_at(self, x: int, y: int) -> int | None:
        """Return the id of the ship type covering the cell, if any."""
        return self._ships[self._index(x, y)]

    def is_shot(self, x: int, y: int) -> bool:
        return self._shot[self._index(x, y)]

    def occupy(self, cells: Iterable[Coordinate], ship_type_id: int) -> None:
        for cell in cells:
            self._ships[self._index(cell.x, cell.y)] = ship_type_id

    def mark_shot(self, x: int, y: int) -> int | None:
        """Record a shot on the cell and return the ship type id it hit."""
        index = self._index(x, y)
        self._shot[index] = True
        return self._ships[index]

    def owner_status(self, x: int, y: int) -> CellStatus:
        """Status of the cell as seen by the battlefield's owner."""
        index = self._index(x, y)
        occupied = self._ships[index] is not None
        if self._shot[index]:
            return CellStatus.HIT if occupied else CellStatus.MISS
        return CellStatus.SHIP if occupied else CellStatus.EMPTY

    def opponent_status(self, x: int, y: int) -> CellStatus:
        """Status of the cell as seen by the opponent; unhit ships stay hidden."""
        index = self._index(x, y)
        if not self._shot[index]:
            return CellStatus.EMPTY
        return CellStatus.HIT if self._ships[index] is not None else CellStatus.MISS

    def copy(self) -> Battlefield:
        clone = Battlefield(self.width, self.height, owner=self.owner)
        clone._ships = list(self._ships)
        clone._shot = list(self._shot)
        return clone

    def _index(self, x: int, y: int) -> int:
        if not self.contains(x, y):
            raise IndexError(
                f"cell ({x}, {y}) is outside the {self.width}x{self.height} battlefield"
            )
        return y * self.width + x


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
