"""Placement Session - Per-factory tile placement during distribution."""

# Programmed by CoolCat467

from __future__ import annotations

# Copyright (C) 2024  CoolCat467
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

__title__ = "Placement Session"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"

from typing import TYPE_CHECKING, NamedTuple

from numpy import full, int8, zeros

from azul_distribution.tiles import FACTORY_CAPACITY, Tile

if TYPE_CHECKING:
    from collections.abc import Iterable

    from numpy.typing import NDArray


class FactoryAssignment(NamedTuple):
    """Tiles manually placed on one factory display."""

    factory_id: int
    tiles: tuple[Tile, ...]


class PlacementSession:
    """Accumulator of placed tiles keyed by factory id.

    Factory ids are dense and 1-based (the table center is id 0 and is
    never part of manual distribution), so the tiles live in a fixed
    size table where row `factory_id - 1` holds that factory's slots,
    left-aligned, with `Tile.blank` in unused slots.
    """

    __slots__ = ("fill", "slots")

    def __init__(self) -> None:
        """Initialize session with no factories."""
        self.slots: NDArray[int8] = full((0, FACTORY_CAPACITY), Tile.blank, int8)
        self.fill: NDArray[int8] = zeros(0, int8)

    def __repr__(self) -> str:
        """Return representation of self."""
        return (
            f"<{self.__class__.__name__} factories={self.num_factories}"
            f" placed={self.total_placed()}>"
        )

    @property
    def num_factories(self) -> int:
        """Number of registered factories."""
        return len(self.fill)

    def register_factories(self, factory_ids: Iterable[int]) -> None:
        """Reset session to one empty assignment per factory id.

        Raises ValueError if ids are not exactly 1 through n.
        """
        ids = sorted(factory_ids)
        if ids != list(range(1, len(ids) + 1)):
            raise ValueError(
                f"Factory ids must be dense and start at 1, got {ids!r}",
            )
        self.slots = full((len(ids), FACTORY_CAPACITY), Tile.blank, int8)
        self.fill = zeros(len(ids), int8)

    def factory_id_valid(self, factory_id: int) -> bool:
        """Return if given factory id is registered."""
        return 1 <= factory_id <= self.num_factories

    def factory_ids(self) -> tuple[int, ...]:
        """Return registered factory ids in ascending order."""
        return tuple(range(1, self.num_factories + 1))

    def capacity(self) -> int:
        """Return total number of slots across all factories."""
        return self.num_factories * FACTORY_CAPACITY

    def factory_tiles(self, factory_id: int) -> tuple[Tile, ...]:
        """Return copy of tiles placed on given factory."""
        assert self.factory_id_valid(factory_id)
        row = factory_id - 1
        return tuple(Tile(int(x)) for x in self.slots[row, : self.fill[row]])

    def is_factory_full(self, factory_id: int) -> bool:
        """Return if given factory has no free slots."""
        assert self.factory_id_valid(factory_id)
        return int(self.fill[factory_id - 1]) >= FACTORY_CAPACITY

    def place(self, factory_id: int, color: int) -> bool:
        """Append color to factory. Return False if unknown or full."""
        if not self.factory_id_valid(factory_id):
            return False
        if self.is_factory_full(factory_id):
            return False
        row = factory_id - 1
        self.slots[row, self.fill[row]] = color
        self.fill[row] += 1
        return True

    def remove_at(self, factory_id: int, slot_index: int) -> Tile | None:
        """Remove and return tile at slot, shifting later tiles left.

        Return None if factory unknown or slot does not hold a tile.
        """
        if not self.factory_id_valid(factory_id):
            return None
        row = factory_id - 1
        count = int(self.fill[row])
        if slot_index < 0 or slot_index >= count:
            return None
        color = Tile(int(self.slots[row, slot_index]))
        # No gaps, everything after moves over one
        self.slots[row, slot_index : count - 1] = self.slots[
            row,
            slot_index + 1 : count,
        ]
        self.slots[row, count - 1] = Tile.blank
        self.fill[row] -= 1
        return color

    def total_placed(self) -> int:
        """Return number of tiles placed across all factories."""
        return int(self.fill.sum())

    def is_complete(self, total_available_tiles: int) -> bool:
        """Return if everything that can be placed has been placed."""
        return self.total_placed() >= min(total_available_tiles, self.capacity())

    def snapshot_configuration(self) -> tuple[FactoryAssignment, ...]:
        """Return assignments ordered by ascending factory id."""
        return tuple(
            FactoryAssignment(factory_id, self.factory_tiles(factory_id))
            for factory_id in self.factory_ids()
        )
