"""Tile Supply - Our own bag and box lid for manual distribution."""

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

__title__ = "Tile Supply"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"

import logging
from collections import Counter
from typing import TYPE_CHECKING

from azul_distribution.tiles import (
    count_real_tiles,
    flatten_counter,
    is_real_tile,
    remove_counter_zeros,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class DoubleInitializationError(RuntimeError):
    """Supply was initialized from engine state while it still held tiles."""

    __slots__ = ("existing",)

    def __init__(self, existing: int) -> None:
        """Remember how many tiles were already in the supply."""
        super().__init__(
            f"Supply already holds {existing} tiles, refusing to re-initialize",
        )
        self.existing = existing


class TileSupply:
    """Tiles available for manual placement, plus the discard pile.

    Tiles are never created or destroyed here, only moved between
    `counts`, the discard pile, and whoever calls `take` and `give`.
    Discarded tiles stay out of `counts` until the supply can no longer
    satisfy a round, at which point the whole pile is poured back in.
    """

    __slots__ = ("counts", "discard")

    def __init__(self) -> None:
        """Initialize empty supply."""
        self.counts: Counter[int] = Counter()
        self.discard: list[int] = []

    def __repr__(self) -> str:
        """Return representation of self."""
        return (
            f"<{self.__class__.__name__} available={self.total_available()}"
            f" discarded={len(self.discard)}>"
        )

    def initialize_from_external_state(
        self,
        existing_factory_tiles: Iterable[Iterable[int]],
        existing_bag_tiles: Iterable[int],
    ) -> None:
        """Seed counts from engine factory contents and bag.

        Raises DoubleInitializationError if supply is not empty.
        """
        existing = self.total_available()
        if existing:
            raise DoubleInitializationError(existing)
        for factory in existing_factory_tiles:
            self.counts.update(count_real_tiles(factory))
        self.counts.update(count_real_tiles(existing_bag_tiles))
        logger.info("Initialized supply with %d tiles", self.total_available())

    def take(self, color: int) -> bool:
        """Remove one tile of color from supply. Return False if none left."""
        if not is_real_tile(color) or self.counts[color] <= 0:
            return False
        self.counts[color] -= 1
        return True

    def give(self, color: int) -> None:
        """Return one tile of color to supply."""
        assert is_real_tile(color), color
        self.counts[int(color)] += 1

    def refill_from_discard_if_needed(self, tiles_needed: int) -> bool:
        """Pour entire discard pile back into supply if supply is short.

        Return True if a refill happened.
        """
        available = self.total_available()
        if available >= tiles_needed or not self.discard:
            return False
        logger.info(
            "Supply depleted (%d tiles, %d needed), refilling from %d discarded tiles",
            available,
            tiles_needed,
            len(self.discard),
        )
        self.counts.update(count_real_tiles(self.discard))
        self.discard.clear()
        return True

    def record_discard(self, colors: Iterable[int]) -> None:
        """Add tiles removed from play to discard pile."""
        for color in colors:
            assert is_real_tile(color), color
            self.discard.append(int(color))

    def total_available(self) -> int:
        """Return number of tiles available to take."""
        return self.counts.total()

    def total_discarded(self) -> int:
        """Return number of tiles in discard pile."""
        return len(self.discard)

    def remaining_counts(self) -> Counter[int]:
        """Return copy of available counts."""
        counts = self.counts.copy()
        remove_counter_zeros(counts)
        return counts

    def flatten(self) -> list[int]:
        """Return available tiles as a flat list grouped by color."""
        return flatten_counter(self.counts)

    def reset(self) -> None:
        """Forget all tiles, for starting a new game."""
        self.counts.clear()
        self.discard.clear()
