"""Azul Tiles."""

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

__title__ = "Azul Tiles"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"


from collections import Counter
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

FACTORY_CAPACITY: Final = 4
TILES_PER_COLOR: Final = 20


class Tile(IntEnum):
    """All tile types."""

    blank = -1
    blue = 0
    yellow = auto()
    red = auto()
    black = auto()
    cyan = auto()
    one = auto()


REAL_TILES: Final = frozenset(
    {Tile.blue, Tile.yellow, Tile.red, Tile.black, Tile.cyan},
)
TOTAL_TILES: Final = TILES_PER_COLOR * len(REAL_TILES)


def is_real_tile(value: object) -> bool:
    """Return if value is one of the five placeable tile colors."""
    return isinstance(value, int) and value in REAL_TILES


def factory_count_for_players(player_count: int) -> int:
    """Return number of factory displays for given player count, center excluded."""
    return player_count * 2 + 1


def generate_bag_contents() -> Counter[int]:
    """Generate and return unrandomized bag."""
    return Counter({int(color): TILES_PER_COLOR for color in REAL_TILES})


def count_real_tiles(tiles: Iterable[int]) -> Counter[int]:
    """Return counter of real tile colors in tiles, skipping anything else."""
    return Counter(int(tile) for tile in tiles if is_real_tile(tile))


def flatten_counter(counter: Counter[int]) -> list[int]:
    """Return counter expanded into a list, grouped by ascending color."""
    tiles: list[int] = []
    for color in sorted(counter):
        tiles.extend((color,) * max(0, counter[color]))
    return tiles


def remove_counter_zeros(counter: Counter[Any]) -> None:
    """Remove any zero counts from given counter. Mutates counter."""
    for key, count in tuple(counter.items()):
        if count == 0:
            del counter[key]
