"""Azul Table Engine - Factory offer rules the distribution reconciles into."""

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

__title__ = "Azul Table Engine"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"

import logging
import random
from collections import Counter
from enum import IntEnum, auto
from typing import NamedTuple, Protocol

from azul_distribution.tiles import (
    FACTORY_CAPACITY,
    Tile,
    factory_count_for_players,
    flatten_counter,
    generate_bag_contents,
    is_real_tile,
)

logger = logging.getLogger(__name__)

CENTER_ID = 0


class RulesEngine(Protocol):
    """What manual distribution needs from a rules engine.

    `factories[0]` is the table center, `factories[1:]` are the factory
    displays.
    """

    factories: list[list[int]]
    bag: list[int]

    def recompute_moves(self) -> None:
        """Rebuild legal moves from current factory contents."""


class RoundEndEngine(RulesEngine, Protocol):
    """Rules engine that keeps tiles leaving play in a box lid."""

    def drain_box_lid(self) -> list[int]:
        """Return box lid contents and empty it."""


class Phase(IntEnum):
    """Game phases."""

    factory_offer = 0
    round_over = auto()
    end = auto()


class Move(NamedTuple):
    """Take every tile of one color from a source."""

    factory_id: int
    tile: Tile


def bag_draw_tile(bag: list[int], rng: random.Random) -> int:
    """Return drawn tile from bag. Mutates bag."""
    # S311 Standard pseudo-random generators are not suitable for
    # cryptographic purposes
    return bag.pop(rng.randrange(len(bag)))  # noqa: S311


class TableEngine:
    """In-memory table: factory displays, center, bag and box lid.

    Only the factory offer is modelled. Tiles players take are held per
    player until the round ends, then all of them go to the box lid;
    wall tiling and scoring happen elsewhere.
    """

    __slots__ = (
        "available_moves",
        "bag",
        "box_lid",
        "current_phase",
        "current_turn",
        "factories",
        "player_tiles",
        "rng",
        "round_limit",
        "round_number",
        "seed",
    )

    def __init__(self, round_limit: int = 5) -> None:
        """Initialize blank table."""
        self.round_limit = round_limit
        self.seed: int | None = None
        self.rng = random.Random()
        self.factories: list[list[int]] = [[]]
        self.bag: list[int] = []
        self.box_lid: Counter[int] = Counter()
        self.player_tiles: dict[int, Counter[int]] = {}
        self.available_moves: list[Move] = []
        self.current_phase = Phase.end
        self.current_turn = 0
        self.round_number = 0

    def __repr__(self) -> str:
        """Return representation of self."""
        return (
            f"<{self.__class__.__name__} round={self.round_number}"
            f" phase={self.current_phase.name} bag={len(self.bag)}>"
        )

    @property
    def player_count(self) -> int:
        """Number of players in current game."""
        return len(self.player_tiles)

    def new_game(self, player_count: int, seed: int | None = None) -> None:
        """Set up table for a new game and randomly fill factories."""
        if not 2 <= player_count <= 4:
            raise ValueError(f"Azul is for 2 to 4 players, not {player_count}")
        self.seed = seed
        self.rng = random.Random(seed)
        self.bag = flatten_counter(generate_bag_contents())
        self.box_lid = Counter()
        self.player_tiles = {x: Counter() for x in range(player_count)}
        self.factories = [[] for _ in range(factory_count_for_players(player_count) + 1)]
        self.current_turn = 0
        self.round_number = 1
        self.fill_factories()
        self.factories[CENTER_ID] = [Tile.one]
        self.current_phase = Phase.factory_offer
        self.recompute_moves()
        logger.info(
            "New game with %d players, %d factories",
            player_count,
            len(self.factories) - 1,
        )

    def fill_factories(self) -> None:
        """Draw tiles from bag into every factory display."""
        for factory_id in range(1, len(self.factories)):
            tiles: list[int] = []
            for _ in range(FACTORY_CAPACITY):
                if not self.bag:
                    # Box lid goes back in the bag once it runs dry
                    self.bag = flatten_counter(self.box_lid)
                    self.box_lid = Counter()
                    if not self.bag:
                        break
                tiles.append(bag_draw_tile(self.bag, self.rng))
            self.factories[factory_id] = tiles

    def recompute_moves(self) -> None:
        """Rebuild available moves from current factory contents."""
        moves: list[Move] = []
        for factory_id, tiles in enumerate(self.factories):
            for color in sorted(set(tiles)):
                if is_real_tile(color):
                    moves.append(Move(factory_id, Tile(color)))
        self.available_moves = moves
        if not moves and self.current_phase == Phase.factory_offer:
            self.current_phase = Phase.round_over

    def round_over(self) -> bool:
        """Return if every tile has been taken this round."""
        return self.current_phase == Phase.round_over

    def play_move(self, move: Move) -> None:
        """Take all tiles of move color from move source for current player."""
        assert self.current_phase == Phase.factory_offer
        if move not in self.available_moves:
            raise ValueError(f"{move!r} is not an available move")
        source = self.factories[move.factory_id]
        taken = Counter(tile for tile in source if tile == move.tile)
        rest = [tile for tile in source if tile != move.tile]
        if move.factory_id == CENTER_ID:
            if Tile.one in rest:
                rest.remove(Tile.one)
                taken[Tile.one] += 1
            self.factories[CENTER_ID] = rest
        else:
            self.factories[move.factory_id] = []
            self.factories[CENTER_ID].extend(rest)
        self.player_tiles[self.current_turn].update(taken)

        self.current_turn = (self.current_turn + 1) % self.player_count
        self.recompute_moves()

    def end_round(self) -> bool:
        """Clear held tiles into box lid. Return if game continues.

        Whoever took the first player marker starts the next round.
        Factory displays are left empty, call `fill_factories` or
        distribute them by hand before play resumes.
        """
        assert self.current_phase == Phase.round_over
        for player_id, tiles in self.player_tiles.items():
            if tiles.pop(Tile.one, 0):
                self.current_turn = player_id
            self.box_lid.update(tiles)
            tiles.clear()
        self.factories[CENTER_ID] = []
        if self.round_number >= self.round_limit:
            self.current_phase = Phase.end
            self.available_moves = []
            logger.info("Game over after %d rounds", self.round_number)
            return False
        self.round_number += 1
        self.factories[CENTER_ID] = [Tile.one]
        self.current_phase = Phase.factory_offer
        self.available_moves = []
        return True

    def drain_box_lid(self) -> list[int]:
        """Return box lid contents as flat list and empty it."""
        tiles = flatten_counter(self.box_lid)
        self.box_lid = Counter()
        return tiles

    def tiles_in_play(self) -> int:
        """Return count of real tiles on the table or held by players."""
        on_table = sum(
            1 for tiles in self.factories for tile in tiles if is_real_tile(tile)
        )
        held = sum(
            count
            for tiles in self.player_tiles.values()
            for color, count in tiles.items()
            if is_real_tile(color)
        )
        return on_table + held
