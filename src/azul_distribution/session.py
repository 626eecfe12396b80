#!/usr/bin/env python3
# Azul manual distribution session

"""Game Session - Rounds of manual distribution and play."""

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

__title__ = "Game Session"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"

import logging
import random
import sys

import trio
from libcomponent.component import ComponentManager, Event

from azul_distribution.commands import PlaceTileCommand, StartRoundCommand
from azul_distribution.component import DistributionComponent
from azul_distribution.conf import SessionConfig, load_session_config
from azul_distribution.controller import (
    DistributionController,
    DistributionStatus,
)
from azul_distribution.engine import Phase, TableEngine
from azul_distribution.tiles import TOTAL_TILES

logger = logging.getLogger(__name__)


def new_seed() -> int:
    """Return fresh game seed."""
    # S311 Standard pseudo-random generators are not suitable for
    # cryptographic purposes
    return random.randrange(2**32)  # noqa: S311


class GameSession:
    """One table played with manually distributed factories."""

    __slots__ = ("controller", "engine", "player_count", "seed")

    def __init__(
        self,
        player_count: int = 2,
        seed: int | None = None,
        round_limit: int = 5,
    ) -> None:
        """Initialize session, call start to begin."""
        self.player_count = player_count
        self.seed = new_seed() if seed is None else seed
        self.engine = TableEngine(round_limit)
        self.controller = DistributionController()

    def __repr__(self) -> str:
        """Return representation of self."""
        return f"<{self.__class__.__name__} seed={self.seed} {self.engine!r}>"

    @classmethod
    def from_config(cls, config: SessionConfig) -> GameSession:
        """Return new session from config."""
        return cls(config.player_count, config.seed, config.round_limit)

    def start(self) -> DistributionStatus:
        """Start new game with current seed and enter distribution."""
        self.controller.reset_for_new_game()
        self.engine.new_game(self.player_count, self.seed)
        return self.controller.enter_distribution(self.engine)

    def replay(self) -> DistributionStatus:
        """Play again with the same seed."""
        logger.info("Replay with seed %d", self.seed)
        return self.start()

    def rematch(self) -> DistributionStatus:
        """Play again with a different seed."""
        self.seed = new_seed()
        logger.info("Rematch with seed %d", self.seed)
        return self.start()

    def finish_round(self) -> bool:
        """End engine round, discard its box lid, and enter next distribution.

        Return False if the game is over.
        """
        round_number = self.engine.round_number
        continue_game = self.engine.end_round()
        moved = self.controller.collect_box_lid(self.engine)
        logger.info(
            "Round %d finished, %d tiles discarded",
            round_number,
            moved,
        )
        if not continue_game:
            return False
        self.controller.enter_distribution(self.engine)
        return True

    def tile_total(self) -> int:
        """Return tiles in supply, placement, discard, and on the table."""
        status = self.controller.status()
        return (
            status.tiles_available
            + status.tiles_placed
            + status.tiles_discarded
            + self.engine.tiles_in_play()
            + sum(self.engine.box_lid.values())
        )

    def auto_distribute(self, rng: random.Random) -> int:
        """Place random supply tiles until complete, then apply.

        Return number of tiles placed.
        """
        distribution = self.controller.session
        assert distribution is not None, "Not distributing"
        placement = distribution.placement
        placed = 0
        for factory_id in placement.factory_ids():
            while not placement.is_factory_full(factory_id):
                remaining = self.controller.supply.remaining_counts()
                if not remaining:
                    break
                color = rng.choice(sorted(remaining))
                if not self.controller.execute(
                    PlaceTileCommand(factory_id, color),
                ):
                    break
                placed += 1
        applied = self.controller.execute(StartRoundCommand())
        assert applied, "Distribution should be complete"
        return placed

    async def auto_distribute_events(
        self,
        manager: ComponentManager,
        rng: random.Random,
    ) -> int:
        """Place random supply tiles through distribution events on manager.

        Manager must hold a DistributionComponent for our controller.
        Return number of tiles placed.
        """
        distribution = self.controller.session
        assert distribution is not None, "Not distributing"
        placement = distribution.placement
        for factory_id in placement.factory_ids():
            while not placement.is_factory_full(factory_id):
                remaining = self.controller.supply.remaining_counts()
                if not remaining:
                    break
                color = rng.choice(sorted(remaining))
                await manager.raise_event(
                    Event("distribution_place_tile", (factory_id, color)),
                )
        placed = placement.total_placed()
        await manager.raise_event(Event("distribution_start_round", None))
        assert not self.controller.is_distributing(), "Round did not start"
        return placed

    def auto_play_round(self, rng: random.Random) -> int:
        """Play random moves until round is over. Return moves played."""
        moves = 0
        while self.engine.current_phase == Phase.factory_offer:
            self.engine.play_move(rng.choice(self.engine.available_moves))
            moves += 1
        return moves


async def play_game(config: SessionConfig) -> GameSession:
    """Play a full game with random distribution events and random moves."""
    session = GameSession.from_config(config)
    manager = ComponentManager("session")
    manager.add_components((DistributionComponent(session.controller),))
    rng = random.Random(session.seed)
    session.start()
    while True:
        placed = await session.auto_distribute_events(manager, rng)
        moves = session.auto_play_round(rng)
        print(
            f"Round {session.engine.round_number}: placed {placed} tiles,"
            f" played {moves} moves",
        )
        assert session.tile_total() == TOTAL_TILES
        if not session.finish_round():
            break
    manager.unbind_components()
    return session


def run(argv: list[str] | None = None) -> None:
    """Run a full game with random distribution and play."""
    args = sys.argv[1:] if argv is None else argv
    config = SessionConfig()
    if args:
        config = load_session_config(args[0])
    logging.basicConfig(level=config.log_level)

    session = trio.run(play_game, config)
    print(f"{session!r}")


if __name__ == "__main__":
    print(f"{__title__}\nProgrammed by {__author__}.\n")
    run()
