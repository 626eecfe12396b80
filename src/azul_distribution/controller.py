"""Distribution Controller - Runs a round's manual distribution phase."""

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

__title__ = "Distribution Controller"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"

import logging
from collections import Counter
from enum import IntEnum, auto
from typing import TYPE_CHECKING, NamedTuple

from azul_distribution.commands import (
    PlaceTileCommand,
    RemoveTileCommand,
    StartRoundCommand,
)
from azul_distribution.engine import CENTER_ID
from azul_distribution.placement import PlacementSession
from azul_distribution.supply import TileSupply
from azul_distribution.tiles import FACTORY_CAPACITY

if TYPE_CHECKING:
    from collections.abc import Iterable

    from azul_distribution.commands import DistributionCommand
    from azul_distribution.engine import RoundEndEngine, RulesEngine
    from azul_distribution.placement import FactoryAssignment

logger = logging.getLogger(__name__)


class PrematureApplyError(RuntimeError):
    """Distribution was applied before every placeable tile was placed."""


class DistributionPhase(IntEnum):
    """Controller phases."""

    idle = 0
    distributing = auto()


class DistributionStatus(NamedTuple):
    """What the operator sees while distributing."""

    remaining: Counter[int]
    tiles_placed: int
    tiles_to_place: int
    tiles_available: int
    tiles_discarded: int
    can_start_round: bool


class DistributionSession(NamedTuple):
    """One round's distribution bookkeeping."""

    engine: RulesEngine
    num_factories: int
    tiles_needed: int
    pool_size: int
    placement: PlacementSession


class DistributionController:
    """Drive manual factory distribution and write the result into an engine.

    The engine is only ever written to, at two points: when the first
    round's randomly dealt factories and bag are taken over by the
    supply, and when a finished distribution is applied.
    """

    __slots__ = ("initialized", "session", "supply")

    def __init__(self) -> None:
        """Initialize idle controller with empty supply."""
        self.supply = TileSupply()
        self.session: DistributionSession | None = None
        self.initialized = False

    def __repr__(self) -> str:
        """Return representation of self."""
        return f"<{self.__class__.__name__} {self.phase.name} {self.supply!r}>"

    @property
    def phase(self) -> DistributionPhase:
        """Current phase."""
        if self.session is None:
            return DistributionPhase.idle
        return DistributionPhase.distributing

    def is_distributing(self) -> bool:
        """Return if a distribution phase is active."""
        return self.session is not None

    def take_over_engine_tiles(self, engine: RulesEngine) -> None:
        """Move engine's dealt factory tiles and bag into our supply."""
        factories = engine.factories[CENTER_ID + 1 :]
        self.supply.initialize_from_external_state(factories, engine.bag)
        for factory_id in range(CENTER_ID + 1, len(engine.factories)):
            engine.factories[factory_id] = []
        engine.bag.clear()
        self.initialized = True

    def enter_distribution(self, engine: RulesEngine) -> DistributionStatus:
        """Start distribution phase for the coming round.

        Raises RuntimeError if already distributing.
        """
        if self.session is not None:
            raise RuntimeError("Already in distribution phase")
        num_factories = len(engine.factories) - 1
        tiles_needed = num_factories * FACTORY_CAPACITY

        if not self.initialized:
            self.take_over_engine_tiles(engine)

        self.supply.refill_from_discard_if_needed(tiles_needed)

        placement = PlacementSession()
        placement.register_factories(range(1, num_factories + 1))

        self.session = DistributionSession(
            engine=engine,
            num_factories=num_factories,
            tiles_needed=tiles_needed,
            pool_size=self.supply.total_available(),
            placement=placement,
        )
        logger.info(
            "Entering distribution phase: %d tiles available, %d needed",
            self.supply.total_available(),
            tiles_needed,
        )
        return self.status()

    def place_tile(self, factory_id: int, color: int) -> bool:
        """Place one tile of color from supply onto factory.

        Return False and change nothing if rejected.
        """
        if self.session is None:
            return False
        if not self.supply.take(color):
            logger.debug("No %r tiles left to place", color)
            return False
        if not self.session.placement.place(factory_id, color):
            # Factory full or unknown, put tile back
            self.supply.give(color)
            logger.debug("Factory %r cannot take another tile", factory_id)
            return False
        return True

    def remove_tile(self, factory_id: int, slot_index: int) -> bool:
        """Return tile at factory slot to supply. Return False if nothing there."""
        if self.session is None:
            return False
        color = self.session.placement.remove_at(factory_id, slot_index)
        if color is None:
            logger.debug("No tile at factory %r slot %r", factory_id, slot_index)
            return False
        self.supply.give(color)
        return True

    def is_complete(self) -> bool:
        """Return if all placeable tiles have been placed."""
        if self.session is None:
            return False
        placement = self.session.placement
        # Judged against pool size at entry, not what is left to place
        pool_size = self.supply.total_available() + placement.total_placed()
        assert pool_size == self.session.pool_size, "Tiles leaked from supply"
        return placement.is_complete(pool_size)

    def can_start_round(self) -> bool:
        """Return if start round action should be enabled."""
        return self.is_complete()

    def status(self) -> DistributionStatus:
        """Return current distribution status."""
        available = self.supply.total_available()
        placed = 0
        to_place = 0
        if self.session is not None:
            placed = self.session.placement.total_placed()
            to_place = min(self.session.tiles_needed, available + placed) - placed
        return DistributionStatus(
            remaining=self.supply.remaining_counts(),
            tiles_placed=placed,
            tiles_to_place=to_place,
            tiles_available=available,
            tiles_discarded=self.supply.total_discarded(),
            can_start_round=self.can_start_round(),
        )

    def configuration(self) -> tuple[FactoryAssignment, ...]:
        """Return current factory configuration."""
        if self.session is None:
            return ()
        return self.session.placement.snapshot_configuration()

    def apply_distribution(self) -> tuple[FactoryAssignment, ...]:
        """Write configuration and remaining supply into engine, end phase.

        Raises PrematureApplyError if not distributing or not complete.
        """
        if self.session is None:
            raise PrematureApplyError("Not in distribution phase")
        if not self.is_complete():
            raise PrematureApplyError(
                f"{self.status().tiles_to_place} tiles still need placing",
            )
        engine = self.session.engine
        configuration = self.session.placement.snapshot_configuration()

        for factory_id, tiles in configuration:
            assert factory_id != CENTER_ID
            engine.factories[factory_id] = list(tiles)

        # Engine bag becomes whatever is left in our supply
        engine.bag.clear()
        engine.bag.extend(self.supply.flatten())

        engine.recompute_moves()

        self.session = None
        logger.info(
            "Applied manual distribution, %d tiles left in bag",
            len(engine.bag),
        )
        return configuration

    def execute(self, command: DistributionCommand) -> bool:
        """Execute a distribution command. Return if it was accepted."""
        if isinstance(command, PlaceTileCommand):
            return self.place_tile(command.factory_id, command.color)
        if isinstance(command, RemoveTileCommand):
            return self.remove_tile(command.factory_id, command.slot_index)
        if isinstance(command, StartRoundCommand):
            if not self.can_start_round():
                return False
            self.apply_distribution()
            return True
        raise NotImplementedError(command)

    def replay(self, commands: Iterable[DistributionCommand]) -> int:
        """Execute commands in order. Return number accepted."""
        return sum(1 for command in commands if self.execute(command))

    def record_round_discard(self, colors: Iterable[int]) -> None:
        """Add tiles that left play at round end to discard pile."""
        self.supply.record_discard(colors)

    def collect_box_lid(self, engine: RoundEndEngine) -> int:
        """Move engine's box lid into discard pile. Return number moved."""
        tiles = engine.drain_box_lid()
        self.record_round_discard(tiles)
        return len(tiles)

    def reset_for_new_game(self) -> None:
        """Forget session and all tiles, next entry takes over engine tiles."""
        self.session = None
        self.supply.reset()
        self.initialized = False
