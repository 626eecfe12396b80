"""Distribution Component - Operator events into distribution commands."""

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

__title__ = "Distribution Component"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"

from typing import TYPE_CHECKING

from libcomponent.component import Component, Event

from azul_distribution.commands import (
    PlaceTileCommand,
    RemoveTileCommand,
    StartRoundCommand,
)
from azul_distribution.controller import DistributionController

if TYPE_CHECKING:
    from azul_distribution.commands import DistributionCommand


class DistributionComponent(Component):
    """Distribution Component.

    Listens for operator drop, click-to-remove and start round events,
    feeds them to the controller as commands, and raises the outcome:

      `distribution_status` with a DistributionStatus after a change
      `distribution_rejected` with the command that was refused
      `distribution_applied` with the configuration written to the engine

    Every handler finishes mutating before it awaits anything, so one
    event is fully applied before the next is looked at.
    """

    __slots__ = ("controller",)

    def __init__(self, controller: DistributionController | None = None) -> None:
        """Initialize with controller."""
        super().__init__("distribution")

        if controller is None:
            controller = DistributionController()
        self.controller = controller

    def bind_handlers(self) -> None:
        """Register event handlers."""
        self.register_handlers(
            {
                "distribution_place_tile": self.handle_place_tile,
                "distribution_remove_tile": self.handle_remove_tile,
                "distribution_start_round": self.handle_start_round,
            },
        )

    async def run_command(self, command: DistributionCommand) -> bool:
        """Execute command and raise status or rejected event."""
        if not self.controller.execute(command):
            await self.raise_event(Event("distribution_rejected", command))
            return False
        await self.raise_event(
            Event("distribution_status", self.controller.status()),
        )
        return True

    async def handle_place_tile(self, event: Event[tuple[int, int]]) -> None:
        """Handle tile dropped on factory."""
        factory_id, color = event.data
        await self.run_command(PlaceTileCommand(factory_id, color))

    async def handle_remove_tile(self, event: Event[tuple[int, int]]) -> None:
        """Handle placed tile clicked."""
        factory_id, slot_index = event.data
        await self.run_command(RemoveTileCommand(factory_id, slot_index))

    async def handle_start_round(self, _: Event[None]) -> None:
        """Handle start round button pressed."""
        # Button is disabled until complete, so do not even try
        if not self.controller.can_start_round():
            await self.raise_event(
                Event("distribution_rejected", StartRoundCommand()),
            )
            return
        configuration = self.controller.apply_distribution()
        await self.raise_event(Event("distribution_applied", configuration))
