"""Distribution Commands."""

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

__title__ = "Distribution Commands"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"

from typing import NamedTuple, TypeAlias


class PlaceTileCommand(NamedTuple):
    """Tile of color dropped on a factory."""

    factory_id: int
    color: int


class RemoveTileCommand(NamedTuple):
    """Placed tile clicked to send it back to the supply."""

    factory_id: int
    slot_index: int


class StartRoundCommand(NamedTuple):
    """Operator confirmed distribution, start the round."""


DistributionCommand: TypeAlias = (
    PlaceTileCommand | RemoveTileCommand | StartRoundCommand
)
