"""Config module."""

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

__title__ = "Conf"
__author__ = "CoolCat467"
__license__ = "GNU General Public License Version 3"
__version__ = "0.0.0"

import logging
from configparser import ConfigParser
from typing import NamedTuple


class SessionConfig(NamedTuple):
    """Game session settings."""

    player_count: int = 2
    seed: int | None = None
    round_limit: int = 5
    log_level: str = "INFO"


def load_config(config_file: str) -> dict[str, dict[str, str]]:
    """Return config sections loaded from config_file."""
    config = ConfigParser()
    config.read((config_file,))

    data = {}
    for section, values in dict(config.items()).items():
        data[section] = dict(values)
    return data


def parse_session_config(data: dict[str, dict[str, str]]) -> SessionConfig:
    """Return session config from loaded sections.

    Raises ValueError on bad values.
    """
    defaults = SessionConfig()
    game = data.get("game", {})
    log = data.get("logging", {})

    player_count = int(game.get("player_count", defaults.player_count))
    if not 2 <= player_count <= 4:
        raise ValueError(f"player_count must be 2 to 4, not {player_count}")

    seed: int | None = defaults.seed
    raw_seed = game.get("seed", "").strip()
    if raw_seed:
        seed = int(raw_seed)

    round_limit = int(game.get("round_limit", defaults.round_limit))
    if round_limit < 1:
        raise ValueError(f"round_limit must be positive, not {round_limit}")

    log_level = log.get("level", defaults.log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level {log_level!r}")

    return SessionConfig(
        player_count=player_count,
        seed=seed,
        round_limit=round_limit,
        log_level=log_level,
    )


def load_session_config(config_file: str) -> SessionConfig:
    """Return session config read from config_file, defaults if missing."""
    return parse_session_config(load_config(config_file))
