from __future__ import annotations

import random
from collections import Counter
from typing import TYPE_CHECKING

import pytest
from libcomponent.component import ComponentManager

from azul_distribution.component import DistributionComponent
from azul_distribution.conf import SessionConfig
from azul_distribution.controller import DistributionPhase
from azul_distribution.engine import Phase
from azul_distribution.session import GameSession, run
from azul_distribution.tiles import TOTAL_TILES, Tile

if TYPE_CHECKING:
    from pathlib import Path


def test_start_enters_distribution_with_whole_bag() -> None:
    session = GameSession(2, seed=10)
    status = session.start()

    assert session.controller.phase == DistributionPhase.distributing
    assert status.tiles_available == TOTAL_TILES
    assert status.remaining == Counter({color: 20 for color in range(5)})
    assert all(tiles == [] for tiles in session.engine.factories[1:])
    assert session.engine.bag == []
    assert session.tile_total() == TOTAL_TILES


def test_auto_distribute_fills_engine() -> None:
    session = GameSession(3, seed=10)
    session.start()

    placed = session.auto_distribute(random.Random(0))

    assert placed == 28
    assert all(len(tiles) == 4 for tiles in session.engine.factories[1:])
    assert len(session.engine.bag) == TOTAL_TILES - 28
    assert session.engine.available_moves
    assert session.controller.phase == DistributionPhase.idle
    assert session.tile_total() == TOTAL_TILES


def test_full_game_conserves_tiles_and_refills() -> None:
    session = GameSession(2, seed=4, round_limit=7)
    rng = random.Random(4)
    session.start()
    rounds = 0
    refilled = False

    while True:
        before = session.controller.status()
        if before.tiles_discarded == 0 and rounds >= 5:
            refilled = True
        session.auto_distribute(rng)
        assert session.tile_total() == TOTAL_TILES
        session.auto_play_round(rng)
        assert session.engine.current_phase == Phase.round_over
        assert session.tile_total() == TOTAL_TILES
        rounds += 1
        if not session.finish_round():
            break
        assert session.tile_total() == TOTAL_TILES

    assert rounds == 7
    assert refilled
    assert session.engine.current_phase == Phase.end


def test_second_round_draws_from_our_supply() -> None:
    session = GameSession(2, seed=8)
    rng = random.Random(8)
    session.start()
    session.auto_distribute(rng)
    session.auto_play_round(rng)

    assert session.finish_round()

    status = session.controller.status()
    assert status.tiles_available == TOTAL_TILES - 20
    assert status.tiles_discarded == 20
    assert session.engine.factories[0] == [Tile.one]
    assert all(tiles == [] for tiles in session.engine.factories[1:])


def test_replay_keeps_seed_and_resets_supply() -> None:
    session = GameSession(2, seed=99)
    rng = random.Random(1)
    session.start()
    session.auto_distribute(rng)
    session.auto_play_round(rng)
    session.finish_round()

    status = session.replay()

    assert session.seed == 99
    assert session.engine.round_number == 1
    assert status.tiles_available == TOTAL_TILES
    assert status.tiles_discarded == 0


def test_rematch_resets_supply() -> None:
    session = GameSession(2, seed=99)
    session.start()
    session.auto_distribute(random.Random(2))

    status = session.rematch()

    assert isinstance(session.seed, int)
    assert status.tiles_available == TOTAL_TILES
    assert session.controller.phase == DistributionPhase.distributing


def test_from_config() -> None:
    session = GameSession.from_config(
        SessionConfig(player_count=4, seed=3, round_limit=2),
    )
    assert session.seed == 3
    assert session.engine.round_limit == 2
    session.start()
    assert len(session.engine.factories) == 10


def test_run_plays_whole_game(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    config = tmp_path / "azul.ini"
    config.write_text(
        "[game]\nplayer_count = 2\nseed = 7\nround_limit = 3\n"
        "[logging]\nlevel = warning\n",
        encoding="utf-8",
    )

    run([str(config)])

    out = capsys.readouterr().out
    assert "Round 1: placed 20 tiles" in out
    assert "Round 3:" in out
    assert "seed=7" in out


@pytest.mark.trio
async def test_auto_distribute_events_fills_engine() -> None:
    session = GameSession(2, seed=12)
    manager = ComponentManager("manager")
    manager.add_components((DistributionComponent(session.controller),))
    session.start()

    placed = await session.auto_distribute_events(manager, random.Random(3))

    assert placed == 20
    assert all(len(tiles) == 4 for tiles in session.engine.factories[1:])
    assert session.engine.available_moves
    assert session.controller.phase == DistributionPhase.idle
    assert session.tile_total() == TOTAL_TILES
