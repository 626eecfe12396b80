from __future__ import annotations

from collections import Counter

import pytest

from azul_distribution.engine import Move, Phase, TableEngine
from azul_distribution.tiles import TOTAL_TILES, Tile


def test_new_game_deals_factories() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=5)

    assert len(engine.factories) == 6
    assert engine.factories[0] == [Tile.one]
    assert all(len(tiles) == 4 for tiles in engine.factories[1:])
    assert len(engine.bag) == TOTAL_TILES - 20
    assert engine.current_phase == Phase.factory_offer
    assert engine.player_count == 2
    assert engine.tiles_in_play() == 20


@pytest.mark.parametrize(("players", "factories"), [(2, 5), (3, 7), (4, 9)])
def test_factory_count_follows_player_count(players: int, factories: int) -> None:
    engine = TableEngine()
    engine.new_game(players, seed=0)
    assert len(engine.factories) - 1 == factories


@pytest.mark.parametrize("players", [1, 5])
def test_new_game_rejects_player_count(players: int) -> None:
    with pytest.raises(ValueError, match="2 to 4"):
        TableEngine().new_game(players)


def test_same_seed_deals_same_factories() -> None:
    first = TableEngine()
    first.new_game(3, seed=42)
    second = TableEngine()
    second.new_game(3, seed=42)
    assert first.factories == second.factories
    assert first.bag == second.bag


def test_moves_follow_factory_contents() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=0)
    engine.factories[1] = [Tile.red, Tile.red, Tile.blue, Tile.red]
    engine.recompute_moves()
    assert Move(1, Tile.red) in engine.available_moves
    assert Move(1, Tile.blue) in engine.available_moves
    assert Move(1, Tile.cyan) not in engine.available_moves
    assert all(move.tile != Tile.one for move in engine.available_moves)


def test_factory_move_sends_rest_to_center() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=0)
    engine.factories[1] = [Tile.red, Tile.blue, Tile.red, Tile.cyan]
    engine.recompute_moves()

    engine.play_move(Move(1, Tile.red))

    assert engine.factories[1] == []
    assert Counter(engine.factories[0]) == Counter(
        {Tile.one: 1, Tile.blue: 1, Tile.cyan: 1},
    )
    assert engine.player_tiles[0] == Counter({Tile.red: 2})
    assert engine.current_turn == 1
    assert Move(0, Tile.blue) in engine.available_moves


def test_first_center_move_takes_marker() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=0)
    engine.factories[1] = [Tile.red, Tile.blue, Tile.red, Tile.cyan]
    engine.recompute_moves()
    engine.play_move(Move(1, Tile.red))

    engine.play_move(Move(0, Tile.blue))

    assert engine.factories[0] == [Tile.cyan]
    assert engine.player_tiles[1] == Counter({Tile.blue: 1, Tile.one: 1})


def test_unavailable_move_rejected() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=0)
    engine.factories[2] = [Tile.black] * 4
    engine.recompute_moves()
    with pytest.raises(ValueError, match="not an available move"):
        engine.play_move(Move(2, Tile.red))


def play_out(engine: TableEngine) -> None:
    while engine.current_phase == Phase.factory_offer:
        engine.play_move(engine.available_moves[0])


def test_round_end_fills_box_lid() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=3)
    play_out(engine)
    assert engine.round_over()

    assert engine.end_round()

    assert engine.box_lid.total() == 20
    assert engine.tiles_in_play() == 0
    assert engine.factories[0] == [Tile.one]
    assert all(tiles == [] for tiles in engine.factories[1:])
    assert engine.round_number == 2
    assert engine.current_phase == Phase.factory_offer


def test_drain_box_lid() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=3)
    play_out(engine)
    engine.end_round()

    tiles = engine.drain_box_lid()

    assert len(tiles) == 20
    assert tiles == sorted(tiles)
    assert engine.box_lid.total() == 0


def test_game_ends_at_round_limit() -> None:
    engine = TableEngine(round_limit=1)
    engine.new_game(2, seed=3)
    play_out(engine)
    assert not engine.end_round()
    assert engine.current_phase == Phase.end
    assert engine.available_moves == []


def test_empty_factories_mean_round_over() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=3)
    play_out(engine)
    engine.end_round()
    # Nothing distributed
    engine.recompute_moves()
    assert engine.round_over()


def test_fill_factories_uses_box_lid_when_bag_empty() -> None:
    engine = TableEngine()
    engine.new_game(2, seed=3)
    engine.bag = [Tile.red] * 6
    engine.box_lid = Counter({Tile.blue: 10})
    engine.fill_factories()
    dealt = Counter(tile for tiles in engine.factories[1:] for tile in tiles)
    assert dealt == Counter({Tile.red: 6, Tile.blue: 10})
    assert engine.bag == []
    assert engine.box_lid.total() == 0
    assert len(engine.factories[5]) == 0
