from __future__ import annotations

from collections import Counter

import pytest

from azul_distribution.controller import DistributionController
from azul_distribution.tiles import Tile


class RecordingEngine:
    """Bare rules engine that remembers how often moves were recomputed."""

    def __init__(self, factories: list[list[int]], bag: list[int]) -> None:
        self.factories = factories
        self.bag = bag
        self.recompute_count = 0
        self.box_lid: Counter[int] = Counter()

    def recompute_moves(self) -> None:
        self.recompute_count += 1

    def drain_box_lid(self) -> list[int]:
        tiles = sorted(self.box_lid.elements())
        self.box_lid = Counter()
        return tiles


def make_engine(num_factories: int = 5, bag_size: int = 80) -> RecordingEngine:
    """Return engine dealt like a fresh two player game."""
    colors = [Tile.blue, Tile.yellow, Tile.red, Tile.black, Tile.cyan]
    factories: list[list[int]] = [[Tile.one]]
    for factory_id in range(num_factories):
        factories.append(
            [colors[(factory_id + slot) % 5] for slot in range(4)],
        )
    bag = [colors[x % 5] for x in range(bag_size)]
    return RecordingEngine(factories, bag)


@pytest.fixture
def engine() -> RecordingEngine:
    return make_engine()


@pytest.fixture
def controller() -> DistributionController:
    return DistributionController()


@pytest.fixture
def short_controller() -> DistributionController:
    """Controller past the first round with 3 tiles left and 15 discarded."""
    controller = DistributionController()
    controller.initialized = True
    controller.supply.counts.update({Tile.blue: 2, Tile.red: 1})
    controller.supply.record_discard(
        [Tile.yellow] * 5 + [Tile.black] * 5 + [Tile.cyan] * 5,
    )
    return controller
