from __future__ import annotations

import random
from typing import Iterable, List

from gemboard.components.config import GameConfig
from gemboard.events.bus import EventBus
from gemboard.systems.game_flow_system import GameFlowSystem
from gemboard.systems.match_resolution import CascadeResolver
from gemboard.world import create_world

# Readable aliases for gem types in hand-built boards.
R, G, B, Y, P = 0, 1, 2, 3, 4


class ScriptedRandom(random.Random):
    """Random source whose randrange() replays a fixed script, then falls back to a seeded stream."""

    def __init__(self, script: Iterable[int], seed: int = 0):
        super().__init__(seed)
        self.script: List[int] = list(script)

    def randrange(self, *args, **kwargs):
        if self.script:
            return self.script.pop(0)
        return super().randrange(*args, **kwargs)


def make_game(rows=3, cols=3, color_count=3, *, seed=1234, refill_script=None, **config_kwargs):
    """Build a started game; returns (bus, world, flow)."""
    bus = EventBus()
    config = GameConfig(rows=rows, cols=cols, color_count=color_count, **config_kwargs)
    world = create_world(config=config, seed=seed)
    resolver = None
    if refill_script is not None:
        resolver = CascadeResolver(
            ScriptedRandom(refill_script),
            color_count=color_count,
            base_points=config.base_points,
            pass_factor=config.pass_factor,
        )
    flow = GameFlowSystem(world, bus, resolver=resolver)
    flow.start()
    return bus, world, flow


def record(bus: EventBus, name: str) -> list[dict]:
    events: list[dict] = []
    bus.subscribe(name, lambda sender, **payload: events.append(payload))
    return events
