import random

from esper import World

from gemboard.components.config import GameConfig
from gemboard.components.game_state import Session
from gemboard.components.selection import Selection


def create_world(
    *,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> World:
    """Create the ECS world for one game instance.

    The world carries its own RNG (``world.random``) so that every random draw of
    a game, board creation and refills alike, can be replayed from one seed.
    """
    config = (config or GameConfig()).validate()
    world = World()
    if rng is None:
        rng = random.Random(seed)
    setattr(world, "random", rng)

    # Single entity holding configuration, session and selection resources.
    world.create_entity(config, Session(score_to_next_level=config.initial_threshold), Selection())
    return world


def get_config(world: World) -> GameConfig:
    for _, config in world.get_component(GameConfig):
        return config
    raise RuntimeError("GameConfig not found; build the world with create_world()")


def get_selection(world: World) -> Selection:
    for _, selection in world.get_component(Selection):
        return selection
    world.create_entity(Selection())
    return list(world.get_component(Selection))[0][1]
