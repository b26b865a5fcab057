from __future__ import annotations

import logging

from esper import World

from gemboard.components.game_state import GameSnapshot, GameStatus, Session
from gemboard.events.bus import EVENT_GAME_STATUS_CHANGED, EVENT_STATE_CHANGED, EventBus

logger = logging.getLogger(__name__)


def get_session(world: World) -> Session:
    """Return the singleton Session component, creating it if absent."""
    for _, session in world.get_component(Session):
        return session
    world.create_entity(Session())
    return list(world.get_component(Session))[0][1]


def snapshot_of(session: Session) -> GameSnapshot:
    return GameSnapshot(
        status=session.status,
        score=session.score,
        level=session.level,
        progress=session.progress,
    )


def set_status(world: World, event_bus: EventBus, status: GameStatus) -> None:
    """Update the session status and emit a change event when it differs."""
    session = get_session(world)
    previous = session.status
    if previous == status:
        return
    session.status = status
    logger.debug("status %s -> %s", previous.value, status.value)
    event_bus.emit(EVENT_GAME_STATUS_CHANGED, previous_status=previous, new_status=status)


def publish_snapshot(world: World, event_bus: EventBus) -> GameSnapshot:
    snapshot = snapshot_of(get_session(world))
    event_bus.emit(
        EVENT_STATE_CHANGED,
        status=snapshot.status,
        score=snapshot.score,
        level=snapshot.level,
        progress=snapshot.progress,
    )
    return snapshot
