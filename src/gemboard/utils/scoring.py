import math

from gemboard.components.game_state import Session


def award_points(session: Session, points: int, threshold_factor: float) -> bool:
    """Add points to the score and level progress.

    Returns True when the award crossed the level threshold. Crossing resets the
    level progress to zero and grows the threshold by ``threshold_factor``; any
    overflow past the threshold is dropped, so one award levels up at most once.
    """
    if points <= 0:
        return False
    session.score += points
    session.level_score += points
    if session.level_score < session.score_to_next_level:
        return False
    session.level += 1
    session.level_score = 0
    session.score_to_next_level = math.floor(session.score_to_next_level * threshold_factor)
    return True
