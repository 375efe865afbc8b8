"""
Event ledger.

The ledger is append-only: recorded events are never edited, removed or
reordered. Append order is authoritative, not timestamp order.
"""

from datetime import datetime
from typing import Optional

from core.exceptions import InvalidStateError, ValidationError
from db.base import utc_now
from db.models.games import Game
from schemas.events import FreeThrowEvent, GameEvent, ShotEvent
from schemas.games import GameStatus


def scoreboard_points(event: GameEvent) -> int:
    """Points the event adds to its team's running score."""
    if isinstance(event, ShotEvent):
        return event.points if event.made else 0
    if isinstance(event, FreeThrowEvent):
        return (event.points or 1) if event.made else 0
    return 0


def append_event(game: Game, event: GameEvent, now: Optional[datetime] = None) -> GameEvent:
    """
    Stamp an event and add it to the game's ledger.

    Mutates ``game`` in memory only; the caller persists it.

    Raises:
        InvalidStateError: the game is not in progress
        ValidationError: the player is not on the roster or not on the declared team

    Returns:
        The recorded (timestamped) event
    """
    if game.game_status is not GameStatus.IN_PROGRESS:
        raise InvalidStateError(
            f"Cannot add event, game status is '{game.status}'",
            current_status=game.status,
        )

    side = game.teams.side_of(event.player_id)
    if side is None:
        raise ValidationError(f"Player {event.player_id} is not in this game")
    if side is not event.team:
        raise ValidationError(f"Player {event.player_id} is on {side.value}, not {event.team.value}")

    recorded = event.model_copy(update={"timestamp": now or utc_now()})
    game.events = list(game.events or []) + [recorded.model_dump(mode="json")]

    points = scoreboard_points(recorded)
    if points:
        game.add_points(recorded.team, points)

    return recorded
