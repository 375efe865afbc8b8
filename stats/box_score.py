"""
Box score aggregation.

Folds a game's ordered event ledger into one BoxScore per roster player. The
fold is pure: the same roster and ledger always produce the same summary.
"""

from typing import Iterable, Sequence

from schemas.events import (
    BlockEvent,
    FoulEvent,
    FreeThrowEvent,
    GameEvent,
    ReboundEvent,
    ReboundType,
    ShotEvent,
    StealEvent,
    TurnoverEvent,
)
from schemas.games import BoxScore

MILESTONE_THRESHOLD = 10
MILESTONE_CATEGORIES = ("pts", "reb", "ast", "stl", "blk")


def _apply_shot(box: BoxScore, event: ShotEvent) -> None:
    box.fga += 1
    if event.is_three:
        box.fg3a += 1
    if event.made:
        box.fgm += 1
        box.pts += event.points
        if event.is_three:
            box.fg3m += 1


def _apply_free_throw(box: BoxScore, event: FreeThrowEvent) -> None:
    box.fta += 1
    if event.made:
        # Worth one point in the box score whatever the declared value
        box.ftm += 1
        box.pts += 1


def _apply_rebound(box: BoxScore, event: ReboundEvent) -> None:
    box.reb += 1
    if event.rebound_type is ReboundType.OFFENSIVE:
        box.oreb += 1
    else:
        box.dreb += 1


def _counter(field: str):
    def apply(box: BoxScore, event: GameEvent) -> None:
        setattr(box, field, getattr(box, field) + 1)

    return apply


_HANDLERS = {
    ShotEvent: _apply_shot,
    FreeThrowEvent: _apply_free_throw,
    ReboundEvent: _apply_rebound,
    TurnoverEvent: _counter("tov"),
    StealEvent: _counter("stl"),
    BlockEvent: _counter("blk"),
    FoulEvent: _counter("pf"),
}


def milestone_categories(box: BoxScore) -> int:
    """Number of milestone categories at or above the threshold."""
    return sum(1 for field in MILESTONE_CATEGORIES if getattr(box, field) >= MILESTONE_THRESHOLD)


def apply_milestone_flags(box: BoxScore) -> BoxScore:
    """Set the double-double and triple-double flags from the final counters."""
    reached = milestone_categories(box)
    box.is_triple_double = reached >= 3
    box.is_double_double = reached >= 2
    return box


def compute_box_scores(roster: Iterable[int], events: Sequence[GameEvent]) -> dict[int, BoxScore]:
    """
    Build the per-player summary for a game.

    Every roster id gets an entry even with no events. Events for players not
    on the roster are skipped.

    Args:
        roster: Player ids in the game
        events: The ledger, in append order

    Returns:
        Mapping of player id to BoxScore, in roster order
    """
    summary = {player_id: BoxScore() for player_id in roster}

    for event in events:
        box = summary.get(event.player_id)
        if box is None:
            continue
        _HANDLERS[type(event)](box, event)

    for box in summary.values():
        apply_milestone_flags(box)

    return summary
