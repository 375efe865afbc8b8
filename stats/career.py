"""
Career merge.

Turns one closed game's box score into counter increments for a player's
lifetime record. Every value is an increment, so results from different games
can be applied in any order.
"""

from typing import Optional, Sequence

from schemas.events import GameEvent, ShotEvent, TeamSide
from schemas.games import BoxScore, GameStatus
from stats.outcome import win_loss_increment


def career_increments(
    box: BoxScore,
    status: GameStatus,
    winner: Optional[TeamSide],
    player_team: Optional[TeamSide],
) -> dict[str, int]:
    """Map a game box score onto the Player lifetime counters."""
    wins, losses = win_loss_increment(status, winner, player_team)
    return {
        "games_played": 1,
        "wins": wins,
        "losses": losses,
        "total_points": box.pts,
        "total_fga": box.fga,
        "total_fgm": box.fgm,
        "total_3pa": box.fg3a,
        "total_3pm": box.fg3m,
        "total_2pa": box.fga - box.fg3a,
        "total_2pm": box.fgm - box.fg3m,
        "total_fta": box.fta,
        "total_ftm": box.ftm,
        "total_rebounds": box.reb,
        "total_oreb": box.oreb,
        "total_dreb": box.dreb,
        "total_assists": box.ast,
        "total_turnovers": box.tov,
        "total_steals": box.stl,
        "total_blocks": box.blk,
        "total_fouls": box.pf,
        "total_double_doubles": 1 if box.is_double_double else 0,
        "total_triple_doubles": 1 if box.is_triple_double else 0,
    }


def shots_for_player(events: Sequence[GameEvent], player_id: int) -> list[dict]:
    """Shot history entries for one player, in ledger order."""
    return [
        {
            "x": event.location.x,
            "y": event.location.y,
            "made": event.made,
            "points": event.points,
            "timestamp": event.timestamp,
        }
        for event in events
        if isinstance(event, ShotEvent) and event.player_id == player_id
    ]
