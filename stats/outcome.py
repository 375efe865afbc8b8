"""Winner resolution and per-player win/loss attribution."""

from typing import Optional

from schemas.events import TeamSide
from schemas.games import FinalScore, GameStatus


def resolve_outcome(final_score: FinalScore) -> Optional[TeamSide]:
    """Strictly higher score wins; a tie has no winner."""
    if final_score.team_a > final_score.team_b:
        return TeamSide.TEAM_A
    if final_score.team_b > final_score.team_a:
        return TeamSide.TEAM_B
    return None


def win_loss_increment(
    status: GameStatus,
    winner: Optional[TeamSide],
    player_team: Optional[TeamSide],
) -> tuple[int, int]:
    """
    Return the (wins, losses) to add for one player.

    Only finished games with a winner count. Ties and canceled games add
    neither.
    """
    if status is not GameStatus.FINISHED or winner is None or player_team is None:
        return 0, 0
    if player_team is winner:
        return 1, 0
    return 0, 1
