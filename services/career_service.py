"""
Career accumulation.

Runs after a game is durably finished or canceled. Each roster player's
counters and shot history are updated independently; a failure for one player
is logged and does not affect the others or the game itself. Nothing here is
retried; the reconciliation job repairs players that fall behind.
"""

import asyncio
from typing import Optional

from core.exceptions import NotFoundError
from core.logging import get_logger
from db.base import db
from db.models import Game, Player, ShotRecord
from schemas.career import CareerUpdateResult
from schemas.events import GameEvent, TeamSide
from schemas.games import BoxScore, GameStatus
from stats.career import career_increments, shots_for_player


class CareerService:
    """Folds closed games into each player's lifetime record."""

    @staticmethod
    async def apply_game_result(game: Game) -> CareerUpdateResult:
        """
        Merge a closed game's box scores into every roster player's record.

        Never raises; failures are reported through logs and the result.
        Each player's write runs on a worker thread so the event loop stays free.

        Args:
            game: A finished or canceled game with its summary computed

        Returns:
            CareerUpdateResult listing updated and failed player ids
        """
        log = get_logger("career").bind(game_id=game.id, game_status=game.status)
        result = CareerUpdateResult(game_id=game.id)

        try:
            status = game.game_status
            if not status.is_terminal:
                log.warning("career_update_skipped", reason="game_not_closed")
                return result

            winner = TeamSide(game.winner) if game.winner else None
            teams = game.teams
            box_scores = game.box_scores
            events = game.ledger
            roster = list(game.all_player_ids)

            outcomes = await asyncio.gather(
                *(
                    asyncio.to_thread(
                        CareerService._apply_to_player,
                        game_id=game.id,
                        player_id=player_id,
                        box=box_scores.get(player_id) or BoxScore(),
                        status=status,
                        winner=winner,
                        player_team=teams.side_of(player_id),
                        events=events,
                    )
                    for player_id in roster
                ),
                return_exceptions=True,
            )

            for player_id, outcome in zip(roster, outcomes):
                if isinstance(outcome, Exception):
                    result.failed.append(player_id)
                    log.error(
                        "career_update_failed",
                        player_id=player_id,
                        error=f"{type(outcome).__name__}: {outcome}",
                    )
                else:
                    result.updated.append(player_id)

            log.info(
                "career_update_completed",
                updated=len(result.updated),
                failed=len(result.failed),
            )

        except Exception as e:
            log.error("career_update_error", error=f"{type(e).__name__}: {e}")

        return result

    @staticmethod
    def _apply_to_player(
        game_id: int,
        player_id: int,
        box: BoxScore,
        status: GameStatus,
        winner: Optional[TeamSide],
        player_team: Optional[TeamSide],
        events: list[GameEvent],
    ) -> None:
        """Runs on a worker thread with its own connection, released before returning."""
        increments = career_increments(box, status, winner, player_team)
        shots = shots_for_player(events, player_id)

        try:
            with db.atomic():
                if Player.increment_stats(player_id, increments) == 0:
                    raise NotFoundError(f"Player {player_id} not found")
                ShotRecord.append_shots(player_id, game_id, shots)
        finally:
            if not db.is_closed():
                db.close()
