"""
Reconciliation Service

Career updates are applied after a game closes and are never retried, so a
player's record can fall behind. This job compares each player's
``games_played`` with the closed games that reference them and rebuilds any
record that disagrees, replaying every closed game from its stored summary.

Games closed within the settle window are left alone so the job never races
a career update that is still in flight.
"""

import traceback
from datetime import datetime, timedelta

import pytz
from peewee import fn

from core.exceptions import NotFoundError
from core.logging import get_logger
from db.base import db, store_errors, utc_now
from db.models import Game, GamePlayer, Player, ShotRecord
from schemas.career import PlayerDivergence, ReconciliationResult
from schemas.common import ApiStatus
from schemas.events import TeamSide
from schemas.games import BoxScore, GameStatus
from stats.career import career_increments, shots_for_player

CLOSED_STATUSES = [GameStatus.FINISHED.value, GameStatus.CANCELED.value]
DEFAULT_SETTLE_SECONDS = 300


class ReconciliationService:
    """Detects and repairs players whose career record diverged."""

    @staticmethod
    def find_divergent_players(settle_seconds: int = DEFAULT_SETTLE_SECONDS) -> list[PlayerDivergence]:
        """
        Players whose games_played differs from their count of closed games.

        Players with a game closed in the last ``settle_seconds`` are skipped.
        """
        cutoff = utc_now() - timedelta(seconds=settle_seconds)

        closed_counts = {
            row.player_id: row.closed_games
            for row in (
                GamePlayer.select(GamePlayer.player_id, fn.COUNT(GamePlayer.game).alias("closed_games"))
                .join(Game, on=(GamePlayer.game == Game.id))
                .where(Game.status.in_(CLOSED_STATUSES))
                .group_by(GamePlayer.player_id)
            )
        }
        unsettled = {
            row.player_id
            for row in (
                GamePlayer.select(GamePlayer.player_id)
                .join(Game, on=(GamePlayer.game == Game.id))
                .where(Game.status.in_(CLOSED_STATUSES) & (Game.updated_at > cutoff))
            )
        }

        divergent = []
        for player in Player.select(Player.id, Player.games_played).order_by(Player.id):
            if player.id in unsettled:
                continue
            closed = closed_counts.get(player.id, 0)
            if player.games_played != closed:
                divergent.append(
                    PlayerDivergence(
                        player_id=player.id,
                        recorded_games=player.games_played,
                        closed_games=closed,
                    )
                )
        return divergent

    @staticmethod
    def rebuild_player(player_id: int) -> int:
        """
        Reset a player's counters and shot history and replay every closed game.

        Returns:
            Number of games replayed
        """
        with db.atomic():
            if Player.reset_stats(player_id) == 0:
                raise NotFoundError(f"Player with ID {player_id} not found")
            ShotRecord.clear_for(player_id)

            games = Game.get_closed_for_player(player_id)
            for game in games:
                status = game.game_status
                winner = TeamSide(game.winner) if game.winner else None
                box = game.box_scores.get(player_id) or BoxScore()
                increments = career_increments(box, status, winner, game.teams.side_of(player_id))
                Player.increment_stats(player_id, increments)
                ShotRecord.append_shots(player_id, game.id, shots_for_player(game.ledger, player_id))

        return len(games)

    @staticmethod
    async def run(repair: bool = True, settle_seconds: int = DEFAULT_SETTLE_SECONDS) -> ReconciliationResult:
        """
        Find divergent players and, when ``repair`` is set, rebuild them.
        """
        log = get_logger("reconciliation").bind(repair=repair)
        started_at = datetime.now(pytz.utc)
        log.info("reconciliation_started")

        try:
            with store_errors("find_divergent_players"):
                divergent = ReconciliationService.find_divergent_players(settle_seconds)
            log.info("divergent_players_found", count=len(divergent))

            repaired = []
            if repair:
                for entry in divergent:
                    try:
                        replayed = ReconciliationService.rebuild_player(entry.player_id)
                        repaired.append(entry.player_id)
                        log.info(
                            "player_rebuilt",
                            player_id=entry.player_id,
                            games_replayed=replayed,
                            previous_games_played=entry.recorded_games,
                        )
                    except Exception as e:
                        log.error("player_rebuild_failed", player_id=entry.player_id, error=f"{type(e).__name__}: {e}")

            completed_at = datetime.now(pytz.utc)
            log.info("reconciliation_completed", divergent=len(divergent), repaired=len(repaired))
            return ReconciliationResult(
                status=ApiStatus.SUCCESS,
                message=f"{len(divergent)} divergent players, {len(repaired)} repaired",
                started_at=started_at.isoformat(),
                completed_at=completed_at.isoformat(),
                duration_seconds=(completed_at - started_at).total_seconds(),
                records_processed=len(divergent),
                divergent=divergent,
                repaired=repaired,
            )

        except Exception as e:
            completed_at = datetime.now(pytz.utc)
            error_msg = f"{type(e).__name__}: {str(e)}"
            log.error("reconciliation_failed", error=error_msg, traceback=traceback.format_exc())
            return ReconciliationResult(
                status=ApiStatus.ERROR,
                message="Reconciliation failed",
                started_at=started_at.isoformat(),
                completed_at=completed_at.isoformat(),
                duration_seconds=(completed_at - started_at).total_seconds(),
                error=error_msg,
            )
