"""
Service for the game lifecycle.

A game starts in_progress and ends either finished or canceled. Both terminal
states are final. Closing a game recomputes the full summary from the ledger,
persists it, and only then hands the result to the career accumulator.
"""

from typing import Optional

from fastapi import BackgroundTasks

from core.exceptions import (
    ConcurrentModificationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from core.logging import get_logger
from db.base import store_errors
from db.models import Game, Player
from schemas.common import ApiStatus
from schemas.events import GameEvent
from schemas.games import (
    GameCreateReq,
    GameDetail,
    GameResp,
    GameStatus,
    GameSummary,
    GameType,
    PlayerRef,
)
from services.career_service import CareerService
from stats.box_score import compute_box_scores
from stats.ledger import append_event
from stats.outcome import resolve_outcome


class GameService:
    """Creates games, records events and closes games."""

    @staticmethod
    async def create_game(created_by: Optional[int], req: GameCreateReq) -> GameResp:
        """
        Create an in-progress game between two teams.

        Raises:
            ValidationError: missing fields, bad ids or a player on both teams
            NotFoundError: one or more player ids do not exist
        """
        log = get_logger()

        if not req.game_type or not req.team_a or not req.team_b:
            raise ValidationError("Missing required game creation fields (game_type, team_a, team_b)")

        team_a = list(dict.fromkeys(req.team_a))
        team_b = list(dict.fromkeys(req.team_b))

        for player_id in team_a + team_b:
            if player_id < 1:
                raise ValidationError(f"Invalid player ID format: {player_id}")

        overlap = sorted(set(team_a) & set(team_b))
        if overlap:
            raise ValidationError(
                "Players cannot be on both teams",
                data={"overlapping_ids": overlap},
            )

        with store_errors("create_game"):
            missing = Player.find_missing_ids(team_a + team_b)
            if missing:
                raise NotFoundError(
                    "One or more player IDs were not found",
                    data={"missing_ids": missing},
                )

            game = Game.create_game(
                created_by=created_by,
                game_type=req.game_type.value,
                team_a=team_a,
                team_b=team_b,
                score_to_win=req.score_to_win,
            )

        log.info(
            "game_created",
            game_id=game.id,
            game_type=game.game_type,
            players=len(game.all_player_ids),
        )
        return GameResp(
            status=ApiStatus.SUCCESS,
            message="Game created successfully",
            data=GameService.to_detail(game),
        )

    @staticmethod
    async def get_game(game_id: int) -> GameResp:
        game = GameService._load_game(game_id)
        return GameResp(
            status=ApiStatus.SUCCESS,
            message="Game fetched successfully",
            data=GameService.to_detail(game),
        )

    @staticmethod
    async def add_event(game_id: int, event: GameEvent) -> GameResp:
        """
        Append an event to a live game's ledger.

        Raises:
            NotFoundError: unknown game
            InvalidStateError: the game is finished or canceled
            ValidationError: the player is not on the declared team
            ConcurrentModificationError: the game was saved by someone else meanwhile
        """
        log = get_logger()
        game = GameService._load_game(game_id)

        recorded = append_event(game, event)
        GameService._save(game, "add_event")

        log.info(
            "game_event_added",
            game_id=game.id,
            event_type=recorded.type,
            player_id=recorded.player_id,
            team_a_score=game.team_a_score,
            team_b_score=game.team_b_score,
        )
        return GameResp(
            status=ApiStatus.SUCCESS,
            message="Event added successfully",
            data=GameService.to_detail(game),
        )

    @staticmethod
    async def finalize_game(game_id: int, background_tasks: Optional[BackgroundTasks] = None) -> GameResp:
        """
        Finish a game: decide the winner, freeze the summary, update careers.

        Career updates run as a background task when ``background_tasks`` is
        given, otherwise they are awaited before returning. Either way their
        failures never reach the caller.

        Raises:
            NotFoundError: unknown game
            InvalidStateError: the game is already finished or canceled
        """
        log = get_logger()
        game = GameService._load_game(game_id)
        GameService._require_in_progress(game, "finalized")

        winner = resolve_outcome(game.final_score)
        game.winner = winner.value if winner else None
        game.box_scores = compute_box_scores(game.all_player_ids, game.ledger)
        game.status = GameStatus.FINISHED.value
        GameService._save(game, "finalize_game")

        log.info(
            "game_finalized",
            game_id=game.id,
            winner=game.winner,
            team_a_score=game.team_a_score,
            team_b_score=game.team_b_score,
        )
        await GameService._dispatch_career_update(game, background_tasks)

        return GameResp(
            status=ApiStatus.SUCCESS,
            message="Game finalized successfully",
            data=GameService.to_detail(game),
        )

    @staticmethod
    async def cancel_game(game_id: int, background_tasks: Optional[BackgroundTasks] = None) -> GameResp:
        """
        Cancel a game. Partial stats are kept; nobody is credited a win or loss.

        Raises:
            NotFoundError: unknown game
            InvalidStateError: the game is already finished or canceled
        """
        log = get_logger()
        game = GameService._load_game(game_id)
        GameService._require_in_progress(game, "canceled")

        game.winner = None
        game.box_scores = compute_box_scores(game.all_player_ids, game.ledger)
        game.status = GameStatus.CANCELED.value
        GameService._save(game, "cancel_game")

        log.info("game_canceled", game_id=game.id, events=len(game.events))
        await GameService._dispatch_career_update(game, background_tasks)

        return GameResp(
            status=ApiStatus.SUCCESS,
            message="Game canceled successfully, partial stats recorded",
            data=GameService.to_detail(game),
        )

    # ------------------------------- Helpers ------------------------------- #

    @staticmethod
    def _load_game(game_id: int) -> Game:
        with store_errors("load_game", game_id=game_id):
            game = Game.get_or_none(Game.id == game_id)
        if not game:
            raise NotFoundError(f"Game with ID {game_id} not found")
        return game

    @staticmethod
    def _require_in_progress(game: Game, action: str) -> None:
        if game.game_status is not GameStatus.IN_PROGRESS:
            get_logger().warning("game_transition_rejected", game_id=game.id, status=game.status, action=action)
            raise InvalidStateError(
                f"Game cannot be {action}, status is already '{game.status}'",
                current_status=game.status,
            )

    @staticmethod
    def _save(game: Game, operation: str) -> None:
        with store_errors(operation, game_id=game.id):
            saved = game.save_versioned()
        if not saved:
            get_logger().warning("game_version_conflict", game_id=game.id, version=game.version)
            raise ConcurrentModificationError(
                "Game was modified by another request, reload and retry"
            )

    @staticmethod
    async def _dispatch_career_update(game: Game, background_tasks: Optional[BackgroundTasks]) -> None:
        if background_tasks is not None:
            background_tasks.add_task(CareerService.apply_game_result, game)
        else:
            await CareerService.apply_game_result(game)

    @staticmethod
    def to_detail(game: Game) -> GameDetail:
        """Serialize a game with its roster resolved to display names."""
        with store_errors("resolve_roster", game_id=game.id):
            players = Player.get_by_ids(game.all_player_ids)

        return GameDetail(
            id=game.id,
            created_by=game.created_by_id,
            game_type=GameType(game.game_type),
            status=game.game_status,
            score_to_win=game.score_to_win,
            all_player_ids=game.all_player_ids,
            teams=game.teams,
            final_score=game.final_score,
            winner=game.winner,
            events=game.ledger,
            game_stats_summary=game.box_scores,
            players=[
                PlayerRef(
                    id=pid,
                    name=players[pid].name,
                    instagram_handle=players[pid].instagram_handle,
                )
                for pid in game.all_player_ids
                if pid in players
            ],
            version=game.version,
            created_at=game.created_at,
            updated_at=game.updated_at,
        )

    @staticmethod
    def to_summary(game: Game) -> GameSummary:
        return GameSummary(
            id=game.id,
            game_type=GameType(game.game_type),
            status=game.game_status,
            final_score=game.final_score,
            teams=game.teams,
            winner=game.winner,
            created_at=game.created_at,
        )
