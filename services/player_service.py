"""
Service for player directory operations.
"""

from typing import Optional

from core.exceptions import NotFoundError, ValidationError
from core.logging import get_logger
from core.settings import settings
from db.base import store_errors, utc_now
from db.models import Game, Player, ShotRecord
from schemas.common import ApiStatus
from schemas.games import GameListResp
from schemas.players import (
    OverallStats,
    PlayerCreateReq,
    PlayerDeleteResp,
    PlayerDetail,
    PlayerResp,
    PlayerSearchItem,
    PlayerSearchResp,
    PlayerUpdateReq,
    Position,
    ShotRecordOut,
)
from services.game_service import GameService


class PlayerService:
    """Service for creating, finding and updating players."""

    @staticmethod
    async def create_player(created_by: Optional[int], req: PlayerCreateReq) -> PlayerResp:
        log = get_logger()

        fields = req.model_dump(exclude_none=True)
        fields["position"] = req.position.value

        with store_errors("create_player"):
            player = Player.create(created_by=created_by, **fields)

        log.info("player_created", player_id=player.id, name=player.name)
        return PlayerResp(
            status=ApiStatus.SUCCESS,
            message="Player created successfully",
            data=PlayerService.to_detail(player),
        )

    @staticmethod
    async def update_player(player_id: int, req: PlayerUpdateReq) -> PlayerResp:
        """Update biographical fields. Stats and shot history cannot be changed here."""
        log = get_logger()
        updates = req.model_dump(exclude_unset=True)
        # These columns are not nullable; an explicit null leaves them as they are
        for key in ("name", "bio", "profile_image_url", "position"):
            if updates.get(key) is None:
                updates.pop(key, None)
        if "position" in updates:
            updates["position"] = updates["position"].value

        with store_errors("update_player", player_id=player_id):
            player = Player.get_or_none(Player.id == player_id)
            if not player:
                raise NotFoundError(f"Player with ID {player_id} not found")

            if updates:
                updates["updated_at"] = utc_now()
                Player.update(**updates).where(Player.id == player_id).execute()
                player = Player.get_by_id(player_id)

        log.info("player_updated", player_id=player_id, fields=sorted(updates))
        return PlayerResp(
            status=ApiStatus.SUCCESS,
            message="Player updated successfully",
            data=PlayerService.to_detail(player),
        )

    @staticmethod
    async def delete_player(player_id: int) -> PlayerDeleteResp:
        log = get_logger()

        with store_errors("delete_player", player_id=player_id):
            player = Player.get_or_none(Player.id == player_id)
            if not player:
                raise NotFoundError(f"Player with ID {player_id} not found")
            player.delete_instance(recursive=True)

        log.info("player_deleted", player_id=player_id)
        return PlayerDeleteResp(
            status=ApiStatus.SUCCESS,
            message="Player deleted",
            data={"player_id": player_id},
        )

    @staticmethod
    async def get_player(player_id: int) -> PlayerResp:
        with store_errors("get_player", player_id=player_id):
            player = Player.get_or_none(Player.id == player_id)
            if not player:
                raise NotFoundError(f"Player with ID {player_id} not found")
            detail = PlayerService.to_detail(player)

        return PlayerResp(
            status=ApiStatus.SUCCESS,
            message=f"Player {player.name}",
            data=detail,
        )

    @staticmethod
    async def search_players(term: Optional[str]) -> PlayerSearchResp:
        """
        Find players whose name or handle contains the term (case-insensitive).

        Args:
            term: Search text, required

        Returns:
            PlayerSearchResp with at most ``settings.player_search_limit`` players
        """
        term = (term or "").strip()
        if not term:
            raise ValidationError("Search term is required")

        with store_errors("search_players"):
            players = Player.search(term, limit=settings.player_search_limit)

        return PlayerSearchResp(
            status=ApiStatus.SUCCESS,
            message=f"Found {len(players)} players",
            data=[
                PlayerSearchItem(
                    id=p.id,
                    name=p.name,
                    instagram_handle=p.instagram_handle,
                    profile_image_url=p.profile_image_url,
                    position=Position(p.position),
                    height_inches=p.height_inches,
                    weight_lbs=p.weight_lbs,
                )
                for p in players
            ],
        )

    @staticmethod
    async def get_recent_games(player_id: int) -> GameListResp:
        """Most recent games (newest first) whose roster includes the player."""
        with store_errors("get_recent_games", player_id=player_id):
            if not Player.select().where(Player.id == player_id).exists():
                raise NotFoundError(f"Player with ID {player_id} not found")
            games = Game.get_recent_for_player(player_id, limit=settings.recent_games_limit)

        return GameListResp(
            status=ApiStatus.SUCCESS,
            message=f"Found {len(games)} recent games",
            data=[GameService.to_summary(g) for g in games],
        )

    @staticmethod
    def to_detail(player: Player) -> PlayerDetail:
        return PlayerDetail(
            id=player.id,
            created_by=player.created_by_id,
            name=player.name,
            instagram_handle=player.instagram_handle,
            profile_image_url=player.profile_image_url,
            bio=player.bio,
            height_inches=player.height_inches,
            weight_lbs=player.weight_lbs,
            position=Position(player.position),
            date_of_birth=player.date_of_birth,
            city=player.city,
            state=player.state,
            overall_stats=OverallStats(**player.overall_stats()),
            shot_history=[
                ShotRecordOut(
                    x=s.x,
                    y=s.y,
                    made=s.made,
                    points=s.points,
                    game_id=s.game_id,
                    timestamp=s.timestamp,
                )
                for s in ShotRecord.history_for(player.id)
            ],
            created_at=player.created_at,
            updated_at=player.updated_at,
        )
