"""
Public API routes for player information.
"""

from typing import Optional

from fastapi import APIRouter, Path, Query, Request
from schemas.games import GameListResp
from schemas.players import PlayerResp, PlayerSearchResp
from services.player_service import PlayerService
from core.rate_limit import limiter, PUBLIC_RATE_LIMIT

router = APIRouter(prefix="/players", tags=["Players"])


@router.get(
    "",
    response_model=PlayerSearchResp,
    summary="Search players",
    description="Case-insensitive substring search on name or Instagram handle. Returns at most 20 players.",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def search_players(
    request: Request,
    search: Optional[str] = Query(None, description="Text to look for in name or handle"),
) -> PlayerSearchResp:
    return await PlayerService.search_players(search)


@router.get('/{player_id}', response_model=PlayerResp, summary="Get a player with career stats")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_player(request: Request, player_id: int = Path(..., ge=1)) -> PlayerResp:
    return await PlayerService.get_player(player_id)


@router.get('/{player_id}/games', response_model=GameListResp, summary="Get a player's recent games")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_player_recent_games(request: Request, player_id: int = Path(..., ge=1)) -> GameListResp:
    """Up to 10 most recent games for the player, newest first."""
    return await PlayerService.get_recent_games(player_id)
