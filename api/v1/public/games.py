"""
Public API routes for game information.
"""

from fastapi import APIRouter, Request, Path
from schemas.games import GameResp
from services.game_service import GameService
from core.rate_limit import limiter, PUBLIC_RATE_LIMIT

router = APIRouter(prefix="/games", tags=["Games"])


@router.get(
    "/{game_id}",
    response_model=GameResp,
    summary="Get a game",
    description="Returns a game with its ledger, score, summary and roster display names.",
    responses={
        200: {"description": "Game retrieved successfully"},
        404: {"description": "Game not found"},
        429: {"description": "Rate limit exceeded"},
    },
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_game(
    request: Request,
    game_id: int = Path(..., ge=1, description="Game ID"),
) -> GameResp:
    """Get a single game by ID."""
    return await GameService.get_game(game_id)
