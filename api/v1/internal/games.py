from fastapi import APIRouter, BackgroundTasks, Body, Depends, Path
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError
from core.security import require_admin
from schemas.events import game_event_adapter
from schemas.games import GameCreateReq, GameResp
from services.game_service import GameService

router = APIRouter(prefix="/games", tags=["game management"])


@router.post('', response_model=GameResp, status_code=201)
async def create_game(game_create_req: GameCreateReq, current_user: dict = Depends(require_admin)):
    return await GameService.create_game(current_user.get("uid"), game_create_req)


@router.post('/{game_id}/events', response_model=GameResp)
async def add_game_event(
    game_id: int = Path(..., ge=1),
    payload: dict = Body(..., description="Event object tagged by 'type'"),
    _: dict = Depends(require_admin),
):
    try:
        event = game_event_adapter.validate_python(payload)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid event data",
            data=[{"loc": [str(p) for p in err["loc"]], "msg": err["msg"]} for err in e.errors()],
        ) from e
    return await GameService.add_event(game_id, event)


@router.patch('/{game_id}/finish', response_model=GameResp)
async def finalize_game(
    background_tasks: BackgroundTasks,
    game_id: int = Path(..., ge=1),
    _: dict = Depends(require_admin),
):
    return await GameService.finalize_game(game_id, background_tasks)


@router.patch('/{game_id}/cancel', response_model=GameResp)
async def cancel_game(
    background_tasks: BackgroundTasks,
    game_id: int = Path(..., ge=1),
    _: dict = Depends(require_admin),
):
    return await GameService.cancel_game(game_id, background_tasks)
