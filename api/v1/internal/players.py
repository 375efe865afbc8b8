from fastapi import APIRouter, Depends, Path
from core.security import require_admin
from schemas.players import PlayerCreateReq, PlayerUpdateReq, PlayerResp, PlayerDeleteResp
from services.player_service import PlayerService

router = APIRouter(prefix="/players", tags=["player management"])


@router.post('', response_model=PlayerResp, status_code=201)
async def create_player(player_create_req: PlayerCreateReq, current_user: dict = Depends(require_admin)):
    return await PlayerService.create_player(current_user.get("uid"), player_create_req)


@router.patch('/{player_id}', response_model=PlayerResp)
async def update_player(
    player_update_req: PlayerUpdateReq,
    player_id: int = Path(..., ge=1),
    _: dict = Depends(require_admin),
):
    return await PlayerService.update_player(player_id, player_update_req)


@router.delete('/{player_id}', response_model=PlayerDeleteResp)
async def delete_player(player_id: int = Path(..., ge=1), _: dict = Depends(require_admin)):
    return await PlayerService.delete_player(player_id)
