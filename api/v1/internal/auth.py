from fastapi import APIRouter
from services.auth_service import AuthService
from schemas.auth import UserLoginReq, UserLoginResp

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post('/login', response_model=UserLoginResp)
async def login_user(req: UserLoginReq):
    return await AuthService.login_user(req.email, req.password)
