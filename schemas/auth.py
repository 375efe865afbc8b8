from pydantic import BaseModel, EmailStr
from typing import Optional
from .common import BaseRequest, BaseResponse

# ------------------------------- Authentication Models ------------------------------- #


class AuthUser(BaseModel):
    id: int
    email: str
    role: str


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AuthUser

#                          ------- Incoming -------                           #

class UserLoginReq(BaseRequest):
    email: EmailStr
    password: str

#                          ------- Outgoing -------                           #

class UserLoginResp(BaseResponse):
    """User login response with authentication data"""
    data: Optional[AuthResponse] = None
