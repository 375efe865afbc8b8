from fastapi.security import OAuth2PasswordBearer
from fastapi import HTTPException, Depends, status
from datetime import datetime, timedelta
from jose import jwt, JWTError
from typing import Optional
import bcrypt
import pytz

from core.logging import get_logger
from core.settings import settings
from db.models import User

# ---------------------- User Authentication ---------------------- #

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/v1/internal/auth/login")

ADMIN_ROLE = "admin"

# Create access token for a user
def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime.now(pytz.utc) + timedelta(days=settings.access_token_expire_days)})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

# Verify the access token
def verify_access_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        get_logger("auth").info("token_rejected", error=str(e))
        return None

# Get the data for the user; the user must still exist
def get_current_user(token: str = Depends(oauth2_scheme)) -> dict:
    payload = verify_access_token(token)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, token failed")

    user = User.get_or_none(User.id == payload.get("uid"))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, user not found")

    return {"uid": user.id, "email": user.email, "role": user.role}

# Restrict a route to administrators
def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: You do not have permission to perform this action",
        )
    return current_user

# --------------------- Encryption/Validation --------------------- #

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

def check_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))
