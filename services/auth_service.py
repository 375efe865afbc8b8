from core.exceptions import AuthenticationError
from core.logging import get_logger
from core.security import check_password, create_access_token, hash_password
from db.base import store_errors
from db.models import User
from schemas.auth import AuthResponse, AuthUser, UserLoginResp
from schemas.common import ApiStatus


class AuthService:

    @staticmethod
    async def login_user(email: str, password: str) -> UserLoginResp:
        log = get_logger("auth")

        with store_errors("login"):
            user = User.get_by_email(email)

        if not user or not check_password(password, user.hashed_password):
            log.info("login_failed", email=email.lower())
            raise AuthenticationError("Invalid credentials")

        token = create_access_token({"uid": user.id, "role": user.role})
        log.info("login_succeeded", user_id=user.id)

        return UserLoginResp(
            status=ApiStatus.SUCCESS,
            message="Login successful",
            data=AuthResponse(
                access_token=token,
                user=AuthUser(id=user.id, email=user.email, role=user.role),
            ),
        )

    @staticmethod
    def create_admin(email: str, password: str) -> User:
        """Create an admin account (used by setup scripts and tests)."""
        with store_errors("create_admin"):
            return User.create(
                email=email.strip().lower(),
                hashed_password=hash_password(password),
                role="admin",
            )
