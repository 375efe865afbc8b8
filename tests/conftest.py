"""pytest configuration and fixtures."""

import os

# Set required environment variables for testing before any imports
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DB_ENGINE", "sqlite")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402
from peewee import SqliteDatabase  # noqa: E402

from core.security import create_access_token  # noqa: E402
from db.base import close_db, init_db  # noqa: E402
from db.models import Player  # noqa: E402
from schemas.games import GameCreateReq, GameType  # noqa: E402
from services.auth_service import AuthService  # noqa: E402
from services.game_service import GameService  # noqa: E402


@pytest.fixture
def database(tmp_path):
    """A fresh file-backed SQLite store per test, shared by every thread."""
    database = init_db(SqliteDatabase(str(tmp_path / "pickup.db"), pragmas={"foreign_keys": 1}))
    yield database
    close_db()


@pytest.fixture
def make_player(database):
    def _make(name: str, **fields) -> Player:
        return Player.create(name=name, **fields)

    return _make


@pytest.fixture
def make_game(database):
    """Create an in-progress game through the service and return its id."""

    async def _make(team_a: list[int], team_b: list[int], game_type: GameType = GameType.ONE_ON_ONE) -> int:
        resp = await GameService.create_game(
            None,
            GameCreateReq(game_type=game_type, team_a=team_a, team_b=team_b),
        )
        return resp.data.id

    return _make


@pytest.fixture
def admin_user(database):
    return AuthService.create_admin("admin@nextchapter.org", "hunter22")


@pytest.fixture
def admin_headers(admin_user) -> dict:
    token = create_access_token({"uid": admin_user.id, "role": admin_user.role})
    return {"Authorization": f"Bearer {token}"}
