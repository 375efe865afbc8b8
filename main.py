from fastapi import FastAPI, APIRouter
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded

from core.middleware import setup_middleware
from core.db_middleware import DatabaseMiddleware
from core.exceptions import PickupError, pickup_error_handler, request_validation_handler
from core.logging import setup_logging, get_logger
from core.settings import settings
from core.rate_limit import limiter, rate_limit_exceeded_handler
from db.base import init_db, close_db
from api.v1.internal import auth, games, players
from api.v1.public import games as public_games, players as public_players


async def lifespan(app: FastAPI):
    setup_logging(
        log_level=settings.log_level,
        json_format=settings.log_format == "json",
        service_name=settings.service_name,
    )
    log = get_logger().bind(environment=settings.environment)
    log.info("api_starting", db_engine=settings.db_engine)

    # Bind models and create any missing tables
    init_db()

    yield

    close_db()
    log.info("api_stopped")


app = FastAPI(
    title="Pickup Stats API",
    description="Pickup basketball game tracking with live event entry and career stats",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Games", "description": "Game records, ledgers and box scores"},
        {"name": "Players", "description": "Player profiles and career statistics"},
    ],
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Domain errors render into the standard response envelope
app.add_exception_handler(PickupError, pickup_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

# Add middlewares (order matters - first added = outermost)
app.add_middleware(DatabaseMiddleware)
setup_middleware(app)

# API v1 Public routes
api_v1_public = APIRouter(prefix="/v1")
api_v1_public.include_router(public_games.router)
api_v1_public.include_router(public_players.router)

app.include_router(api_v1_public)

# API v1 Internal routes
api_v1_internal = APIRouter(prefix="/v1/internal")
api_v1_internal.include_router(auth.router)
api_v1_internal.include_router(games.router)
api_v1_internal.include_router(players.router)

app.include_router(api_v1_internal)

@app.get("/")
async def root():
    return {"message": "Pickup Stats API"}


# Wake up server
@app.get("/ping")
async def ping():
    return {"message": "Pong!"}
