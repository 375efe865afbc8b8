from pydantic import BaseModel, Field
from typing import Optional

from .common import ApiStatus


class CareerUpdateResult(BaseModel):
    """Outcome of folding one closed game into its players' records"""

    game_id: int
    updated: list[int] = Field(default_factory=list)
    failed: list[int] = Field(default_factory=list)


class PlayerDivergence(BaseModel):
    """A player whose games_played disagrees with the closed games on file"""

    player_id: int
    recorded_games: int
    closed_games: int


class ReconciliationResult(BaseModel):
    """Result of a single reconciliation run"""

    status: ApiStatus
    message: str
    started_at: str
    completed_at: Optional[str] = None
    duration_seconds: Optional[float] = None
    records_processed: Optional[int] = None
    divergent: list[PlayerDivergence] = Field(default_factory=list)
    repaired: list[int] = Field(default_factory=list)
    error: Optional[str] = None
