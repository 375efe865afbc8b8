from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import BaseRequest, BaseResponse

# ------------------------------- Player Models ------------------------------- #


class Position(str, Enum):
    GUARD = "Guard"
    FORWARD = "Forward"
    CENTER = "Center"
    UNKNOWN = "Unknown"


class OverallStats(BaseModel):
    """Lifetime counters. Percentages are left to the client."""

    games_played: int = 0
    wins: int = 0
    losses: int = 0
    total_points: int = 0
    total_fga: int = 0
    total_fgm: int = 0
    total_3pa: int = 0
    total_3pm: int = 0
    total_2pa: int = 0
    total_2pm: int = 0
    total_fta: int = 0
    total_ftm: int = 0
    total_rebounds: int = 0
    total_oreb: int = 0
    total_dreb: int = 0
    total_assists: int = 0
    total_turnovers: int = 0
    total_steals: int = 0
    total_blocks: int = 0
    total_fouls: int = 0
    total_double_doubles: int = 0
    total_triple_doubles: int = 0


class ShotRecordOut(BaseModel):
    x: float
    y: float
    made: bool
    points: int
    game_id: int
    timestamp: datetime


class PlayerDetail(BaseModel):
    id: int
    created_by: Optional[int] = None
    name: str
    instagram_handle: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    height_inches: Optional[int] = None
    weight_lbs: Optional[int] = None
    position: Position = Position.UNKNOWN
    date_of_birth: Optional[date] = None
    city: Optional[str] = None
    state: Optional[str] = None
    overall_stats: OverallStats
    shot_history: list[ShotRecordOut] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class PlayerSearchItem(BaseModel):
    id: int
    name: str
    instagram_handle: Optional[str] = None
    profile_image_url: Optional[str] = None
    position: Position = Position.UNKNOWN
    height_inches: Optional[int] = None
    weight_lbs: Optional[int] = None


#                          ------- Incoming -------                           #


class PlayerCreateReq(BaseRequest):
    name: str = Field(min_length=1, description="Player name cannot be empty")
    instagram_handle: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    height_inches: Optional[int] = Field(None, ge=1)
    weight_lbs: Optional[int] = Field(None, ge=1)
    position: Position = Position.UNKNOWN
    date_of_birth: Optional[date] = None
    city: Optional[str] = None
    state: Optional[str] = None


class PlayerUpdateReq(BaseRequest):
    # Unknown keys (stats, shot history, created_by) are dropped rather than rejected
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    instagram_handle: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    height_inches: Optional[int] = Field(None, ge=1)
    weight_lbs: Optional[int] = Field(None, ge=1)
    position: Optional[Position] = None
    date_of_birth: Optional[date] = None
    city: Optional[str] = None
    state: Optional[str] = None


#                          ------- Outgoing -------                           #


class PlayerResp(BaseResponse):
    data: Optional[PlayerDetail] = None


class PlayerSearchResp(BaseResponse):
    data: Optional[list[PlayerSearchItem]] = None


class PlayerDeleteResp(BaseResponse):
    data: Optional[dict] = None
