"""
Schemas for game requests and responses.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from schemas.common import BaseRequest, BaseResponse
from schemas.events import GameEvent, TeamSide


class GameType(str, Enum):
    ONE_ON_ONE = "1v1"
    TWO_ON_TWO = "2v2"
    THREE_ON_THREE = "3v3"
    FIVE_ON_FIVE = "5v5"


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


# ------------------------------- Box Scores ------------------------------- #


class BoxScore(BaseModel):
    """One player's line for one game."""

    pts: int = 0
    fga: int = 0
    fgm: int = 0
    fg3a: int = 0
    fg3m: int = 0
    fta: int = 0
    ftm: int = 0
    reb: int = 0
    oreb: int = 0
    dreb: int = 0
    ast: int = 0
    tov: int = 0
    stl: int = 0
    blk: int = 0
    pf: int = 0
    is_double_double: bool = False
    is_triple_double: bool = False


class FinalScore(BaseModel):
    team_a: int = 0
    team_b: int = 0

    def for_team(self, team: TeamSide) -> int:
        return self.team_a if team is TeamSide.TEAM_A else self.team_b


class Teams(BaseModel):
    team_a: list[int] = Field(default_factory=list)
    team_b: list[int] = Field(default_factory=list)

    def side_of(self, player_id: int) -> Optional[TeamSide]:
        if player_id in self.team_a:
            return TeamSide.TEAM_A
        if player_id in self.team_b:
            return TeamSide.TEAM_B
        return None


class PlayerRef(BaseModel):
    """Display fields used when a game's roster is resolved."""

    id: int
    name: str
    instagram_handle: Optional[str] = None


#                          ------- Incoming -------                           #


class GameCreateReq(BaseRequest):
    game_type: Optional[GameType] = None
    team_a: Optional[list[int]] = None
    team_b: Optional[list[int]] = None
    score_to_win: Optional[int] = Field(None, ge=1, description="Target score, informational only")


#                          ------- Outgoing -------                           #


class GameDetail(BaseModel):
    id: int
    created_by: Optional[int] = None
    game_type: GameType
    status: GameStatus
    score_to_win: Optional[int] = None
    all_player_ids: list[int]
    teams: Teams
    final_score: FinalScore
    winner: Optional[TeamSide] = None
    events: list[GameEvent] = Field(default_factory=list)
    game_stats_summary: dict[int, BoxScore] = Field(default_factory=dict)
    players: list[PlayerRef] = Field(default_factory=list, description="Roster with display names")
    version: int
    created_at: datetime
    updated_at: datetime


class GameSummary(BaseModel):
    """Compact game entry used in a player's recent games list."""

    id: int
    game_type: GameType
    status: GameStatus
    final_score: FinalScore
    teams: Teams
    winner: Optional[TeamSide] = None
    created_at: datetime


class GameResp(BaseResponse):
    data: Optional[GameDetail] = None


class GameListResp(BaseResponse):
    data: Optional[list[GameSummary]] = None
