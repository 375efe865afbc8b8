"""
Schemas for in-game events.

An event is a tagged union on ``type``. Events are immutable: the ledger only
ever stores copies stamped with a server timestamp.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class TeamSide(str, Enum):
    TEAM_A = "team_a"
    TEAM_B = "team_b"

    @property
    def opponent(self) -> "TeamSide":
        return TeamSide.TEAM_B if self is TeamSide.TEAM_A else TeamSide.TEAM_A


class ReboundType(str, Enum):
    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"


class EventBase(BaseModel):
    """Fields shared by every event type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    player_id: int = Field(ge=1, description="Player who performed the event")
    team: TeamSide = Field(..., description="Team the player is on")
    timestamp: Optional[datetime] = Field(None, description="Server-assigned time of recording")


class ShotLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class ShotEvent(EventBase):
    type: Literal["shot"] = "shot"
    location: ShotLocation
    made: bool
    points: Literal[2, 3] = Field(..., description="Point value of the attempt")

    @property
    def is_three(self) -> bool:
        return self.points == 3


class FreeThrowEvent(EventBase):
    type: Literal["free_throw"] = "free_throw"
    made: bool
    points: Optional[Literal[1, 2, 3]] = Field(None, description="Scoreboard value, defaults to 1")


class ReboundEvent(EventBase):
    type: Literal["rebound"] = "rebound"
    rebound_type: ReboundType


class TurnoverEvent(EventBase):
    type: Literal["turnover"] = "turnover"
    turnover_type: Optional[str] = None


class StealEvent(EventBase):
    type: Literal["steal"] = "steal"


class BlockEvent(EventBase):
    type: Literal["block"] = "block"


class FoulEvent(EventBase):
    type: Literal["foul"] = "foul"


GameEvent = Annotated[
    Union[
        ShotEvent,
        FreeThrowEvent,
        ReboundEvent,
        TurnoverEvent,
        StealEvent,
        BlockEvent,
        FoulEvent,
    ],
    Field(discriminator="type"),
]

game_event_adapter: TypeAdapter[GameEvent] = TypeAdapter(GameEvent)
game_event_list_adapter: TypeAdapter[list[GameEvent]] = TypeAdapter(list[GameEvent])
