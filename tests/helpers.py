"""Event builders shared by the tests."""

from schemas.events import (
    FreeThrowEvent,
    ReboundEvent,
    ReboundType,
    ShotEvent,
    ShotLocation,
    TeamSide,
)


def shot(player_id: int, team: TeamSide, made: bool = True, points: int = 2, x: float = 10.0, y: float = 5.0) -> ShotEvent:
    return ShotEvent(
        player_id=player_id,
        team=team,
        made=made,
        points=points,
        location=ShotLocation(x=x, y=y),
    )


def free_throw(player_id: int, team: TeamSide, made: bool = True, points=None) -> FreeThrowEvent:
    return FreeThrowEvent(player_id=player_id, team=team, made=made, points=points)


def rebound(player_id: int, team: TeamSide, offensive: bool = False) -> ReboundEvent:
    return ReboundEvent(
        player_id=player_id,
        team=team,
        rebound_type=ReboundType.OFFENSIVE if offensive else ReboundType.DEFENSIVE,
    )
