"""
Game store.

A game row is the document of record: roster, running score, the event
ledger and the derived summary all live on it. ``GamePlayer`` mirrors the
roster so games can be queried by player.
"""

from typing import Optional

from peewee import (
    AutoField,
    CharField,
    CompositeKey,
    DateTimeField,
    ForeignKeyField,
    IntegerField,
    SmallIntegerField,
)

from db.base import BaseModel, JSONField, db, utc_now
from db.models.users import User
from schemas.events import GameEvent, TeamSide, game_event_list_adapter
from schemas.games import BoxScore, FinalScore, GameStatus, Teams


class Game(BaseModel):
    id = AutoField(primary_key=True)
    created_by = ForeignKeyField(User, backref="games", null=True, on_delete="SET NULL")
    game_type = CharField(max_length=8)
    status = CharField(max_length=16, default=GameStatus.IN_PROGRESS.value, index=True)
    score_to_win = SmallIntegerField(null=True)
    team_a = JSONField()  # ordered player ids
    team_b = JSONField()
    all_player_ids = JSONField()
    team_a_score = IntegerField(default=0)
    team_b_score = IntegerField(default=0)
    winner = CharField(max_length=8, null=True)
    events = JSONField(default=list)
    game_stats_summary = JSONField(default=list)  # [{"player_id": ..., **box score}]
    version = IntegerField(default=0)
    created_at = DateTimeField(default=utc_now, index=True)
    updated_at = DateTimeField(default=utc_now)

    class Meta:
        table_name = "games"

    # ------------------------------- Queries ------------------------------- #

    @classmethod
    def create_game(
        cls,
        created_by: Optional[int],
        game_type: str,
        team_a: list[int],
        team_b: list[int],
        score_to_win: Optional[int] = None,
    ) -> "Game":
        """Insert the game and its roster rows in one transaction."""
        with db.atomic():
            game = cls.create(
                created_by=created_by,
                game_type=game_type,
                score_to_win=score_to_win,
                team_a=team_a,
                team_b=team_b,
                all_player_ids=list(dict.fromkeys(team_a + team_b)),
            )
            GamePlayer.insert_many(
                [{"game": game.id, "player_id": pid, "team": TeamSide.TEAM_A.value} for pid in team_a]
                + [{"game": game.id, "player_id": pid, "team": TeamSide.TEAM_B.value} for pid in team_b]
            ).execute()
        return game

    @classmethod
    def get_recent_for_player(cls, player_id: int, limit: int = 10) -> list["Game"]:
        """Newest-first games whose roster includes the player."""
        return list(
            cls.select()
            .join(GamePlayer, on=(GamePlayer.game == cls.id))
            .where(GamePlayer.player_id == player_id)
            .order_by(cls.created_at.desc(), cls.id.desc())
            .limit(limit)
        )

    @classmethod
    def get_closed_for_player(cls, player_id: int) -> list["Game"]:
        """Finished and canceled games for the player, oldest first."""
        return list(
            cls.select()
            .join(GamePlayer, on=(GamePlayer.game == cls.id))
            .where(
                (GamePlayer.player_id == player_id)
                & (cls.status.in_([GameStatus.FINISHED.value, GameStatus.CANCELED.value]))
            )
            .order_by(cls.created_at, cls.id)
        )

    def save_versioned(self) -> bool:
        """
        Write the mutable document fields if nobody else saved first.

        Returns:
            False when the stored version no longer matches the loaded one
        """
        expected = self.version
        now = utc_now()
        rows = (
            Game.update(
                status=self.status,
                winner=self.winner,
                team_a_score=self.team_a_score,
                team_b_score=self.team_b_score,
                events=self.events,
                game_stats_summary=self.game_stats_summary,
                version=expected + 1,
                updated_at=now,
            )
            .where((Game.id == self.id) & (Game.version == expected))
            .execute()
        )
        if rows == 0:
            return False
        self.version = expected + 1
        self.updated_at = now
        return True

    # ------------------------------- Accessors ------------------------------- #

    @property
    def game_status(self) -> GameStatus:
        return GameStatus(self.status)

    @property
    def teams(self) -> Teams:
        return Teams(team_a=self.team_a, team_b=self.team_b)

    @property
    def final_score(self) -> FinalScore:
        return FinalScore(team_a=self.team_a_score, team_b=self.team_b_score)

    @property
    def ledger(self) -> list[GameEvent]:
        return game_event_list_adapter.validate_python(self.events or [])

    @property
    def box_scores(self) -> dict[int, BoxScore]:
        return {
            entry["player_id"]: BoxScore.model_validate(
                {k: v for k, v in entry.items() if k != "player_id"}
            )
            for entry in self.game_stats_summary or []
        }

    @box_scores.setter
    def box_scores(self, summary: dict[int, BoxScore]) -> None:
        self.game_stats_summary = [
            {"player_id": player_id, **box.model_dump()} for player_id, box in summary.items()
        ]

    def add_points(self, team: TeamSide, points: int) -> None:
        if team is TeamSide.TEAM_A:
            self.team_a_score += points
        else:
            self.team_b_score += points

    def __repr__(self):
        return f"<Game(id={self.id}, status='{self.status}', version={self.version})>"


class GamePlayer(BaseModel):
    game = ForeignKeyField(Game, backref="roster", on_delete="CASCADE")
    # Non-owning reference; deleting a player leaves past games intact
    player_id = IntegerField(index=True)
    team = CharField(max_length=8)

    class Meta:
        table_name = "game_players"
        primary_key = CompositeKey("game", "player_id")
