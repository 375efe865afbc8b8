from peewee import (
    AutoField,
    BooleanField,
    DateTimeField,
    FloatField,
    ForeignKeyField,
    SmallIntegerField,
)

from db.base import BaseModel
from db.models.games import Game
from db.models.players import Player


class ShotRecord(BaseModel):
    """One entry in a player's append-only shot history."""

    id = AutoField(primary_key=True)
    player = ForeignKeyField(Player, backref="shots", on_delete="CASCADE")
    game = ForeignKeyField(Game, backref="shot_records", on_delete="CASCADE")
    x = FloatField()
    y = FloatField()
    made = BooleanField()
    points = SmallIntegerField()
    timestamp = DateTimeField()

    class Meta:
        table_name = "shot_records"

    @classmethod
    def append_shots(cls, player_id: int, game_id: int, shots: list[dict]) -> int:
        """Append shot dicts (x, y, made, points, timestamp) in the given order."""
        if not shots:
            return 0
        rows = [{"player": player_id, "game": game_id, **shot} for shot in shots]
        cls.insert_many(rows).execute()
        return len(rows)

    @classmethod
    def history_for(cls, player_id: int) -> list["ShotRecord"]:
        return list(cls.select().where(cls.player == player_id).order_by(cls.id))

    @classmethod
    def clear_for(cls, player_id: int) -> int:
        return cls.delete().where(cls.player == player_id).execute()
