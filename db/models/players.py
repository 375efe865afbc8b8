"""
Player directory.

Biographical attributes live beside the lifetime counters. Counters are only
ever changed through ``increment_stats`` so concurrent game results add up
regardless of arrival order.
"""

from typing import Iterable

from peewee import (
    AutoField,
    CharField,
    DateField,
    DateTimeField,
    ForeignKeyField,
    IntegerField,
    SmallIntegerField,
    TextField,
    fn,
)

from db.base import BaseModel, utc_now
from db.models.users import User

DEFAULT_PROFILE_IMAGE = "/images/default_image.png"
DEFAULT_BIO = "Player at TheNextChapter!"

STAT_FIELDS = (
    "games_played",
    "wins",
    "losses",
    "total_points",
    "total_fga",
    "total_fgm",
    "total_3pa",
    "total_3pm",
    "total_2pa",
    "total_2pm",
    "total_fta",
    "total_ftm",
    "total_rebounds",
    "total_oreb",
    "total_dreb",
    "total_assists",
    "total_turnovers",
    "total_steals",
    "total_blocks",
    "total_fouls",
    "total_double_doubles",
    "total_triple_doubles",
)


class Player(BaseModel):
    id = AutoField(primary_key=True)
    created_by = ForeignKeyField(User, backref="players", null=True, on_delete="SET NULL")
    name = CharField(max_length=255)
    instagram_handle = CharField(max_length=255, null=True)
    profile_image_url = CharField(max_length=512, default=DEFAULT_PROFILE_IMAGE)
    bio = TextField(default=DEFAULT_BIO)
    height_inches = SmallIntegerField(null=True)
    weight_lbs = SmallIntegerField(null=True)
    position = CharField(max_length=16, default="Unknown")
    date_of_birth = DateField(null=True)
    city = CharField(max_length=128, null=True)
    state = CharField(max_length=64, null=True)

    # Lifetime counters
    games_played = IntegerField(default=0)
    wins = IntegerField(default=0)
    losses = IntegerField(default=0)
    total_points = IntegerField(default=0)
    total_fga = IntegerField(default=0)
    total_fgm = IntegerField(default=0)
    total_3pa = IntegerField(default=0)
    total_3pm = IntegerField(default=0)
    total_2pa = IntegerField(default=0)
    total_2pm = IntegerField(default=0)
    total_fta = IntegerField(default=0)
    total_ftm = IntegerField(default=0)
    total_rebounds = IntegerField(default=0)
    total_oreb = IntegerField(default=0)
    total_dreb = IntegerField(default=0)
    total_assists = IntegerField(default=0)
    total_turnovers = IntegerField(default=0)
    total_steals = IntegerField(default=0)
    total_blocks = IntegerField(default=0)
    total_fouls = IntegerField(default=0)
    total_double_doubles = IntegerField(default=0)
    total_triple_doubles = IntegerField(default=0)

    created_at = DateTimeField(default=utc_now)
    updated_at = DateTimeField(default=utc_now)

    class Meta:
        table_name = "players"

    @classmethod
    def find_missing_ids(cls, player_ids: Iterable[int]) -> list[int]:
        """Return the ids (in input order) that have no player row."""
        wanted = list(dict.fromkeys(player_ids))
        if not wanted:
            return []
        found = {p.id for p in cls.select(cls.id).where(cls.id.in_(wanted))}
        return [pid for pid in wanted if pid not in found]

    @classmethod
    def get_by_ids(cls, player_ids: Iterable[int]) -> dict[int, "Player"]:
        ids = list(player_ids)
        if not ids:
            return {}
        return {p.id: p for p in cls.select().where(cls.id.in_(ids))}

    @classmethod
    def search(cls, term: str, limit: int = 20) -> list["Player"]:
        """Case-insensitive substring match on name or instagram handle."""
        needle = term.lower()
        return list(
            cls.select()
            .where(
                fn.LOWER(cls.name).contains(needle)
                | fn.LOWER(cls.instagram_handle).contains(needle)
            )
            .order_by(cls.name, cls.id)
            .limit(limit)
        )

    @classmethod
    def increment_stats(cls, player_id: int, increments: dict[str, int]) -> int:
        """
        Add each amount to the named counter in a single UPDATE.

        Returns:
            Number of rows updated (0 when the player does not exist)
        """
        unknown = set(increments) - set(STAT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown stat fields: {sorted(unknown)}")

        updates = {
            getattr(cls, name): getattr(cls, name) + amount
            for name, amount in increments.items()
        }
        updates[cls.updated_at] = utc_now()
        return cls.update(updates).where(cls.id == player_id).execute()

    @classmethod
    def reset_stats(cls, player_id: int) -> int:
        updates = {getattr(cls, name): 0 for name in STAT_FIELDS}
        updates[cls.updated_at] = utc_now()
        return cls.update(updates).where(cls.id == player_id).execute()

    def overall_stats(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in STAT_FIELDS}

    def __repr__(self):
        return f"<Player(id={self.id}, name='{self.name}', games_played={self.games_played})>"
