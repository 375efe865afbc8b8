# Import all models to ensure they are registered with the database
from .users import User
from .players import Player, STAT_FIELDS
from .games import Game, GamePlayer
from .shots import ShotRecord

# Creation order respects foreign keys
ALL_MODELS = [User, Player, Game, GamePlayer, ShotRecord]

__all__ = [
    'User',
    'Player',
    'STAT_FIELDS',
    'Game',
    'GamePlayer',
    'ShotRecord',
    'ALL_MODELS',
]
