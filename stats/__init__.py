from .box_score import compute_box_scores, apply_milestone_flags
from .outcome import resolve_outcome, win_loss_increment
from .career import career_increments, shots_for_player
from .ledger import append_event, scoreboard_points

__all__ = [
    'compute_box_scores',
    'apply_milestone_flags',
    'resolve_outcome',
    'win_loss_increment',
    'career_increments',
    'shots_for_player',
    'append_event',
    'scoreboard_points',
]
