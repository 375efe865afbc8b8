"""Tests for winner resolution and win/loss attribution."""

import pytest

from schemas.events import TeamSide
from schemas.games import BoxScore, FinalScore, GameStatus
from stats.career import career_increments
from stats.outcome import resolve_outcome, win_loss_increment

A = TeamSide.TEAM_A
B = TeamSide.TEAM_B


class TestResolveOutcome:

    @pytest.mark.parametrize(
        "team_a, team_b, expected",
        [
            (21, 15, A),
            (5, 7, B),
            (10, 10, None),
            (0, 0, None),
        ],
    )
    def test_strictly_higher_score_wins(self, team_a, team_b, expected) -> None:
        assert resolve_outcome(FinalScore(team_a=team_a, team_b=team_b)) is expected


class TestWinLossIncrement:

    def test_finished_game_credits_winner_and_loser(self) -> None:
        assert win_loss_increment(GameStatus.FINISHED, A, A) == (1, 0)
        assert win_loss_increment(GameStatus.FINISHED, A, B) == (0, 1)

    def test_tie_counts_as_neither(self) -> None:
        assert win_loss_increment(GameStatus.FINISHED, None, A) == (0, 0)

    def test_canceled_game_counts_as_neither(self) -> None:
        assert win_loss_increment(GameStatus.CANCELED, None, B) == (0, 0)


class TestCareerIncrements:

    def test_maps_box_score_onto_lifetime_counters(self) -> None:
        box = BoxScore(pts=13, fga=8, fgm=5, fg3a=3, fg3m=1, fta=2, ftm=1, reb=11, oreb=4, dreb=7,
                       tov=2, stl=1, blk=1, pf=3, is_double_double=True)

        inc = career_increments(box, GameStatus.FINISHED, A, A)

        assert inc["games_played"] == 1
        assert inc["wins"] == 1
        assert inc["losses"] == 0
        assert inc["total_points"] == 13
        assert inc["total_2pa"] == 5
        assert inc["total_2pm"] == 4
        assert inc["total_3pa"] == 3
        assert inc["total_3pm"] == 1
        assert inc["total_rebounds"] == 11
        assert inc["total_double_doubles"] == 1
        assert inc["total_triple_doubles"] == 0

    def test_canceled_game_still_counts_as_played(self) -> None:
        inc = career_increments(BoxScore(pts=4), GameStatus.CANCELED, None, B)

        assert inc["games_played"] == 1
        assert inc["wins"] == 0
        assert inc["losses"] == 0
        assert inc["total_points"] == 4
