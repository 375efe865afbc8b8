"""Tests for the game lifecycle service."""

import threading

import pytest

from core.exceptions import ConcurrentModificationError, InvalidStateError, NotFoundError, ValidationError
from db.models import Game, GamePlayer, Player, ShotRecord
from schemas.events import TeamSide, TurnoverEvent
from schemas.games import GameCreateReq, GameStatus, GameType
from services.career_service import CareerService
from services.game_service import GameService

from helpers import rebound, shot

A = TeamSide.TEAM_A
B = TeamSide.TEAM_B


@pytest.fixture
def p1(make_player) -> Player:
    return make_player("Jordan Miles", instagram_handle="jmiles")


@pytest.fixture
def p2(make_player) -> Player:
    return make_player("Chris Paulson")


class TestCreateGame:

    @pytest.mark.asyncio
    async def test_creates_in_progress_game_with_roster(self, p1, p2) -> None:
        resp = await GameService.create_game(
            None, GameCreateReq(game_type=GameType.ONE_ON_ONE, team_a=[p1.id], team_b=[p2.id], score_to_win=21)
        )

        game = resp.data
        assert game.status is GameStatus.IN_PROGRESS
        assert game.all_player_ids == [p1.id, p2.id]
        assert game.final_score.team_a == 0
        assert game.events == []
        assert game.winner is None
        assert game.score_to_win == 21
        assert [p.name for p in game.players] == ["Jordan Miles", "Chris Paulson"]
        assert GamePlayer.select().where(GamePlayer.game == game.id).count() == 2

    @pytest.mark.asyncio
    async def test_unknown_player_creates_nothing(self, p1, p2) -> None:
        missing_id = p2.id + 100

        with pytest.raises(NotFoundError) as exc_info:
            await GameService.create_game(
                None, GameCreateReq(game_type=GameType.TWO_ON_TWO, team_a=[p1.id, missing_id], team_b=[p2.id])
            )

        assert exc_info.value.data == {"missing_ids": [missing_id]}
        assert Game.select().count() == 0

    @pytest.mark.asyncio
    async def test_missing_fields_rejected(self, p1) -> None:
        with pytest.raises(ValidationError):
            await GameService.create_game(None, GameCreateReq(game_type=GameType.ONE_ON_ONE, team_a=[p1.id]))

    @pytest.mark.asyncio
    async def test_player_on_both_teams_rejected(self, p1, p2) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await GameService.create_game(
                None, GameCreateReq(game_type=GameType.TWO_ON_TWO, team_a=[p1.id, p2.id], team_b=[p2.id])
            )

        assert exc_info.value.data == {"overlapping_ids": [p2.id]}


class TestAddEvent:

    @pytest.mark.asyncio
    async def test_event_updates_score_and_persists(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])

        resp = await GameService.add_event(game_id, shot(p1.id, A, points=3))

        assert resp.data.final_score.team_a == 3
        stored = Game.get_by_id(game_id)
        assert stored.team_a_score == 3
        assert stored.version == 1
        assert stored.ledger[0].timestamp is not None

    @pytest.mark.asyncio
    async def test_unknown_game(self, database) -> None:
        with pytest.raises(NotFoundError):
            await GameService.add_event(404, shot(1, A))

    @pytest.mark.asyncio
    async def test_stale_document_is_not_saved(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        stale = Game.get_by_id(game_id)

        await GameService.add_event(game_id, shot(p1.id, A))

        stale.team_b_score = 50
        assert stale.save_versioned() is False
        assert Game.get_by_id(game_id).team_b_score == 0

    @pytest.mark.asyncio
    async def test_version_conflict_surfaces(self, p1, p2, make_game, monkeypatch) -> None:
        game_id = await make_game([p1.id], [p2.id])
        monkeypatch.setattr(Game, "save_versioned", lambda self: False)

        with pytest.raises(ConcurrentModificationError):
            await GameService.add_event(game_id, shot(p1.id, A))


class TestFinalizeGame:

    @pytest.mark.asyncio
    async def test_finalize_sets_winner_and_updates_careers(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        for event in [
            shot(p1.id, A, points=3),
            shot(p1.id, A, points=3),
            shot(p2.id, B, points=2),
            shot(p2.id, B, made=False, points=3),
            rebound(p1.id, A),
        ]:
            await GameService.add_event(game_id, event)

        resp = await GameService.finalize_game(game_id)

        game = resp.data
        assert game.status is GameStatus.FINISHED
        assert game.winner is A
        assert game.game_stats_summary[p1.id].pts == 6
        assert game.game_stats_summary[p2.id].fga == 2

        winner = Player.get_by_id(p1.id)
        loser = Player.get_by_id(p2.id)
        assert (winner.games_played, winner.wins, winner.losses) == (1, 1, 0)
        assert (loser.games_played, loser.wins, loser.losses) == (1, 0, 1)
        assert winner.total_points == 6
        assert winner.total_3pa == 2
        assert loser.total_2pa == 1
        assert loser.total_3pa == 1
        assert ShotRecord.select().where(ShotRecord.player == p2.id).count() == 2

    @pytest.mark.asyncio
    async def test_tie_has_no_winner(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        await GameService.add_event(game_id, shot(p1.id, A))
        await GameService.add_event(game_id, shot(p2.id, B))

        resp = await GameService.finalize_game(game_id)

        assert resp.data.winner is None
        for player_id in (p1.id, p2.id):
            player = Player.get_by_id(player_id)
            assert (player.games_played, player.wins, player.losses) == (1, 0, 0)

    @pytest.mark.asyncio
    async def test_finalize_twice_is_rejected_and_changes_nothing(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        await GameService.add_event(game_id, shot(p1.id, A))
        await GameService.finalize_game(game_id)
        before = Game.get_by_id(game_id)

        with pytest.raises(InvalidStateError) as exc_info:
            await GameService.finalize_game(game_id)

        assert exc_info.value.current_status == "finished"
        after = Game.get_by_id(game_id)
        assert after.version == before.version
        assert after.game_stats_summary == before.game_stats_summary
        assert Player.get_by_id(p1.id).games_played == 1

    @pytest.mark.asyncio
    async def test_events_rejected_after_finish(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        await GameService.finalize_game(game_id)

        with pytest.raises(InvalidStateError):
            await GameService.add_event(game_id, shot(p1.id, A))

        assert Game.get_by_id(game_id).events == []

    @pytest.mark.asyncio
    async def test_career_failure_for_one_player_does_not_affect_others(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        await GameService.add_event(game_id, shot(p1.id, A))
        Player.delete_by_id(p2.id)

        resp = await GameService.finalize_game(game_id)

        assert resp.data.status is GameStatus.FINISHED
        assert Player.get_by_id(p1.id).wins == 1

    @pytest.mark.asyncio
    async def test_career_result_reports_failures(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        await GameService.cancel_game(game_id)
        Player.delete_by_id(p2.id)

        result = await CareerService.apply_game_result(Game.get_by_id(game_id))

        assert result.updated == [p1.id]
        assert result.failed == [p2.id]

    @pytest.mark.asyncio
    async def test_player_writes_run_off_the_event_loop_thread(self, p1, p2, make_game, monkeypatch) -> None:
        game_id = await make_game([p1.id], [p2.id])
        await GameService.add_event(game_id, shot(p1.id, A))
        threads = []
        increment_stats = Player.increment_stats.__func__

        def recording(cls, player_id, increments):
            threads.append(threading.get_ident())
            return increment_stats(cls, player_id, increments)

        monkeypatch.setattr(Player, "increment_stats", classmethod(recording))

        await GameService.finalize_game(game_id)

        assert len(threads) == 2
        assert threading.get_ident() not in threads
        assert Player.get_by_id(p1.id).wins == 1
        assert Player.get_by_id(p2.id).losses == 1


class TestCancelGame:

    @pytest.mark.asyncio
    async def test_cancel_keeps_partial_stats_without_win_or_loss(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        await GameService.add_event(game_id, shot(p1.id, A, points=3))
        await GameService.add_event(game_id, rebound(p2.id, B, offensive=True))
        await GameService.add_event(game_id, TurnoverEvent(player_id=p2.id, team=B))

        resp = await GameService.cancel_game(game_id)

        game = resp.data
        assert game.status is GameStatus.CANCELED
        assert game.winner is None
        assert len(game.events) == 3
        assert game.game_stats_summary[p1.id].pts == 3
        assert game.game_stats_summary[p2.id].oreb == 1
        assert game.game_stats_summary[p2.id].tov == 1

        for player_id in (p1.id, p2.id):
            player = Player.get_by_id(player_id)
            assert (player.games_played, player.wins, player.losses) == (1, 0, 0)
        assert Player.get_by_id(p1.id).total_points == 3

    @pytest.mark.asyncio
    async def test_cancel_after_finish_is_rejected(self, p1, p2, make_game) -> None:
        game_id = await make_game([p1.id], [p2.id])
        await GameService.finalize_game(game_id)

        with pytest.raises(InvalidStateError):
            await GameService.cancel_game(game_id)

        assert Game.get_by_id(game_id).status == GameStatus.FINISHED.value
