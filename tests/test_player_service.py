"""Tests for player directory operations."""

from datetime import timedelta

import pytest

from core.exceptions import NotFoundError, ValidationError
from db.base import utc_now
from db.models import Game, Player
from schemas.players import PlayerCreateReq, PlayerUpdateReq, Position
from services.game_service import GameService
from services.player_service import PlayerService

from helpers import shot
from schemas.events import TeamSide


class TestCreateAndUpdate:

    @pytest.mark.asyncio
    async def test_create_applies_profile_defaults(self, database) -> None:
        resp = await PlayerService.create_player(None, PlayerCreateReq(name="Dee Walker"))

        player = resp.data
        assert player.name == "Dee Walker"
        assert player.profile_image_url == "/images/default_image.png"
        assert player.bio == "Player at TheNextChapter!"
        assert player.position is Position.UNKNOWN
        assert player.overall_stats.games_played == 0
        assert player.shot_history == []

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, make_player) -> None:
        player = make_player("Sam Ortiz", city="Austin")

        resp = await PlayerService.update_player(
            player.id, PlayerUpdateReq(bio="Lefty", position=Position.GUARD, height_inches=74)
        )

        assert resp.data.bio == "Lefty"
        assert resp.data.position is Position.GUARD
        assert resp.data.height_inches == 74
        assert resp.data.city == "Austin"
        assert resp.data.name == "Sam Ortiz"

    @pytest.mark.asyncio
    async def test_update_ignores_stat_fields(self, make_player) -> None:
        player = make_player("Sam Ortiz")

        req = PlayerUpdateReq.model_validate({"city": "Dallas", "wins": 50, "total_points": 999})
        resp = await PlayerService.update_player(player.id, req)

        assert resp.data.city == "Dallas"
        assert resp.data.overall_stats.wins == 0
        assert resp.data.overall_stats.total_points == 0

    @pytest.mark.asyncio
    async def test_update_unknown_player(self, database) -> None:
        with pytest.raises(NotFoundError):
            await PlayerService.update_player(12345, PlayerUpdateReq(bio="x"))

    @pytest.mark.asyncio
    async def test_delete_removes_player(self, make_player) -> None:
        player = make_player("Gone Soon")

        await PlayerService.delete_player(player.id)

        assert Player.get_or_none(Player.id == player.id) is None
        with pytest.raises(NotFoundError):
            await PlayerService.get_player(player.id)


class TestSearchPlayers:

    @pytest.mark.asyncio
    async def test_case_insensitive_on_name_and_handle(self, make_player) -> None:
        make_player("Marcus Bell")
        make_player("Tony Reyes", instagram_handle="BELLYBUCKETS")
        make_player("Ivan Cruz")

        resp = await PlayerService.search_players("bell")

        assert sorted(p.name for p in resp.data) == ["Marcus Bell", "Tony Reyes"]

    @pytest.mark.asyncio
    async def test_results_are_capped_at_twenty(self, make_player) -> None:
        for i in range(25):
            make_player(f"Hooper {i:02d}")

        resp = await PlayerService.search_players("hooper")

        assert len(resp.data) == 20

    @pytest.mark.asyncio
    async def test_blank_term_rejected(self, database) -> None:
        with pytest.raises(ValidationError):
            await PlayerService.search_players("   ")


class TestRecentGames:

    @pytest.mark.asyncio
    async def test_newest_first_limited_to_ten(self, make_player, make_game) -> None:
        p1 = make_player("Alpha")
        p2 = make_player("Bravo")
        p3 = make_player("Charlie")
        game_ids = [await make_game([p1.id], [p2.id]) for _ in range(12)]
        other = await make_game([p2.id], [p3.id])

        # Spread creation times so ordering does not rely on insert speed
        start = utc_now() - timedelta(hours=1)
        for offset, game_id in enumerate(game_ids):
            Game.update(created_at=start + timedelta(minutes=offset)).where(Game.id == game_id).execute()

        resp = await PlayerService.get_recent_games(p1.id)

        assert [g.id for g in resp.data] == list(reversed(game_ids))[:10]
        assert other not in [g.id for g in resp.data]

    @pytest.mark.asyncio
    async def test_summary_reflects_game_state(self, make_player, make_game) -> None:
        p1 = make_player("Alpha")
        p2 = make_player("Bravo")
        game_id = await make_game([p1.id], [p2.id])
        await GameService.add_event(game_id, shot(p2.id, TeamSide.TEAM_B, points=3))
        await GameService.finalize_game(game_id)

        resp = await PlayerService.get_recent_games(p1.id)

        assert resp.data[0].winner is TeamSide.TEAM_B
        assert resp.data[0].final_score.team_b == 3

    @pytest.mark.asyncio
    async def test_unknown_player(self, database) -> None:
        with pytest.raises(NotFoundError):
            await PlayerService.get_recent_games(999)


class TestPlayerDetail:

    @pytest.mark.asyncio
    async def test_shot_history_after_game(self, make_player, make_game) -> None:
        p1 = make_player("Alpha")
        p2 = make_player("Bravo")
        game_id = await make_game([p1.id], [p2.id])
        await GameService.add_event(game_id, shot(p1.id, TeamSide.TEAM_A, x=3.0, y=4.0, made=False))
        await GameService.add_event(game_id, shot(p1.id, TeamSide.TEAM_A, x=7.0, y=1.0, points=3))
        await GameService.finalize_game(game_id)

        resp = await PlayerService.get_player(p1.id)

        history = resp.data.shot_history
        assert [(s.x, s.y, s.made, s.points) for s in history] == [(3.0, 4.0, False, 2), (7.0, 1.0, True, 3)]
        assert all(s.game_id == game_id for s in history)
        assert resp.data.overall_stats.total_points == 3
