"""
Tests for single-game create/update/delete and listings.
"""

from datetime import datetime, timedelta

import pytest

from app.models import Gender, GameStatus
from app.core.exceptions import (
    DivisionMismatchError, GenderMismatchError, GameNotFoundError, TeamsNotFoundError,
    InvalidScheduleRequestError
)
from app.services.games import GameService


def game_fields(home_id=1, away_id=2, **overrides):
    fields = {
        "sport_id": 1,
        "home_team_id": home_id,
        "away_team_id": away_id,
        "gender": Gender.MEN,
        "scheduled_at": datetime(2025, 7, 1, 18, 0),
        "venue": "Main Gym",
    }
    fields.update(overrides)
    return fields


def test_create_game_defaults_to_scheduled(store):
    game = GameService(store).create_game(game_fields())

    assert game.id == 1
    assert game.status == GameStatus.SCHEDULED
    assert store.get_game(1) == game


def test_create_game_rejects_cross_division(store, mismatched_teams):
    store.add_teams(mismatched_teams["division"])

    with pytest.raises(DivisionMismatchError):
        GameService(store).create_game(game_fields(1, 10))
    assert store.games == {}


def test_create_game_rejects_unknown_team(store):
    with pytest.raises(TeamsNotFoundError):
        GameService(store).create_game(game_fields(1, 42))


def test_update_with_one_team_id_skips_team_check(store, mismatched_teams):
    store.add_teams(mismatched_teams["gender"])
    service = GameService(store)
    game = service.create_game(game_fields())

    updated = service.update_game(game.id, {"away_team_id": 11})
    assert updated.away_team_id == 11


def test_update_refuses_to_clear_required_fields(store):
    service = GameService(store)
    game = service.create_game(game_fields())

    with pytest.raises(InvalidScheduleRequestError):
        service.update_game(game.id, {"home_team_id": None, "away_team_id": 2})
    with pytest.raises(InvalidScheduleRequestError):
        service.update_game(game.id, {"scheduled_at": None})

    assert store.get_game(game.id) == game
    assert store.get_game(game.id).home_team_id == 1


def test_update_with_both_team_ids_is_checked(store, mismatched_teams):
    store.add_teams(mismatched_teams["gender"])
    service = GameService(store)
    game = service.create_game(game_fields())

    with pytest.raises(GenderMismatchError):
        service.update_game(game.id, {"home_team_id": 1, "away_team_id": 11})
    assert store.get_game(game.id).away_team_id == 2


def test_update_scores(store):
    service = GameService(store)
    game = service.create_game(game_fields())

    updated = service.update_game(game.id, {
        "home_score": 3, "away_score": 1, "status": GameStatus.COMPLETED, "winner_id": 1
    })
    assert (updated.home_score, updated.away_score, updated.winner_id) == (3, 1, 1)
    assert updated.status == GameStatus.COMPLETED


def test_update_missing_game(store):
    with pytest.raises(GameNotFoundError):
        GameService(store).update_game(99, {"venue": "Field 2"})


def test_delete_game(store):
    service = GameService(store)
    game = service.create_game(game_fields())

    service.delete_game(game.id)
    assert store.games == {}
    with pytest.raises(GameNotFoundError):
        service.delete_game(game.id)
    with pytest.raises(GameNotFoundError):
        service.get_game(game.id)


def test_listings(store):
    service = GameService(store)
    future = datetime.now() + timedelta(days=3)
    past = datetime.now() - timedelta(days=3)

    upcoming = service.create_game(game_fields(scheduled_at=future))
    finished = service.create_game(game_fields(3, 4, scheduled_at=past, status=GameStatus.COMPLETED))
    service.create_game(game_fields(1, 3, scheduled_at=past))
    other_sport = service.create_game(game_fields(scheduled_at=past, sport_id=2))

    assert [g.id for g in service.upcoming_games()] == [upcoming.id]
    assert [g.id for g in service.recent_games()] == [finished.id]
    assert [g.id for g in service.list_games()][0] == upcoming.id
    assert len(service.list_games()) == 4
    assert other_sport.id not in [g.id for g in service.list_games(sport_id=1)]
