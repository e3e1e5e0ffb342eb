"""
Tests for the Supabase store's queries and row conversion.
"""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from app.models import Gender, GameRecord, GameStatus
from app.services.supabase_store import SupabaseStore


def fake_client(rows):
    query = MagicMock()
    for method in ("select", "eq", "gt", "order", "limit", "insert", "update", "delete"):
        getattr(query, method).return_value = query
    query.execute.return_value = SimpleNamespace(data=rows)

    client = MagicMock()
    client.table.return_value = query
    return client, query


GAME_ROW = {
    "id": 7,
    "sport_id": 1,
    "home_team_id": 1,
    "away_team_id": 2,
    "gender": "women",
    "scheduled_at": "2025-07-01T00:00:00+00:00",
    "venue": "TBD",
    "status": "scheduled",
    "home_score": None,
    "away_score": None,
    "winner_id": None,
    "notes": None,
}


def test_fetch_teams_filters_and_orders():
    client, query = fake_client([
        {"id": 3, "name": "Hawks", "sport_id": 1, "division": "competitive", "gender": "co-ed"},
    ])

    teams = SupabaseStore(client).fetch_teams(1, "competitive", Gender.COED)

    client.table.assert_called_with("teams")
    query.eq.assert_any_call("sport_id", 1)
    query.eq.assert_any_call("division", "competitive")
    query.eq.assert_any_call("gender", "co-ed")
    query.order.assert_called_with("id")
    assert teams[0].name == "Hawks"
    assert teams[0].gender == Gender.COED


def test_get_team_missing_returns_none():
    client, _ = fake_client([])
    assert SupabaseStore(client).get_team(5) is None


def test_bulk_insert_sends_one_request():
    client, query = fake_client([GAME_ROW])
    record = GameRecord(
        sport_id=1, home_team_id=1, away_team_id=2, gender=Gender.WOMEN,
        scheduled_at=datetime(2025, 7, 1), venue="TBD"
    )

    games = SupabaseStore(client).bulk_insert_games([record])

    query.insert.assert_called_once()
    rows = query.insert.call_args[0][0]
    assert rows == [{
        "sport_id": 1, "home_team_id": 1, "away_team_id": 2, "gender": "women",
        "scheduled_at": "2025-07-01T00:00:00", "venue": "TBD", "status": "scheduled",
    }]
    assert games[0].id == 7
    assert games[0].status == GameStatus.SCHEDULED
    assert games[0].scheduled_at.year == 2025


def test_bulk_insert_of_nothing_skips_request():
    client, query = fake_client([])
    assert SupabaseStore(client).bulk_insert_games([]) == []
    query.insert.assert_not_called()


def test_update_game_serializes_enums():
    client, query = fake_client([dict(GAME_ROW, status="completed", home_score=4)])

    game = SupabaseStore(client).update_game(7, {"status": GameStatus.COMPLETED, "home_score": 4})

    values = query.update.call_args[0][0]
    assert values["status"] == "completed"
    assert "updated_at" in values
    assert game.home_score == 4


def test_delete_missing_game_returns_false():
    client, _ = fake_client([])
    assert SupabaseStore(client).delete_game(7) is False


def test_missing_credentials(monkeypatch):
    from app.services import supabase_store
    monkeypatch.setattr(supabase_store, "SUPABASE_URL", None)

    with pytest.raises(ValueError, match="Supabase credentials not found"):
        SupabaseStore()
