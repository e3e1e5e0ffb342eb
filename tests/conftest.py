"""
Shared pytest fixtures for the scheduling service tests.

Running tests:
    pytest tests/
"""
import dataclasses
import sys
import os
from datetime import datetime

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.models import Team, Game, Gender, GameStatus


class InMemoryStore:
    """Stands in for SupabaseStore; same methods, dict-backed."""

    def __init__(self, teams=None):
        self.teams = {team.id: team for team in teams or []}
        self.games = {}
        self.bulk_insert_calls = 0
        self.fail_bulk_insert = False
        self.on_fetch_teams = None
        self._next_game_id = 1

    def add_teams(self, *teams):
        for team in teams:
            self.teams[team.id] = team

    def fetch_teams(self, sport_id, division, gender=None):
        if self.on_fetch_teams:
            self.on_fetch_teams()
        return sorted(
            (team for team in self.teams.values()
             if team.sport_id == sport_id
             and team.division == division
             and (gender is None or team.gender == gender)),
            key=lambda team: team.id
        )

    def get_team(self, team_id):
        return self.teams.get(team_id)

    def _save(self, fields):
        game = Game(id=self._next_game_id, **fields)
        self.games[game.id] = game
        self._next_game_id += 1
        return game

    def bulk_insert_games(self, records):
        self.bulk_insert_calls += 1
        if self.fail_bulk_insert:
            raise RuntimeError("database unavailable")
        return [self._save(dataclasses.asdict(record)) for record in records]

    def create_game(self, fields):
        return self._save(fields)

    def update_game(self, game_id, fields):
        game = self.games.get(game_id)
        if game is None:
            return None
        game = dataclasses.replace(game, **fields)
        self.games[game_id] = game
        return game

    def delete_game(self, game_id):
        return self.games.pop(game_id, None) is not None

    def get_game(self, game_id):
        return self.games.get(game_id)

    def get_games(self):
        return sorted(self.games.values(), key=lambda g: g.scheduled_at, reverse=True)

    def get_games_by_sport(self, sport_id):
        return [game for game in self.get_games() if game.sport_id == sport_id]

    def get_upcoming_games(self, limit=10):
        now = datetime.now()
        games = [
            game for game in self.games.values()
            if game.status == GameStatus.SCHEDULED and game.scheduled_at > now
        ]
        return sorted(games, key=lambda g: g.scheduled_at)[:limit]

    def get_recent_games(self, limit=10):
        games = [game for game in self.games.values() if game.status == GameStatus.COMPLETED]
        return sorted(games, key=lambda g: g.scheduled_at, reverse=True)[:limit]


def make_team(team_id, name=None, division="recreational", gender=Gender.MEN, sport_id=1):
    return Team(
        id=team_id,
        name=name or f"Team {team_id}",
        sport_id=sport_id,
        division=division,
        gender=gender
    )


@pytest.fixture
def four_teams():
    return [make_team(i, name) for i, name in enumerate("ABCD", start=1)]


@pytest.fixture
def store(four_teams):
    """Store holding four men's recreational teams of sport 1."""
    return InMemoryStore(four_teams)


@pytest.fixture
def mismatched_teams():
    """Teams that each differ from the four_teams group in one way."""
    return {
        "division": make_team(10, "Competitive Men", division="competitive"),
        "gender": make_team(11, "Rec Women", gender=Gender.WOMEN),
        "sport": make_team(12, "Rec Men Soccer", sport_id=2),
    }


@pytest.fixture
def client(store):
    """Test client whose routes use the in-memory store."""
    from fastapi.testclient import TestClient
    from app.main import app
    from app.api.routes import get_store

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
