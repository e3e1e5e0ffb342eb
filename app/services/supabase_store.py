"""
Supabase persistence for teams and games.
"""

from datetime import datetime, timezone
from typing import List, Dict, Optional, Any
from supabase import create_client, Client

from app.models import Team, Game, GameRecord, Gender, GameStatus
from app.core.config import (
    SUPABASE_URL, SUPABASE_KEY, TABLE_TEAMS, TABLE_GAMES,
    UPCOMING_GAMES_LIMIT, RECENT_GAMES_LIMIT
)
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class SupabaseStore:
    def __init__(self, client: Optional[Client] = None):
        if client is None:
            if not SUPABASE_URL or not SUPABASE_KEY:
                raise ValueError(
                    "Supabase credentials not found. Please set:\n"
                    "  - SUPABASE_URL: project URL\n"
                    "  - SUPABASE_KEY: service or anon key"
                )
            client = create_client(SUPABASE_URL, SUPABASE_KEY)
        self.client: Client = client

    # Teams

    def fetch_teams(self, sport_id: int, division: str, gender: Optional[Gender] = None) -> List[Team]:
        """Teams of one sport and division, ordered by id."""
        query = (
            self.client.table(TABLE_TEAMS)
            .select('*')
            .eq('sport_id', sport_id)
            .eq('division', division)
        )
        if gender is not None:
            query = query.eq('gender', gender.value)

        response = query.order('id').execute()
        teams = [Team.from_row(row) for row in response.data]
        logger.info("Loaded %d teams for sport %s division '%s'", len(teams), sport_id, division)
        return teams

    def get_team(self, team_id: int) -> Optional[Team]:
        response = self.client.table(TABLE_TEAMS).select('*').eq('id', team_id).execute()
        if not response.data:
            return None
        return Team.from_row(response.data[0])

    # Games

    def bulk_insert_games(self, records: List[GameRecord]) -> List[Game]:
        """Insert all records in one request; PostgREST runs it as a single statement."""
        if not records:
            return []
        rows = [record.to_row() for record in records]
        response = self.client.table(TABLE_GAMES).insert(rows).execute()
        games = [Game.from_row(row) for row in response.data]
        logger.info("Inserted %d games", len(games))
        return games

    def create_game(self, fields: Dict[str, Any]) -> Game:
        response = self.client.table(TABLE_GAMES).insert(_serialize(fields)).execute()
        return Game.from_row(response.data[0])

    def update_game(self, game_id: int, fields: Dict[str, Any]) -> Optional[Game]:
        values = _serialize(fields)
        values['updated_at'] = datetime.now(timezone.utc).isoformat()
        response = self.client.table(TABLE_GAMES).update(values).eq('id', game_id).execute()
        if not response.data:
            return None
        return Game.from_row(response.data[0])

    def delete_game(self, game_id: int) -> bool:
        response = self.client.table(TABLE_GAMES).delete().eq('id', game_id).execute()
        return bool(response.data)

    def get_game(self, game_id: int) -> Optional[Game]:
        response = self.client.table(TABLE_GAMES).select('*').eq('id', game_id).execute()
        if not response.data:
            return None
        return Game.from_row(response.data[0])

    def get_games(self) -> List[Game]:
        response = (
            self.client.table(TABLE_GAMES)
            .select('*')
            .order('scheduled_at', desc=True)
            .execute()
        )
        return [Game.from_row(row) for row in response.data]

    def get_games_by_sport(self, sport_id: int) -> List[Game]:
        response = (
            self.client.table(TABLE_GAMES)
            .select('*')
            .eq('sport_id', sport_id)
            .order('scheduled_at', desc=True)
            .execute()
        )
        return [Game.from_row(row) for row in response.data]

    def get_upcoming_games(self, limit: int = UPCOMING_GAMES_LIMIT) -> List[Game]:
        now = datetime.now(timezone.utc).isoformat()
        response = (
            self.client.table(TABLE_GAMES)
            .select('*')
            .eq('status', GameStatus.SCHEDULED.value)
            .gt('scheduled_at', now)
            .order('scheduled_at')
            .limit(limit)
            .execute()
        )
        return [Game.from_row(row) for row in response.data]

    def get_recent_games(self, limit: int = RECENT_GAMES_LIMIT) -> List[Game]:
        response = (
            self.client.table(TABLE_GAMES)
            .select('*')
            .eq('status', GameStatus.COMPLETED.value)
            .order('scheduled_at', desc=True)
            .limit(limit)
            .execute()
        )
        return [Game.from_row(row) for row in response.data]


def _serialize(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Convert enums and datetimes into JSON-friendly column values."""
    values = {}
    for key, value in fields.items():
        if isinstance(value, (Gender, GameStatus)):
            value = value.value
        elif isinstance(value, datetime):
            value = value.isoformat()
        values[key] = value
    return values
