"""
Single-game operations with team compatibility checks.
"""

from typing import Any, Dict, List, Optional

from app.models import Game, GameStatus
from app.core.exceptions import GameNotFoundError, InvalidScheduleRequestError
from app.core.logging_config import get_logger
from app.services.validator import ScheduleValidator

logger = get_logger(__name__)

# Columns every stored game must keep a value for
REQUIRED_GAME_FIELDS = ('sport_id', 'home_team_id', 'away_team_id', 'gender', 'scheduled_at', 'status')


class GameService:
    def __init__(self, store, validator: Optional[ScheduleValidator] = None):
        self.store = store
        self.validator = validator or ScheduleValidator()

    def create_game(self, fields: Dict[str, Any]) -> Game:
        """Create one game after checking both teams can meet."""
        self.validator.validate_game_teams(self.store, fields['home_team_id'], fields['away_team_id'])

        fields = dict(fields)
        fields.setdefault('status', GameStatus.SCHEDULED)
        game = self.store.create_game(fields)
        logger.info("Created game %s: %s", game.id, game)
        return game

    def update_game(self, game_id: int, fields: Dict[str, Any]) -> Game:
        """
        Apply a partial update. Teams are re-checked only when the update
        names both of them.
        """
        cleared = [name for name in REQUIRED_GAME_FIELDS if name in fields and fields[name] is None]
        if cleared:
            raise InvalidScheduleRequestError(f"{', '.join(cleared)} cannot be null")

        if fields.get('home_team_id') is not None and fields.get('away_team_id') is not None:
            self.validator.validate_game_teams(self.store, fields['home_team_id'], fields['away_team_id'])

        game = self.store.update_game(game_id, fields)
        if game is None:
            raise GameNotFoundError(game_id)
        logger.info("Updated game %s (%s)", game_id, ", ".join(sorted(fields)))
        return game

    def delete_game(self, game_id: int):
        if not self.store.delete_game(game_id):
            raise GameNotFoundError(game_id)
        logger.info("Deleted game %s", game_id)

    def get_game(self, game_id: int) -> Game:
        game = self.store.get_game(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def list_games(self, sport_id: Optional[int] = None) -> List[Game]:
        if sport_id is not None:
            return self.store.get_games_by_sport(sport_id)
        return self.store.get_games()

    def upcoming_games(self) -> List[Game]:
        return self.store.get_upcoming_games()

    def recent_games(self) -> List[Game]:
        return self.store.get_recent_games()
