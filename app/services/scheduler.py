"""
Season schedule assembly.
Turns a division's round-robin matchups into dated, persistable games.
"""

import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import List, Optional, Set, Tuple

from app.models import Gender, GameRecord, GameStatus, Matchup, ScheduleResult
from app.core.config import DEFAULT_VENUE, DAYS_PER_SCHEDULE_WEEK
from app.core.exceptions import (
    InvalidScheduleRequestError, NotEnoughTeamsError,
    ScheduleGenerationInProgressError
)
from app.core.logging_config import get_logger
from app.services.round_robin import generate_round_robin_schedule
from app.services.validator import ScheduleValidator

logger = get_logger(__name__)

# Divisions currently being generated in this process
_active_generations: Set[Tuple] = set()
_active_generations_lock = threading.Lock()


@contextmanager
def _generation_guard(sport_id: int, division: str):
    # Gender-filtered and unfiltered runs overlap, so the key ignores gender
    key = (sport_id, division)
    with _active_generations_lock:
        if key in _active_generations:
            raise ScheduleGenerationInProgressError(sport_id, division)
        _active_generations.add(key)
    try:
        yield
    finally:
        with _active_generations_lock:
            _active_generations.discard(key)


def assign_game_dates(matchups: List[Matchup], start_date: datetime, games_per_week: int) -> List[datetime]:
    """
    Give each matchup a date, games_per_week matchups per week.

    The first games_per_week matchups fall on start_date, the next batch a
    week later, and so on.
    """
    dates = []
    current_date = start_date
    for i in range(len(matchups)):
        if i > 0 and i % games_per_week == 0:
            current_date += timedelta(days=DAYS_PER_SCHEDULE_WEEK)
        dates.append(current_date)
    return dates


def build_game_records(
    matchups: List[Matchup],
    sport_id: int,
    gender: Gender,
    start_date: datetime,
    games_per_week: int,
    venue: Optional[str] = None
) -> List[GameRecord]:
    """Convert matchups into game records ready for a bulk insert."""
    venue = venue or DEFAULT_VENUE
    dates = assign_game_dates(matchups, start_date, games_per_week)

    return [
        GameRecord(
            sport_id=sport_id,
            home_team_id=matchup.home_team.id,
            away_team_id=matchup.away_team.id,
            gender=gender,
            scheduled_at=scheduled_at,
            venue=venue,
            status=GameStatus.SCHEDULED
        )
        for matchup, scheduled_at in zip(matchups, dates)
    ]


class ScheduleAssembler:
    """
    Generates and stores a full round-robin season for one division.

    The store must provide fetch_teams(sport_id, division, gender) and
    bulk_insert_games(records).
    """

    def __init__(self, store, validator: Optional[ScheduleValidator] = None):
        self.store = store
        self.validator = validator or ScheduleValidator()

    def generate_schedule(
        self,
        sport_id: int,
        division: str,
        start_date: datetime,
        games_per_week: int,
        venue: Optional[str] = None,
        gender: Optional[Gender] = None,
        dry_run: bool = False
    ) -> ScheduleResult:
        """
        Generate, store and return the season for a division.

        Args:
            sport_id: Sport the division belongs to
            division: Division name (e.g. "recreational")
            start_date: Date of the first week of games
            games_per_week: How many games go in each weekly bucket
            venue: Venue for every game, "TBD" when omitted
            gender: Only schedule teams of this gender category
            dry_run: Build the games without writing them

        Raises:
            InvalidScheduleRequestError: a required argument is missing or invalid
            NotEnoughTeamsError: fewer than two teams in the division
            TeamCompatibilityError: teams of the division cannot all be paired
            ScheduleGenerationInProgressError: this division is already being generated
        """
        self._check_request(sport_id, division, start_date, games_per_week)

        with _generation_guard(sport_id, division):
            teams = self.store.fetch_teams(sport_id, division, gender)
            if len(teams) < 2:
                raise NotEnoughTeamsError(sport_id, division, len(teams))

            matchups = generate_round_robin_schedule(teams)
            self.validator.check_matchups(matchups)

            # Teams of a division are homogeneous, the first one speaks for all
            records = build_game_records(
                matchups,
                sport_id=sport_id,
                gender=teams[0].gender,
                start_date=start_date,
                games_per_week=games_per_week,
                venue=venue
            )

            logger.info(
                "Generated %d games for %d teams in sport %s division '%s'",
                len(records), len(teams), sport_id, division
            )

            if dry_run:
                return ScheduleResult(
                    message=f"Dry run: {len(records)} games would be scheduled",
                    games=[],
                    records=records
                )

            games = self.store.bulk_insert_games(records)

        validation = self.validator.validate_schedule(games, teams)
        return ScheduleResult(
            message=f"Successfully generated {len(games)} games",
            games=games,
            validation=validation
        )

    def _check_request(self, sport_id, division, start_date, games_per_week):
        if not sport_id:
            raise InvalidScheduleRequestError("sport_id is required")
        if not division:
            raise InvalidScheduleRequestError("division is required")
        if not isinstance(start_date, datetime):
            raise InvalidScheduleRequestError("start_date must be a date-time")
        if not isinstance(games_per_week, int) or isinstance(games_per_week, bool) or games_per_week < 1:
            raise InvalidScheduleRequestError("games_per_week must be a positive integer")
