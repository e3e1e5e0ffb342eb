"""
Game validation for the Intramural Scheduling Service.
Checks that paired teams are compatible and reports on whole schedules.
"""

from typing import List, Dict, Optional, Tuple, Iterable
from collections import Counter

from app.models import (
    Team, Game, Matchup, ScheduleViolation,
    ScheduleValidationResult, TeamScheduleStats
)
from app.core.config import MAX_HOME_AWAY_DIFFERENCE
from app.core.exceptions import (
    TeamsNotFoundError, DivisionMismatchError, GenderMismatchError,
    SportMismatchError, SameTeamError
)
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class ScheduleValidator:
    """
    Validates games against the pairing rules.
    Two teams may only meet if they share a division, a gender category
    and a sport.
    """

    def check_teams(self, home_team: Optional[Team], away_team: Optional[Team]) -> Tuple[Team, Team]:
        """
        Confirm two teams can play each other.

        Raises:
            TeamsNotFoundError: either team is missing
            SameTeamError: both sides are the same team
            DivisionMismatchError, GenderMismatchError, SportMismatchError:
                the teams belong to different groups (checked in that order)
        """
        if home_team is None or away_team is None:
            raise TeamsNotFoundError()

        if home_team.id == away_team.id:
            raise SameTeamError()

        if home_team.division != away_team.division:
            raise DivisionMismatchError()

        if home_team.gender != away_team.gender:
            raise GenderMismatchError()

        if home_team.sport_id != away_team.sport_id:
            raise SportMismatchError()

        return home_team, away_team

    def validate_game_teams(self, store, home_team_id: int, away_team_id: int) -> Tuple[Team, Team]:
        """Look both teams up in the store and check they can be paired."""
        home_team = store.get_team(home_team_id)
        away_team = store.get_team(away_team_id)
        return self.check_teams(home_team, away_team)

    def check_matchups(self, matchups: Iterable[Matchup]):
        """
        Post-condition for generated schedules: every pairing must pass
        check_teams. Raises on the first bad pairing.
        """
        for matchup in matchups:
            try:
                self.check_teams(matchup.home_team, matchup.away_team)
            except Exception:
                logger.error("Generated matchup failed compatibility check: %s", matchup)
                raise

    def validate_schedule(self, games: List[Game], teams: List[Team]) -> ScheduleValidationResult:
        """
        Validate a generated schedule as a whole.

        Args:
            games: Games of one division's schedule
            teams: Teams the schedule was built for

        Returns:
            ScheduleValidationResult with all violations found
        """
        result = ScheduleValidationResult(is_valid=True)
        teams_by_id = {team.id: team for team in teams}

        self._check_self_play(games, result)
        self._check_unknown_teams(games, teams_by_id, result)
        self._check_duplicate_matchups(games, result)
        self._check_missing_matchups(games, teams, result)
        self._check_home_away_balance(games, teams, result)

        logger.info(
            "Validated %d games: valid=%s, %d hard / %d soft violations",
            len(games), result.is_valid,
            len(result.hard_constraint_violations),
            len(result.soft_constraint_violations)
        )
        return result

    def _check_self_play(self, games: List[Game], result: ScheduleValidationResult):
        for game in games:
            if game.home_team_id == game.away_team_id:
                result.add_violation(ScheduleViolation(
                    constraint_type="self_play",
                    severity="hard",
                    description=f"Team {game.home_team_id} is scheduled against itself",
                    affected_team_ids=[game.home_team_id]
                ))

    def _check_unknown_teams(self, games: List[Game], teams_by_id: Dict[int, Team],
                             result: ScheduleValidationResult):
        """Every game must involve teams of the schedule's group."""
        for game in games:
            for team_id in (game.home_team_id, game.away_team_id):
                if team_id not in teams_by_id:
                    result.add_violation(ScheduleViolation(
                        constraint_type="team_outside_group",
                        severity="hard",
                        description=f"Game {game.id} involves team {team_id} from outside the division",
                        affected_team_ids=[team_id]
                    ))

    def _check_duplicate_matchups(self, games: List[Game], result: ScheduleValidationResult):
        pair_counts = Counter(
            frozenset((game.home_team_id, game.away_team_id)) for game in games
        )
        for pair, count in pair_counts.items():
            if count > 1:
                result.add_violation(ScheduleViolation(
                    constraint_type="duplicate_matchup",
                    severity="hard",
                    description=f"Teams {sorted(pair)} meet {count} times",
                    affected_team_ids=sorted(pair)
                ))

    def _check_missing_matchups(self, games: List[Game], teams: List[Team],
                                result: ScheduleValidationResult):
        played = {frozenset((game.home_team_id, game.away_team_id)) for game in games}
        for i, team in enumerate(teams):
            for other in teams[i + 1:]:
                if frozenset((team.id, other.id)) not in played:
                    result.add_violation(ScheduleViolation(
                        constraint_type="missing_matchup",
                        severity="hard",
                        description=f"Teams {team.id} and {other.id} never meet",
                        affected_team_ids=[team.id, other.id]
                    ))

    def _check_home_away_balance(self, games: List[Game], teams: List[Team],
                                 result: ScheduleValidationResult):
        for stats in self.get_team_stats(games, teams).values():
            if stats.home_away_difference() > MAX_HOME_AWAY_DIFFERENCE:
                result.add_violation(ScheduleViolation(
                    constraint_type="home_away_imbalance",
                    severity="soft",
                    description=(
                        f"Team {stats.team_id} has {stats.home_games} home and "
                        f"{stats.away_games} away games"
                    ),
                    affected_team_ids=[stats.team_id]
                ))

    def get_team_stats(self, games: List[Game], teams: List[Team]) -> Dict[int, TeamScheduleStats]:
        """Per-team game, home and away counts."""
        stats = {team.id: TeamScheduleStats(team_id=team.id) for team in teams}

        for game in games:
            home = stats.get(game.home_team_id)
            away = stats.get(game.away_team_id)
            if home:
                home.total_games += 1
                home.home_games += 1
                home.opponents.append(game.away_team_id)
            if away:
                away.total_games += 1
                away.away_games += 1
                away.opponents.append(game.home_team_id)

        return stats
