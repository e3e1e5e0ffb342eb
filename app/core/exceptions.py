"""
Error types raised by the scheduling core.
Routes translate them into HTTP responses.
"""


class SchedulingError(Exception):
    """Base class for recoverable scheduling errors."""

    reason = "scheduling_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message, "reason": self.reason}


class ScheduleValidationError(SchedulingError):
    """Input was rejected; surfaced to the caller as a 400."""

    reason = "validation_error"


class InvalidScheduleRequestError(ScheduleValidationError):
    reason = "invalid_request"


class NotEnoughTeamsError(ScheduleValidationError):
    reason = "not_enough_teams"

    def __init__(self, sport_id: int, division: str, team_count: int):
        super().__init__(
            f"Not enough teams in division '{division}' for sport {sport_id} "
            f"to generate a schedule (found {team_count}, need at least 2)"
        )
        self.sport_id = sport_id
        self.division = division
        self.team_count = team_count


class TeamCompatibilityError(ScheduleValidationError):
    """Two teams cannot be paired in a game."""

    reason = "incompatible_teams"


class TeamsNotFoundError(TeamCompatibilityError):
    reason = "teams_not_found"

    def __init__(self, message: str = "One or both teams not found"):
        super().__init__(message)


class DivisionMismatchError(TeamCompatibilityError):
    reason = "division_mismatch"

    def __init__(self, message: str = "Teams must be in the same division to play each other"):
        super().__init__(message)


class GenderMismatchError(TeamCompatibilityError):
    reason = "gender_mismatch"

    def __init__(self, message: str = "Teams must have the same gender category to play each other"):
        super().__init__(message)


class SportMismatchError(TeamCompatibilityError):
    reason = "sport_mismatch"

    def __init__(self, message: str = "Teams must be in the same sport to play each other"):
        super().__init__(message)


class SameTeamError(TeamCompatibilityError):
    reason = "same_team"

    def __init__(self, message: str = "A team cannot play against itself"):
        super().__init__(message)


class GameNotFoundError(SchedulingError):
    reason = "game_not_found"

    def __init__(self, game_id: int):
        super().__init__(f"Game {game_id} not found")
        self.game_id = game_id


class ScheduleGenerationInProgressError(SchedulingError):
    reason = "generation_in_progress"

    def __init__(self, sport_id: int, division: str):
        super().__init__(
            f"A schedule is already being generated for division '{division}' of sport {sport_id}"
        )
        self.sport_id = sport_id
        self.division = division
