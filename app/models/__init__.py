"""
Data models for the scheduling system.
"""

from .models import (
    Gender,
    GameStatus,
    Team,
    Bye,
    BYE,
    RotationSlot,
    Matchup,
    GameRecord,
    Game,
    ScheduleViolation,
    ScheduleValidationResult,
    TeamScheduleStats,
    ScheduleResult,
    parse_datetime
)

__all__ = [
    "Gender",
    "GameStatus",
    "Team",
    "Bye",
    "BYE",
    "RotationSlot",
    "Matchup",
    "GameRecord",
    "Game",
    "ScheduleViolation",
    "ScheduleValidationResult",
    "TeamScheduleStats",
    "ScheduleResult",
    "parse_datetime"
]
