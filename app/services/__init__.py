"""
Services for schedule generation, validation, and persistence.
"""

from .round_robin import generate_round_robin_schedule, generate_rounds
from .scheduler import ScheduleAssembler
from .validator import ScheduleValidator
from .games import GameService

__all__ = [
    "generate_round_robin_schedule",
    "generate_rounds",
    "ScheduleAssembler",
    "ScheduleValidator",
    "GameService"
]
