"""
Celery tasks for schedule generation.
"""

from typing import Optional

from app.core.celery_app import celery_app
from app.core.exceptions import SchedulingError
from app.core.logging_config import get_logger
from app.models import Gender, parse_datetime
from app.services.scheduler import ScheduleAssembler
from app.services.supabase_store import SupabaseStore

logger = get_logger(__name__)


def game_to_dict(game) -> dict:
    return {
        "id": game.id,
        "sport_id": game.sport_id,
        "home_team_id": game.home_team_id,
        "away_team_id": game.away_team_id,
        "gender": game.gender.value,
        "scheduled_at": game.scheduled_at.isoformat(),
        "venue": game.venue,
        "status": game.status.value,
        "home_score": game.home_score,
        "away_score": game.away_score,
        "winner_id": game.winner_id,
        "notes": game.notes,
    }


@celery_app.task(bind=True, name="generate_schedule")
def generate_schedule_task(
    self,
    sport_id: int,
    division: str,
    start_date: str,
    games_per_week: int,
    venue: Optional[str] = None,
    gender: Optional[str] = None
):
    """
    Async task to generate a division's round-robin schedule.

    Args:
        start_date: ISO-8601 date-time of the first week
        gender: Optional gender category value ("men", "women", "co-ed")

    Returns:
        dict: Generated games and validation summary, or the failure reason
    """
    self.update_state(
        state="PROGRESS",
        meta={"status": f"Generating schedule for division '{division}'..."}
    )

    assembler = ScheduleAssembler(SupabaseStore())
    try:
        result = assembler.generate_schedule(
            sport_id=sport_id,
            division=division,
            start_date=parse_datetime(start_date),
            games_per_week=games_per_week,
            venue=venue,
            gender=Gender(gender) if gender else None
        )
    except SchedulingError as e:
        logger.warning("Schedule generation rejected: %s", e.message)
        return {
            "success": False,
            "message": e.message,
            "reason": e.reason
        }

    return {
        "success": True,
        "message": result.message,
        "total_games": len(result.games),
        "games": [game_to_dict(game) for game in result.games],
        "validation": result.validation.get_summary() if result.validation else None
    }
