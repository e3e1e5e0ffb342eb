"""
API routes for schedule generation and game management.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from typing import List, Dict, Any, Optional
from datetime import datetime
from celery.result import AsyncResult

from app.models import Game, Gender, GameStatus
from app.services.scheduler import ScheduleAssembler
from app.services.games import GameService
from app.services.supabase_store import SupabaseStore
from app.core.exceptions import (
    SchedulingError, ScheduleValidationError, GameNotFoundError,
    ScheduleGenerationInProgressError
)
from app.core.celery_app import celery_app
from app.core.logging_config import get_logger
from app.tasks.scheduler_tasks import generate_schedule_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["schedule"])

_store = None


def get_store():
    """Shared Supabase store, created on first use."""
    global _store
    if _store is None:
        _store = SupabaseStore()
    return _store


class GenerateScheduleRequest(BaseModel):
    """Request model for schedule generation."""
    sport_id: int = Field(..., ge=1)
    division: str = Field(..., min_length=1)
    start_date: datetime
    games_per_week: int = Field(..., ge=1)
    venue: Optional[str] = None
    gender: Optional[Gender] = None


class GameCreateRequest(BaseModel):
    """Request model for creating a single game."""
    sport_id: int
    home_team_id: int
    away_team_id: int
    gender: Gender = Gender.COED
    scheduled_at: datetime
    venue: Optional[str] = None
    status: GameStatus = GameStatus.SCHEDULED
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[int] = None
    notes: Optional[str] = None


class GameUpdateRequest(BaseModel):
    """Partial update; only the fields sent are changed."""
    sport_id: Optional[int] = None
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    gender: Optional[Gender] = None
    scheduled_at: Optional[datetime] = None
    venue: Optional[str] = None
    status: Optional[GameStatus] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("sport_id", "home_team_id", "away_team_id", "gender", "scheduled_at", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class GameResponse(BaseModel):
    """Response model for a single game."""
    id: int
    sport_id: int
    home_team_id: int
    away_team_id: int
    gender: str
    scheduled_at: datetime
    venue: Optional[str] = None
    status: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[int] = None
    notes: Optional[str] = None

    @classmethod
    def from_game(cls, game: Game) -> "GameResponse":
        return cls(
            id=game.id,
            sport_id=game.sport_id,
            home_team_id=game.home_team_id,
            away_team_id=game.away_team_id,
            gender=game.gender.value,
            scheduled_at=game.scheduled_at,
            venue=game.venue,
            status=game.status.value,
            home_score=game.home_score,
            away_score=game.away_score,
            winner_id=game.winner_id,
            notes=game.notes
        )


class ScheduleResponse(BaseModel):
    """Response model for schedule generation."""
    message: str
    total_games: int
    games: List[GameResponse]
    validation: Optional[Dict[str, Any]] = None


def raise_http_error(error: SchedulingError):
    """Translate a scheduling error into the matching HTTP status."""
    if isinstance(error, ScheduleValidationError):
        status_code = 400
    elif isinstance(error, GameNotFoundError):
        status_code = 404
    elif isinstance(error, ScheduleGenerationInProgressError):
        status_code = 409
    else:
        status_code = 500
    raise HTTPException(status_code=status_code, detail=error.to_dict())


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.post("/schedule/generate", response_model=ScheduleResponse)
def generate_schedule(request: GenerateScheduleRequest, store=Depends(get_store)):
    """
    Generate a round-robin season for one division.

    Every team in the division plays every other team once. Games are
    spread games_per_week to a week starting at start_date.
    """
    assembler = ScheduleAssembler(store)
    try:
        result = assembler.generate_schedule(
            sport_id=request.sport_id,
            division=request.division,
            start_date=request.start_date,
            games_per_week=request.games_per_week,
            venue=request.venue,
            gender=request.gender
        )
    except SchedulingError as e:
        raise_http_error(e)
    except Exception as e:
        logger.exception("Schedule generation failed")
        raise HTTPException(status_code=500, detail=f"Failed to generate schedule: {str(e)}")

    return ScheduleResponse(
        message=result.message,
        total_games=len(result.games),
        games=[GameResponse.from_game(game) for game in result.games],
        validation=result.validation.get_summary() if result.validation else None
    )


@router.post("/schedule/generate/async")
async def generate_schedule_async(request: GenerateScheduleRequest):
    """
    Start async schedule generation task.

    Returns:
        dict: Task ID for polling status
    """
    try:
        task = generate_schedule_task.delay(
            sport_id=request.sport_id,
            division=request.division,
            start_date=request.start_date.isoformat(),
            games_per_week=request.games_per_week,
            venue=request.venue,
            gender=request.gender.value if request.gender else None
        )
    except Exception as e:
        logger.exception("Failed to enqueue schedule generation")
        raise HTTPException(status_code=500, detail=f"Failed to start task: {str(e)}")

    return {
        "task_id": task.id,
        "status": "PENDING",
        "message": "Schedule generation started"
    }


@router.get("/schedule/status/{task_id}")
async def get_schedule_status(task_id: str):
    """
    Get status of async schedule generation task.

    Args:
        task_id: Celery task ID
    """
    try:
        task_result = AsyncResult(task_id, app=celery_app)

        if task_result.state == "PENDING":
            return {
                "task_id": task_id,
                "status": "PENDING",
                "message": "Task is waiting to start..."
            }
        if task_result.state == "PROGRESS":
            return {
                "task_id": task_id,
                "status": "PROGRESS",
                "message": task_result.info.get("status", "Processing...")
            }
        if task_result.state == "SUCCESS":
            return {
                "task_id": task_id,
                "status": "SUCCESS",
                "result": task_result.result
            }
        if task_result.state == "FAILURE":
            return {
                "task_id": task_id,
                "status": "FAILURE",
                "message": str(task_result.info)
            }
        return {
            "task_id": task_id,
            "status": task_result.state,
            "message": f"Task state: {task_result.state}"
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {str(e)}")


@router.get("/games", response_model=List[GameResponse])
def list_games(sport_id: Optional[int] = None, store=Depends(get_store)):
    try:
        games = GameService(store).list_games(sport_id)
    except Exception as e:
        logger.exception("Error fetching games")
        raise HTTPException(status_code=500, detail=f"Failed to fetch games: {str(e)}")
    return [GameResponse.from_game(game) for game in games]


@router.get("/games/upcoming", response_model=List[GameResponse])
def upcoming_games(store=Depends(get_store)):
    try:
        games = GameService(store).upcoming_games()
    except Exception as e:
        logger.exception("Error fetching upcoming games")
        raise HTTPException(status_code=500, detail=f"Failed to fetch upcoming games: {str(e)}")
    return [GameResponse.from_game(game) for game in games]


@router.get("/games/recent", response_model=List[GameResponse])
def recent_games(store=Depends(get_store)):
    try:
        games = GameService(store).recent_games()
    except Exception as e:
        logger.exception("Error fetching recent games")
        raise HTTPException(status_code=500, detail=f"Failed to fetch recent games: {str(e)}")
    return [GameResponse.from_game(game) for game in games]


@router.get("/games/sport/{sport_id}", response_model=List[GameResponse])
def games_by_sport(sport_id: int, store=Depends(get_store)):
    return list_games(sport_id=sport_id, store=store)


@router.get("/games/{game_id}", response_model=GameResponse)
def get_game(game_id: int, store=Depends(get_store)):
    try:
        game = GameService(store).get_game(game_id)
    except SchedulingError as e:
        raise_http_error(e)
    except Exception as e:
        logger.exception("Error fetching game")
        raise HTTPException(status_code=500, detail=f"Failed to fetch game: {str(e)}")
    return GameResponse.from_game(game)


@router.post("/games", response_model=GameResponse)
def create_game(request: GameCreateRequest, store=Depends(get_store)):
    """Create a single game. Both teams must share division, gender and sport."""
    try:
        game = GameService(store).create_game(request.model_dump())
    except SchedulingError as e:
        raise_http_error(e)
    except Exception as e:
        logger.exception("Error creating game")
        raise HTTPException(status_code=500, detail=f"Failed to create game: {str(e)}")
    return GameResponse.from_game(game)


@router.put("/games/{game_id}", response_model=GameResponse)
def update_game(game_id: int, request: GameUpdateRequest, store=Depends(get_store)):
    """Update a game. Teams are re-checked when both team ids are sent."""
    try:
        game = GameService(store).update_game(game_id, request.model_dump(exclude_unset=True))
    except SchedulingError as e:
        raise_http_error(e)
    except Exception as e:
        logger.exception("Error updating game")
        raise HTTPException(status_code=500, detail=f"Failed to update game: {str(e)}")
    return GameResponse.from_game(game)


@router.delete("/games/{game_id}")
def delete_game(game_id: int, store=Depends(get_store)):
    try:
        GameService(store).delete_game(game_id)
    except SchedulingError as e:
        raise_http_error(e)
    except Exception as e:
        logger.exception("Error deleting game")
        raise HTTPException(status_code=500, detail=f"Failed to delete game: {str(e)}")
    return {"message": "Game deleted successfully"}
