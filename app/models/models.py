"""
Data models for the Intramural Scheduling Service.
Defines all data structures used throughout the application.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict, Union, Any
from enum import Enum


class Gender(Enum):
    MEN = "men"
    WOMEN = "women"
    COED = "co-ed"


class GameStatus(Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"


def parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as returned by the database."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class Team:
    id: int
    name: str
    sport_id: int
    division: Optional[str]
    gender: Gender = Gender.COED
    status: str = "active"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Team):
            return self.id == other.id
        return False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Team":
        return cls(
            id=row["id"],
            name=row.get("name", ""),
            sport_id=row["sport_id"],
            division=row.get("division"),
            gender=Gender(row.get("gender") or Gender.COED.value),
            status=row.get("status") or "active",
        )


class Bye:
    """Placeholder occupying a rotation slot when the team count is odd."""

    def __repr__(self):
        return "BYE"


BYE = Bye()

RotationSlot = Union[Team, Bye]


@dataclass(frozen=True)
class Matchup:
    home_team: Team
    away_team: Team

    def __str__(self):
        return f"{self.away_team.name} @ {self.home_team.name}"

    def team_ids(self) -> frozenset:
        return frozenset((self.home_team.id, self.away_team.id))


@dataclass
class GameRecord:
    """A game ready to be persisted (no identity yet)."""
    sport_id: int
    home_team_id: int
    away_team_id: int
    gender: Gender
    scheduled_at: datetime
    venue: str
    status: GameStatus = GameStatus.SCHEDULED

    def to_row(self) -> Dict[str, Any]:
        return {
            "sport_id": self.sport_id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "gender": self.gender.value,
            "scheduled_at": self.scheduled_at.isoformat(),
            "venue": self.venue,
            "status": self.status.value,
        }


@dataclass
class Game:
    id: int
    sport_id: int
    home_team_id: int
    away_team_id: int
    gender: Gender
    scheduled_at: datetime
    venue: Optional[str] = None
    status: GameStatus = GameStatus.SCHEDULED
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[int] = None
    notes: Optional[str] = None

    def __str__(self):
        return f"{self.away_team_id} @ {self.home_team_id} on {self.scheduled_at:%Y-%m-%d}"

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Game":
        return cls(
            id=row["id"],
            sport_id=row["sport_id"],
            home_team_id=row["home_team_id"],
            away_team_id=row["away_team_id"],
            gender=Gender(row.get("gender") or Gender.COED.value),
            scheduled_at=parse_datetime(row["scheduled_at"]),
            venue=row.get("venue"),
            status=GameStatus(row.get("status") or GameStatus.SCHEDULED.value),
            home_score=row.get("home_score"),
            away_score=row.get("away_score"),
            winner_id=row.get("winner_id"),
            notes=row.get("notes"),
        )


@dataclass
class ScheduleViolation:
    constraint_type: str
    severity: str
    description: str
    affected_team_ids: List[int] = field(default_factory=list)


@dataclass
class ScheduleValidationResult:
    is_valid: bool
    hard_constraint_violations: List[ScheduleViolation] = field(default_factory=list)
    soft_constraint_violations: List[ScheduleViolation] = field(default_factory=list)

    def add_violation(self, violation: ScheduleViolation):
        if violation.severity == 'hard':
            self.hard_constraint_violations.append(violation)
            self.is_valid = False
        else:
            self.soft_constraint_violations.append(violation)

    def get_summary(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "hard_violations": len(self.hard_constraint_violations),
            "soft_violations": len(self.soft_constraint_violations),
        }


@dataclass
class TeamScheduleStats:
    team_id: int
    total_games: int = 0
    home_games: int = 0
    away_games: int = 0
    opponents: List[int] = field(default_factory=list)

    def home_away_difference(self) -> int:
        return abs(self.home_games - self.away_games)


@dataclass
class ScheduleResult:
    """Outcome of one schedule generation."""
    message: str
    games: List[Game]
    validation: Optional[ScheduleValidationResult] = None
    records: List[GameRecord] = field(default_factory=list)
