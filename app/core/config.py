"""
Configuration constants for the Intramural Scheduling Service.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Supabase Configuration
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", os.getenv("SUPABASE_ANON_KEY"))

# Table names
TABLE_TEAMS = "teams"
TABLE_GAMES = "games"

# Redis connection URL for Celery (default to localhost)
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Frontend origins allowed by CORS (comma separated)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Scheduling Rules
DEFAULT_VENUE = "TBD"
DAYS_PER_SCHEDULE_WEEK = 7

# Listing limits
UPCOMING_GAMES_LIMIT = 10
RECENT_GAMES_LIMIT = 10

# A team whose home and away counts differ by more than this is flagged
MAX_HOME_AWAY_DIFFERENCE = 1
