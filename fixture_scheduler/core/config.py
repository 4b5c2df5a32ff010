"""
Configuration constants for the Fixture Scheduling Engine.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Redis connection URL for the Celery broker/backend
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Frontend origins allowed by the API
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

# Tournament formats
FORMAT_ROUND_ROBIN = "round_robin"
FORMAT_GROUP_KNOCKOUT = "group_knockout"

# Match timing defaults (minutes / hours)
DEFAULT_MATCH_DURATION_MINUTES = int(os.getenv("DEFAULT_MATCH_DURATION_MINUTES", "90"))
DEFAULT_BUFFER_MINUTES = int(os.getenv("DEFAULT_BUFFER_MINUTES", "15"))
DEFAULT_REST_PERIOD_HOURS = int(os.getenv("DEFAULT_REST_PERIOD_HOURS", "24"))

# Number of geographic groups when group_count is not set
DEFAULT_GROUP_COUNT = 4

# Grouping
UNKNOWN_COUNTY = "Unknown"
GROUPING_STRATEGY_GEOGRAPHIC = "geographic"

# Round robin
BYE_TEAM_ID = "bye"
BYE_TEAM_NAME = "BYE"
MAX_LEGS = 2

# Days of Week
NO_MATCHES_ON_SUNDAY = True

# Venue cost weights
LOCAL_VENUE_COST = 1        # venue in either team's county
DISTANT_VENUE_COST = 5      # venue outside both counties
PITCH_CAPACITY_BASELINE = 4  # cost += max(1, baseline - pitch_count)

# Geographic priority used to order matches before assignment
SAME_COUNTY_PRIORITY = 1
CROSS_COUNTY_PRIORITY = 2

# Solvers
SOLVER_GREEDY = "greedy"
SOLVER_CP_SAT = "cp_sat"
SOLVER_TIME_LIMIT_SECONDS = float(os.getenv("SOLVER_TIME_LIMIT_SECONDS", "30"))
SOLVER_NUM_WORKERS = int(os.getenv("SOLVER_NUM_WORKERS", "4"))

# API server and background worker
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", "8000"))
WORKER_CONCURRENCY = int(os.getenv("WORKER_CONCURRENCY", "2"))
TASK_SOFT_TIME_LIMIT_SECONDS = int(os.getenv("TASK_SOFT_TIME_LIMIT_SECONDS", "300"))
TASK_TIME_LIMIT_SECONDS = TASK_SOFT_TIME_LIMIT_SECONDS + 60
