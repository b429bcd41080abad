import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./valet_booking.db")

# All routers are mounted under this prefix
API_PREFIX = os.getenv("API_PREFIX", "/api")

# CORS Configuration
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")

# Booking rules
# Used when a rota day has no capacity configured (null or 0)
DEFAULT_DAILY_CAPACITY = int(os.getenv("DEFAULT_DAILY_CAPACITY", "3"))
BOOKING_LIST_LIMIT = int(os.getenv("BOOKING_LIST_LIMIT", "100"))
