"""
Runtime configuration read from environment variables.
"""
import os

from dotenv import load_dotenv

load_dotenv()

API_KEY = os.getenv("API_KEY", "")
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:5173")
CHESS_COM_BASE_URL = os.getenv("CHESS_COM_BASE_URL", "https://api.chess.com/pub")

CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", "300"))  # 5 minutes
# Unset means the current year, resolved on every load
SEASON_YEAR = int(os.environ["SEASON_YEAR"]) if os.getenv("SEASON_YEAR") else None
REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "UTC")

ARCHIVE_FETCH_WORKERS = int(os.getenv("ARCHIVE_FETCH_WORKERS", "4"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))
