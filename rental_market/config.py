import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG = LOG_LEVEL == "DEBUG"

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL must be set in the environment")

ALLOWED_ORIGINS: list[str] = [
    origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
]

# Fixed per-booking fees added on top of nightly price * nights
CLEANING_FEE = int(os.getenv("CLEANING_FEE", "75"))
SERVICE_FEE = int(os.getenv("SERVICE_FEE", "65"))

# Transient connection failures only; domain errors are never retried
DB_RETRY_ATTEMPTS = int(os.getenv("DB_RETRY_ATTEMPTS", "3"))
DB_RETRY_DELAY = float(os.getenv("DB_RETRY_DELAY", "0.2"))

# Longest bookable or blockable range, in nights
MAX_RANGE_DAYS = int(os.getenv("MAX_RANGE_DAYS", "365"))
