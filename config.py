import os
from dotenv import load_dotenv

load_dotenv()

# Simulated latency of the analysis backend, in seconds
COMMAND_LATENCY_SECONDS = float(os.getenv("COMMAND_LATENCY_SECONDS", "1.0"))

# Chart preview bounds
CHART_ROW_LIMIT = int(os.getenv("CHART_ROW_LIMIT", "10"))
PIE_SECTOR_LIMIT = int(os.getenv("PIE_SECTOR_LIMIT", "5"))

# "first_point" or "union"
SERIES_KEY_POLICY = os.getenv("SERIES_KEY_POLICY", "first_point")


def optional_positive_int(name):
    """Read an optional env setting that must be a whole number >= 1."""
    raw = os.getenv(name)
    if not raw:
        return None
    value = int(raw)
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


# Unset means the history grows for the whole session
HISTORY_LIMIT = optional_positive_int("HISTORY_LIMIT")

PREVIEW_ROWS = int(os.getenv("PREVIEW_ROWS", "20"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Used by the Streamlit frontend
API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
