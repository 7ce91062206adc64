"""
Application configuration module for the Forklift Advisor Chat API.
Contains environment variables, constants, and settings.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# ═══════════════════════════════════════════
# ENVIRONMENT VARIABLES
# ═══════════════════════════════════════════

OPENAI_API_BASE_URL = os.getenv("OPENAI_API_BASE_URL", "https://api.openai.com/v1").rstrip("/")
OPENAI_BETA_HEADER = os.getenv("OPENAI_BETA_HEADER", "assistants=v2")
PORT = int(os.getenv("PORT", 3001))
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_api_key() -> str:
    """Bearer credential for the assistant service. Read on every call."""
    return os.getenv("OPENAI_API_KEY", "")


def get_assistant_id() -> str:
    """Assistant configuration that every run is created against."""
    return os.getenv("OPENAI_ASSISTANT_ID", "")


# ═══════════════════════════════════════════
# REMOTE CALL SETTINGS
# ═══════════════════════════════════════════

REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", 30))  # seconds

# Page size for list endpoints (messages, run steps); the service caps it at 100
LIST_PAGE_SIZE = 100

# Wait-and-repoll loop after tool outputs are submitted
RUN_POLL_INTERVAL_SECONDS = float(os.getenv("RUN_POLL_INTERVAL_SECONDS", "1.0"))
RUN_POLL_MAX_ATTEMPTS = 30

# ═══════════════════════════════════════════
# FILE UPLOADS
# ═══════════════════════════════════════════

FILE_UPLOAD_PURPOSE = "assistants"
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", 20))

# ═══════════════════════════════════════════
# RESPONSE TEXT
# ═══════════════════════════════════════════

NO_REPLY_FALLBACK = "No reply from assistant."
DEFAULT_FILTER_EXPLANATION = "Filters generated from your stated requirements."
DEFAULT_FILTER_CONFIDENCE = 0.5
