"""
chat_logger.py - Centralized logging configuration for the advisor relay

Sets up Python logging with:
- File handler: logs/YYYY-MM-DD/chat.txt (daily folder)
- Console handler: stdout
- Configurable log level via LOG_LEVEL env variable
- Masking of credentials (bearer tokens, API keys) before they reach a log line
"""

import os
import re
import logging
from datetime import datetime
from pathlib import Path


_BEARER_RE = re.compile(r'(Bearer\s+)[A-Za-z0-9._\-]+')
_API_KEY_RE = re.compile(r'sk-[A-Za-z0-9_\-]{4,}')


def sanitize_log_string(text: str) -> str:
    """
    Sanitize string for logging to prevent log injection attacks.
    Removes newlines, carriage returns, and other control characters.

    Args:
        text: String to sanitize

    Returns:
        Sanitized string safe for logging
    """
    if not text:
        return text
    text = text.replace('\n', ' ').replace('\r', ' ').replace('\t', ' ')
    text = ''.join(char if ord(char) >= 32 else ' ' for char in text)
    return text


def truncate_for_log(text: str, limit: int = 100) -> str:
    """Shorten user text and strip control characters for a single log line."""
    if not text:
        return ""
    truncated = text[:limit] + "..." if len(text) > limit else text
    return sanitize_log_string(truncated)


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds to the configured datefmt."""

    def formatTime(self, record, datefmt=None):
        if datefmt:
            s = datetime.fromtimestamp(record.created).strftime(datefmt)
            ms = int((record.created - int(record.created)) * 1000)
            return f"{s}.{ms:03d}"
        return super().formatTime(record, datefmt)


def setup_logger(name: str = "advisor_chat", log_level: str = "INFO") -> logging.Logger:
    """
    Configure and return a logger with file and console handlers.

    Args:
        name: Logger name
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Prevent duplicate handlers if setup is called multiple times
    if logger.handlers:
        return logger

    formatter = MillisecondFormatter(
        fmt="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # ─── File Handler (one folder per day) ───
    today = datetime.now().strftime("%Y-%m-%d")
    log_dir = Path(os.getenv("LOG_DIR", "logs")) / today
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_dir / "chat.txt", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)  # Log everything to file
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # ─── Console Handler ───
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def mask_secret(text: str) -> str:
    """
    Remove credentials from a string before logging it.
    Masks bearer tokens and sk- style API keys.
    """
    if not text:
        return text
    text = _BEARER_RE.sub(r'\1***', text)
    text = _API_KEY_RE.sub('sk-***', text)
    return text


def get_logger(name: str = "advisor_chat") -> logging.Logger:
    """
    Get the configured logger instance.
    If logger doesn't exist, create it with default settings.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        log_level = os.getenv("LOG_LEVEL", "INFO")
        setup_logger(name, log_level)
    return logger
