"""
Core Helpers

Request parsing for the chat and product endpoints.
"""

import json
from typing import Any, Dict, List, Optional

from exceptions import ValidationError
from models import HistoryMessage, StartRequest


def require_param(value: Optional[str], name: str) -> str:
    """Return a stripped, non-empty value or raise ValidationError."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing {name}")
    return value.strip()


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_history(raw: Any) -> List[HistoryMessage]:
    """Keep well-formed {role, content} entries in their original order."""
    if not isinstance(raw, list):
        return []
    history = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        role = entry.get("role")
        content = entry.get("content")
        if isinstance(role, str) and role and isinstance(content, str) and content:
            history.append(HistoryMessage(role=role, content=content))
    return history


def parse_start_request(body: Optional[Dict[str, Any]]) -> StartRequest:
    """
    Build a StartRequest from the POST /start JSON body.

    Only `message` is required; threadId, systemInstructions, history and
    fileIds are optional and silently ignored when malformed.
    """
    if not isinstance(body, dict):
        raise ValidationError("Missing message")
    message = body.get("message")
    if not isinstance(message, str) or not message.strip():
        raise ValidationError("Missing message")

    file_ids = body.get("fileIds")
    if not isinstance(file_ids, list):
        file_ids = []

    return StartRequest(
        message=message,
        thread_id=_optional_str(body.get("threadId")),
        system_instructions=_optional_str(body.get("systemInstructions")),
        history=parse_history(body.get("history")),
        file_ids=[f for f in file_ids if isinstance(f, str) and f],
    )


FILTER_FIELDS = ("powerSource", "loadCapacity", "operatingEnvironment")


def parse_product_filters(args: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Product filters from query args.

    Accepts either a JSON object in `filters` or the individual fields as
    their own query params. Returns None when no filter was given.
    """
    raw = args.get("filters")
    if raw:
        try:
            filters = json.loads(raw)
        except ValueError:
            raise ValidationError("filters must be a JSON object")
        if not isinstance(filters, dict):
            raise ValidationError("filters must be a JSON object")
        return _coerce_load_capacity(filters)

    filters = {key: args.get(key) for key in FILTER_FIELDS if args.get(key)}
    return _coerce_load_capacity(filters) or None


def _coerce_load_capacity(filters: Dict[str, Any]) -> Dict[str, Any]:
    """loadCapacity, when given, must be numeric; blank means no constraint."""
    value = filters.get("loadCapacity")
    if value is None or value == "":
        return filters
    if isinstance(value, bool):
        raise ValidationError("loadCapacity must be a number")
    try:
        filters["loadCapacity"] = float(value)
    except (TypeError, ValueError):
        raise ValidationError("loadCapacity must be a number")
    return filters
