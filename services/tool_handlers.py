"""
Tool handlers - local answers to function calls the assistant emits mid-run.

Each handler is a pure function (arguments, catalog) -> output. The registry
maps the function name the assistant uses to its handler; names that are
not registered get their arguments echoed back unchanged.
"""

import json
from typing import Callable, Dict, Any, List

from app_config import DEFAULT_FILTER_EXPLANATION, DEFAULT_FILTER_CONFIDENCE
from catalog import Catalog
from chat_logger import get_logger, truncate_for_log
from exceptions import ParseError

logger = get_logger("advisor_chat")

ToolHandler = Callable[[Dict[str, Any], Catalog], Any]

HIGHLIGHT_TAG_COUNT = 2


def parse_arguments(raw: Any) -> Dict[str, Any]:
    """Decode function-call arguments. Raises ParseError for anything but a JSON object."""
    if not raw:
        return {}
    if isinstance(raw, dict):
        return dict(raw)
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Malformed tool arguments: {e}") from e
    if not isinstance(parsed, dict):
        raise ParseError(f"Tool arguments must be a JSON object, got {type(parsed).__name__}")
    return parsed


def safe_parse_arguments(raw: Any) -> Dict[str, Any]:
    """Like parse_arguments, but malformed input becomes an empty object."""
    try:
        return parse_arguments(raw)
    except ParseError as e:
        logger.warning(f"Tool arguments ignored | {e} | raw=\"{truncate_for_log(str(raw))}\"")
        return {}


def generate_filters(arguments: Dict[str, Any], catalog: Catalog) -> Dict[str, Any]:
    """Echo the generated filters, filling in explanation/confidence when absent."""
    output = dict(arguments)
    output.setdefault("explanation", DEFAULT_FILTER_EXPLANATION)
    output.setdefault("confidence", DEFAULT_FILTER_CONFIDENCE)
    return output


def _highlights_for(product: Dict[str, Any]) -> List[str]:
    highlights = [
        f"{product['loadCapacity']} kg load capacity",
        f"{product['powerSource']} power",
        f"{product['operatingEnvironment']} environment",
    ]
    highlights.extend(product.get("semanticTags", [])[:HIGHLIGHT_TAG_COUNT])
    return highlights


def recommend_products(arguments: Dict[str, Any], catalog: Catalog) -> Dict[str, Any]:
    """
    Ground AI-supplied recommendations in the real catalog.

    Invalid product ids are replaced by cycling through the valid ids using the
    recommendation's position; every recommendation then gets its model name,
    highlights and primary benefit rewritten from the matched record.
    """
    output = dict(arguments)
    recommendations = arguments.get("recommendations")
    if not isinstance(recommendations, list):
        output["recommendations"] = []
        return output

    valid_ids = catalog.get_valid_product_ids()
    if not valid_ids:
        output["recommendations"] = []
        return output

    repaired = []
    for index, rec in enumerate(recommendations):
        rec = dict(rec) if isinstance(rec, dict) else {}
        requested_id = rec.get("productId")
        product = catalog.get_product_by_id(requested_id) if isinstance(requested_id, str) else None
        if product is None:
            replacement_id = valid_ids[index % len(valid_ids)]
            logger.warning(f"recommend_products: unknown productId={requested_id!r} replaced with {replacement_id}")
            product = catalog.get_product_by_id(replacement_id)

        rec["productId"] = product["id"]
        rec["modelName"] = product["modelName"]
        rec["highlights"] = _highlights_for(product)
        tags = product.get("semanticTags") or []
        rec["primaryBenefit"] = tags[0] if tags else product.get("description", "")
        repaired.append(rec)

    output["recommendations"] = repaired
    return output


TOOL_HANDLERS: Dict[str, ToolHandler] = {
    "generate_filters": generate_filters,
    "recommend_products": recommend_products,
}


def build_tool_registry(catalog: Catalog,
                        handlers: Dict[str, ToolHandler] = None) -> Dict[str, Callable[[Dict[str, Any]], Any]]:
    """Bind every handler to the given catalog so callers only pass arguments."""
    handlers = TOOL_HANDLERS if handlers is None else handlers
    return {
        name: (lambda args, _handler=handler: _handler(args, catalog))
        for name, handler in handlers.items()
    }
