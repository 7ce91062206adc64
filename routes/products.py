"""
Catalog endpoints as a Flask Blueprint.
"""

from flask import Blueprint, request, jsonify

from catalog import catalog
from chat_logger import get_logger, sanitize_log_string
from core import parse_product_filters
from exceptions import NotFoundError

logger = get_logger("advisor_chat")

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.route("", methods=["GET"])
def list_products():
    """Full catalog, or the records matching ?filters={...} / individual params."""
    filters = parse_product_filters(request.args)
    if filters is None:
        return jsonify(catalog.all_products()), 200

    products = catalog.get_products_by_filters(filters)
    logger.info(f"GET /api/products | filters={filters} | matches={len(products)}")
    return jsonify(products), 200


@products_bp.route("/<product_id>", methods=["GET"])
def get_product(product_id):
    product = catalog.get_product_by_id(product_id)
    if product is None:
        raise NotFoundError(f"Product not found: {sanitize_log_string(product_id)}")
    return jsonify(product), 200
