"""
Product endpoints used by the admin product form.

    GET /api/products/<id>
    PUT /api/products/<id>  - edit name, price and bonus_points
"""
from flask import Blueprint, jsonify, request

from ..services.product_service import ProductService
from ..utils.errors import bad_request

products_bp = Blueprint('products', __name__)


@products_bp.route('/<int:product_id>', methods=['GET'])
def get_product(product_id):
    product = ProductService().get_product(product_id)
    return jsonify(product.to_dict())


@products_bp.route('/<int:product_id>', methods=['PUT', 'PATCH'])
def update_product(product_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return bad_request('Request body must be a JSON object')

    # Form posts send numbers as strings
    points = data.get('bonus_points')
    if isinstance(points, str) and points.strip().lstrip('-').isdigit():
        data['bonus_points'] = int(points.strip())

    product = ProductService().update_product(product_id, data)
    return jsonify(product.to_dict())
