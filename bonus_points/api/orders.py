"""
Order endpoints.

    GET   /api/orders/<id>  - order with its total bonus points
    PATCH /api/orders/<id>  - update an order and credit its bonus points
"""
from flask import Blueprint, jsonify, request

from ..services.order_service import OrderService
from ..utils.errors import bad_request

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('/<int:order_id>', methods=['GET'])
def get_order(order_id):
    order = OrderService().get_order(order_id)
    return jsonify(order.to_dict())


@orders_bp.route('/<int:order_id>', methods=['PATCH', 'PUT'])
def update_order(order_id):
    """
    Update an order.

    Request body:
    {
        "state": "complete",
        "line_items": [{"product_id": 1, "quantity": 2}]
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return bad_request('Request body must be a JSON object')

    result = OrderService().update_order(order_id, data)
    return jsonify(result)
