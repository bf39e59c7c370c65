"""
Order update use case.

Applying changes to an order and crediting its bonus points happen in one
transaction: either both are committed or neither is.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from ..extensions import db
from ..models.order import Order, LineItem, ORDER_STATES
from ..models.product import Product
from ..utils.exceptions import OrderNotFoundError, ValidationError
from .accrual_service import BonusAccrualService

logger = logging.getLogger(__name__)


class OrderService:
    """Updates orders and runs bonus accrual as an explicit step."""

    def __init__(self, accrual_service: BonusAccrualService = None):
        self.accrual_service = accrual_service or BonusAccrualService()

    def get_order(self, order_id: int) -> Order:
        order = db.session.get(Order, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def update_order(self, order_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply changes to an order, then credit bonus points.

        Args:
            order_id: Order to update
            changes: Optional keys ``state`` and ``line_items``
                (list of {product_id, quantity[, price]}) which replaces the
                order's line items

        Returns:
            Dict with the updated order and the accrual outcome

        Raises:
            OrderNotFoundError: order does not exist
            ValidationError: invalid state or line items
            AccrualError: the user balance could not be credited
        """
        order = self.get_order(order_id)

        try:
            self._apply_changes(order, changes)
            accrual = self.accrual_service.accrue_for_order(order)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f'Updated order {order.number} (state={order.state})')
        return {
            'order': order.to_dict(),
            'accrual': accrual,
        }

    def _apply_changes(self, order: Order, changes: Dict[str, Any]) -> None:
        errors = {}

        if 'state' in changes:
            state = changes['state']
            if state not in ORDER_STATES:
                errors['state'] = [f'must be one of: {", ".join(ORDER_STATES)}']
            else:
                order.state = state

        if 'line_items' in changes:
            items, item_errors = self._build_line_items(changes['line_items'])
            if item_errors:
                errors['line_items'] = item_errors
            else:
                order.line_items = items
                order.update_totals()

        if errors:
            raise ValidationError(errors, 'Order')

    def _build_line_items(self, payload: Any):
        if not isinstance(payload, list):
            return [], ['must be a list']

        items: List[LineItem] = []
        errors: List[str] = []
        for index, entry in enumerate(payload):
            if not isinstance(entry, dict):
                errors.append(f'item {index} must be an object')
                continue

            product_id = entry.get('product_id')
            if not isinstance(product_id, int) or isinstance(product_id, bool):
                errors.append(f'item {index}: product_id must be an integer')
                continue

            product = db.session.get(Product, product_id)
            if product is None:
                errors.append(f'item {index}: product {product_id} not found')
                continue

            quantity = entry.get('quantity', 1)
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
                errors.append(f'item {index}: quantity must be a positive integer')
                continue

            try:
                price = Decimal(str(entry.get('price', product.price)))
            except (InvalidOperation, ValueError):
                errors.append(f'item {index}: price is not a number')
                continue

            items.append(LineItem(product=product, quantity=quantity, price=price))

        return items, errors
