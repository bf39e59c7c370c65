"""
Bonus points accrual.

Credits an order's bonus points to the purchasing user's balance. This is
the only code path that changes ``User.available_bonus_points``.

Two policies are supported (config ``BONUS_ACCRUAL_POLICY``):

- ``once_on_complete``: credit when the order reaches ``complete``, once per
  order. The credited amount is stored on the order.
- ``every_update``: add the order total on every order update, the way the
  storefront plugin originally behaved. Repeated updates inflate the balance.

The service only stages changes in the session. The caller owns the
transaction so the order change and the credit are committed together.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from flask import current_app

from ..extensions import db
from ..models.order import Order
from ..utils.exceptions import AccrualError

logger = logging.getLogger(__name__)

ACCRUAL_POLICY_ONCE_ON_COMPLETE = 'once_on_complete'
ACCRUAL_POLICY_EVERY_UPDATE = 'every_update'

ACCRUAL_POLICIES = (ACCRUAL_POLICY_ONCE_ON_COMPLETE, ACCRUAL_POLICY_EVERY_UPDATE)


class BonusAccrualService:
    """
    Applies order bonus points to user balances.

    Usage:
        service = BonusAccrualService()
        result = service.accrue_for_order(order)
        db.session.commit()
    """

    def __init__(self, policy: Optional[str] = None):
        if policy is None:
            policy = current_app.config.get('BONUS_ACCRUAL_POLICY', ACCRUAL_POLICY_ONCE_ON_COMPLETE)
        if policy not in ACCRUAL_POLICIES:
            raise ValueError(f'Unknown bonus accrual policy: {policy}')
        self.policy = policy

    @staticmethod
    def total_bonus_points(order: Order) -> int:
        """Sum of product bonus points times quantity over the order's line items."""
        return order.total_bonus_points

    def accrue_for_order(self, order: Order) -> Dict[str, Any]:
        """
        Credit the order's bonus points to its user.

        Returns:
            Dict describing the outcome: credited points, new balance, or the
            reason nothing was credited

        Raises:
            AccrualError: the user's new balance fails validation
        """
        result = {
            'order_id': order.id,
            'user_id': order.user_id,
            'policy': self.policy,
            'credited': 0,
            'balance': None,
            'skipped': None,
        }

        user = order.user
        if user is None:
            result['skipped'] = 'no_user'
            return result

        if self.policy == ACCRUAL_POLICY_ONCE_ON_COMPLETE:
            if not order.is_complete:
                result['skipped'] = 'order_not_complete'
                result['balance'] = user.available_bonus_points
                return result
            if order.bonus_points_credited_at is not None:
                result['skipped'] = 'already_credited'
                result['balance'] = user.available_bonus_points
                return result

        points = self.total_bonus_points(order)
        user.available_bonus_points = (user.available_bonus_points or 0) + points

        errors = user.validate()
        if errors:
            logger.error(
                f'Bonus accrual for order {order.number} rejected, user {user.id} invalid: {errors}'
            )
            raise AccrualError(
                f'Could not credit {points} bonus points to user {user.id}: {errors}',
                order_id=order.id,
                user_id=user.id
            )

        order.bonus_points_credited = (order.bonus_points_credited or 0) + points
        order.bonus_points_credited_at = datetime.utcnow()
        db.session.add(user)

        logger.info(
            f'Credited {points} bonus points to user {user.id} for order {order.number} '
            f'(policy={self.policy}, balance={user.available_bonus_points})'
        )

        result['credited'] = points
        result['balance'] = user.available_bonus_points
        return result
