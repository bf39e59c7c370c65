"""
Business logic services for the bonus points plugin.
"""
from .bonus_catalog import BonusCatalog
from .accrual_service import (
    BonusAccrualService,
    ACCRUAL_POLICY_ONCE_ON_COMPLETE,
    ACCRUAL_POLICY_EVERY_UPDATE,
)
from .order_service import OrderService
from .product_service import ProductService

__all__ = [
    'BonusCatalog',
    'BonusAccrualService',
    'ACCRUAL_POLICY_ONCE_ON_COMPLETE',
    'ACCRUAL_POLICY_EVERY_UPDATE',
    'OrderService',
    'ProductService',
]
