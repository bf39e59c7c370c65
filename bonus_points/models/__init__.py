"""
Database models for the bonus points plugin.
Products and orders earn bonus points for users; bonuses form the reward catalog.
"""
from .user import User
from .product import Product
from .order import Order, LineItem, ORDER_STATES
from .bonus import Bonus, BonusImage, BonusSlug

__all__ = [
    'User',
    'Product',
    'Order',
    'LineItem',
    'ORDER_STATES',
    # Bonus catalog
    'Bonus',
    'BonusImage',
    'BonusSlug',
]
