"""
Product model with the bonus points attribute.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional
from ..extensions import db


def parse_price(value) -> Optional[Decimal]:
    """Parse a price as a finite Decimal, or return None."""
    if isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return price if price.is_finite() else None


class Product(db.Model):
    """Catalog product. Each unit purchased earns ``bonus_points``."""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal('0'))

    bonus_points = db.Column(db.Integer, nullable=False, default=0, server_default='0')

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<Product {self.name}>'

    @property
    def has_bonus_points(self) -> bool:
        return bool(self.bonus_points) and self.bonus_points > 0

    def validate(self) -> Dict[str, List[str]]:
        """
        Return a field -> messages map; empty when the product is valid.

        bonus_points may be left blank or at its 0 default, anything else
        must be a positive integer.
        """
        errors = {}
        if not self.name:
            errors.setdefault('name', []).append("can't be blank")

        if self.price is not None:
            price = parse_price(self.price)
            if price is None:
                errors.setdefault('price', []).append('is not a number')
            elif price < 0:
                errors.setdefault('price', []).append('must be greater than or equal to 0')

        points = self.bonus_points
        if points is None or points == 0:
            return errors
        if not isinstance(points, int) or isinstance(points, bool):
            errors.setdefault('bonus_points', []).append('is not a number')
        elif points <= 0:
            errors.setdefault('bonus_points', []).append('must be greater than 0')
        return errors

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': float(self.price) if self.price is not None else None,
            'bonus_points': self.bonus_points or 0,
        }
