"""
Order and LineItem models.
"""
from datetime import datetime
from decimal import Decimal
from ..extensions import db


ORDER_STATES = (
    'cart',
    'address',
    'delivery',
    'payment',
    'confirm',
    'complete',
    'canceled',
    'returned',
)


class Order(db.Model):
    """
    Customer order.

    bonus_points_credited / bonus_points_credited_at record the credit
    applied to the user's balance so an order is only credited once.
    """
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    number = db.Column(db.String(32), nullable=False, unique=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))

    state = db.Column(db.String(20), nullable=False, default='cart')
    total = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal('0'))

    # Accrual tracking
    bonus_points_credited = db.Column(db.Integer)
    bonus_points_credited_at = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    line_items = db.relationship(
        'LineItem',
        backref='order',
        cascade='all, delete-orphan',
        order_by='LineItem.id'
    )

    def __repr__(self):
        return f'<Order {self.number}>'

    @property
    def total_bonus_points(self) -> int:
        """Bonus points earned by this order; recomputed on every access."""
        return sum(item.bonus_points for item in self.line_items)

    @property
    def is_complete(self) -> bool:
        return self.state == 'complete'

    @property
    def display_total(self) -> str:
        return f'${Decimal(self.total or 0):.2f}'

    def update_totals(self) -> None:
        self.total = sum((item.amount for item in self.line_items), Decimal('0'))

    def to_dict(self, include_items=True):
        data = {
            'id': self.id,
            'number': self.number,
            'user_id': self.user_id,
            'state': self.state,
            'total': float(self.total) if self.total is not None else 0.0,
            'total_bonus_points': self.total_bonus_points,
            'bonus_points_credited': self.bonus_points_credited,
            'bonus_points_credited_at': (
                self.bonus_points_credited_at.isoformat() if self.bonus_points_credited_at else None
            ),
        }
        if include_items:
            data['line_items'] = [item.to_dict() for item in self.line_items]
        return data


class LineItem(db.Model):
    """A product and quantity within an order."""
    __tablename__ = 'line_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)

    quantity = db.Column(db.Integer, nullable=False, default=1)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal('0'))

    product = db.relationship('Product')

    def __repr__(self):
        return f'<LineItem {self.product_id} x{self.quantity}>'

    @property
    def bonus_points(self) -> int:
        """Points for the whole line: product bonus points times quantity."""
        if self.product is None:
            return 0
        return (self.product.bonus_points or 0) * (self.quantity or 0)

    @property
    def amount(self) -> Decimal:
        return Decimal(self.price or 0) * (self.quantity or 0)

    @property
    def display_price(self) -> str:
        return f'${Decimal(self.price or 0):.2f}'

    def to_dict(self):
        return {
            'id': self.id,
            'product_id': self.product_id,
            'quantity': self.quantity,
            'price': float(self.price) if self.price is not None else 0.0,
            'bonus_points': self.bonus_points,
        }
