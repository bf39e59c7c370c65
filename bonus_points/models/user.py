"""
User model with the bonus points balance.
"""
from datetime import datetime
from typing import Dict, List
from ..extensions import db


class User(db.Model):
    """
    Storefront customer account.

    available_bonus_points is an accumulator. It is only changed through
    BonusAccrualService so every credit is tied to an order update.
    """
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, unique=True)

    available_bonus_points = db.Column(db.Integer, nullable=False, default=0, server_default='0')

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    orders = db.relationship('Order', backref='user', lazy='dynamic')

    def __repr__(self):
        return f'<User {self.email}>'

    def validate(self) -> Dict[str, List[str]]:
        errors = {}
        if not self.email:
            errors.setdefault('email', []).append("can't be blank")
        points = self.available_bonus_points
        if points is None:
            errors.setdefault('available_bonus_points', []).append("can't be blank")
        elif not isinstance(points, int) or isinstance(points, bool):
            errors.setdefault('available_bonus_points', []).append('must be an integer')
        elif points < 0:
            errors.setdefault('available_bonus_points', []).append('must be greater than or equal to 0')
        return errors

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'available_bonus_points': self.available_bonus_points or 0,
        }
