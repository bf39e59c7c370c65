"""
Shared pytest fixtures.

Every test gets a fresh app on an in-memory SQLite database. The app
context stays pushed for the whole test so fixtures, services and test
client requests share one session.
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from bonus_points import create_app
from bonus_points.extensions import db
from bonus_points.models import User, Product, Order, LineItem
from bonus_points.services.bonus_catalog import BonusCatalog


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog(app):
    return BonusCatalog()


@pytest.fixture
def sample_user(app):
    user = User(email='customer@example.com', available_bonus_points=0)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def product_a(app):
    product = Product(name='Coffee Beans', price=Decimal('12.50'), bonus_points=10)
    db.session.add(product)
    db.session.commit()
    return product


@pytest.fixture
def product_b(app):
    product = Product(name='Paper Filters', price=Decimal('4.00'), bonus_points=5)
    db.session.add(product)
    db.session.commit()
    return product


@pytest.fixture
def sample_order(app, sample_user, product_a, product_b):
    """Order with product A x2 and product B x1, worth 25 bonus points."""
    order = Order(number='R100000001', user=sample_user, state='confirm')
    order.line_items = [
        LineItem(product=product_a, quantity=2, price=product_a.price),
        LineItem(product=product_b, quantity=1, price=product_b.price),
    ]
    order.update_totals()
    db.session.add(order)
    db.session.commit()
    return order


@pytest.fixture
def sample_bonus(catalog):
    return catalog.create_bonus(
        name='Reward X',
        points=100,
        description='A reward worth redeeming',
        available_on=datetime.utcnow() - timedelta(days=1),
    )
