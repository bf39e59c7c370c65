"""
Tests for product bonus points validation and the product admin API.
"""
from decimal import Decimal

import pytest

from bonus_points.extensions import db
from bonus_points.models import Product
from bonus_points.services.product_service import ProductService
from bonus_points.utils.exceptions import ProductNotFoundError, ValidationError


class TestProductValidation:

    @pytest.mark.parametrize('points', [0, None, 1, 500])
    def test_valid_bonus_points(self, points):
        product = Product(name='Beans', bonus_points=points)
        assert product.validate() == {}

    @pytest.mark.parametrize('points', [-1, -50])
    def test_negative_bonus_points_invalid(self, points):
        product = Product(name='Beans', bonus_points=points)
        assert product.validate() == {'bonus_points': ['must be greater than 0']}

    def test_non_integer_invalid(self):
        product = Product(name='Beans', bonus_points='lots')
        assert product.validate() == {'bonus_points': ['is not a number']}

    @pytest.mark.parametrize('price', ['abc', 'NaN', True])
    def test_non_numeric_price_invalid(self, price):
        product = Product(name='Beans', price=price)
        assert product.validate() == {'price': ['is not a number']}

    def test_negative_price_invalid(self):
        product = Product(name='Beans', price='-1.00')
        assert product.validate() == {'price': ['must be greater than or equal to 0']}

    @pytest.mark.parametrize('points, expected', [(10, True), (0, False), (None, False)])
    def test_has_bonus_points(self, points, expected):
        assert Product(name='Beans', bonus_points=points).has_bonus_points is expected


class TestProductService:

    def test_update_bonus_points(self, product_a):
        product = ProductService().update_product(product_a.id, {'bonus_points': 42})
        assert product.bonus_points == 42

    def test_zero_is_saved(self, product_a):
        product = ProductService().update_product(product_a.id, {'bonus_points': 0})
        assert product.bonus_points == 0

    def test_blank_resets_to_zero(self, product_a):
        product = ProductService().update_product(product_a.id, {'bonus_points': ''})
        assert product.bonus_points == 0

    def test_negative_blocks_write(self, product_a):
        with pytest.raises(ValidationError) as exc:
            ProductService().update_product(product_a.id, {'bonus_points': -1})

        assert exc.value.fields == ['bonus_points']
        assert db.session.get(Product, product_a.id).bonus_points == 10

    def test_unknown_product(self, app):
        with pytest.raises(ProductNotFoundError):
            ProductService().get_product(404)


class TestProductsAPI:

    def test_get_product(self, client, product_a):
        response = client.get(f'/api/products/{product_a.id}')
        assert response.status_code == 200
        assert response.get_json()['bonus_points'] == 10

    def test_update_product(self, client, product_a):
        response = client.put(f'/api/products/{product_a.id}', json={'bonus_points': '15'})
        assert response.status_code == 200
        assert response.get_json()['bonus_points'] == 15

    def test_update_negative_returns_fields(self, client, product_a):
        response = client.put(f'/api/products/{product_a.id}', json={'bonus_points': -1})
        assert response.status_code == 422

        error = response.get_json()['error']
        assert error['code'] == 'VALIDATION_ERROR'
        assert error['fields'] == {'bonus_points': ['must be greater than 0']}

    def test_update_price(self, client, product_a):
        response = client.put(f'/api/products/{product_a.id}', json={'price': '9.99'})
        assert response.status_code == 200
        assert response.get_json()['price'] == 9.99

    def test_invalid_price_returns_fields(self, client, product_a):
        response = client.put(f'/api/products/{product_a.id}', json={'price': 'abc'})
        assert response.status_code == 422
        assert response.get_json()['error']['fields'] == {'price': ['is not a number']}
        assert db.session.get(Product, product_a.id).price == Decimal('12.50')

    def test_null_price_returns_fields(self, client, product_a):
        response = client.put(f'/api/products/{product_a.id}', json={'price': None})
        assert response.status_code == 422
        assert response.get_json()['error']['fields'] == {'price': ["can't be blank"]}

    def test_non_json_body(self, client, product_a):
        response = client.put(f'/api/products/{product_a.id}', data='nope')
        assert response.status_code == 400

    def test_missing_product(self, client):
        response = client.get('/api/products/999')
        assert response.status_code == 404
        assert response.get_json()['error']['code'] == 'PRODUCT_NOT_FOUND'
