"""
Tests for storefront template overrides.
"""
import pytest
from flask import render_template_string

from bonus_points.models import LineItem, Order, Product, User
from bonus_points.overrides import (
    OVERRIDES,
    REPLACE,
    fragments_by_anchor,
    overrides_for,
    render_overrides,
)


class TestRegistry:

    def test_every_host_page_registered(self):
        paths = {override.virtual_path for override in OVERRIDES}
        assert paths == {
            'products/_product',
            'products/_cart_form',
            'users/show',
            'orders/_form',
            'admin/products/_form',
            'orders/_line_item',
        }

    def test_override_names_unique(self):
        names = [override.name for override in OVERRIDES]
        assert len(names) == len(set(names))

    def test_unknown_page_has_no_overrides(self, app):
        assert overrides_for('checkout/edit') == []
        assert render_overrides('checkout/edit') == []


class TestProductFragments:

    def test_product_list_item_shows_points(self, app):
        product = Product(name='Beans', bonus_points=10)
        fragments = render_overrides('products/_product', product=product)

        assert len(fragments) == 1
        assert fragments[0].selector == '[itemprop="price"]'
        assert '10<small>bp</small>' in fragments[0].html

    @pytest.mark.parametrize('virtual_path', ['products/_product', 'products/_cart_form'])
    def test_zero_points_renders_nothing(self, app, virtual_path):
        product = Product(name='Beans', bonus_points=0)
        fragments = render_overrides(virtual_path, product=product)
        assert fragments[0].html == ''

    def test_cart_form_shows_points(self, app):
        product = Product(name='Beans', bonus_points=7)
        html = fragments_by_anchor('products/_cart_form', product=product)['[data-hook="product_price"]']
        assert 'itemprop="bonusPoints" content="7"' in html

    def test_admin_form_field(self, app):
        product = Product(name='Beans', bonus_points=3)
        html = render_overrides('admin/products/_form', product=product)[0].html
        assert 'name="product[bonus_points]"' in html
        assert 'value="3"' in html
        assert 'has-error' not in html

    def test_admin_form_errors(self, app):
        product = Product(name='Beans', bonus_points=-1)
        errors = product.validate()
        html = render_overrides('admin/products/_form', product=product, errors=errors)[0].html
        assert 'has-error' in html
        assert 'Bonus Points must be greater than 0' in html


class TestOrderFragments:

    def test_cart_total_row(self, app, sample_order):
        fragment = render_overrides('orders/_form', order=sample_order)[0]
        assert fragment.action == REPLACE
        assert 'Total Bonus Points:' in fragment.html
        assert '<td class="lead">25</td>' in fragment.html
        assert sample_order.display_total in fragment.html

    def test_line_item_price_cell(self, app):
        item = LineItem(product=Product(name='Beans', bonus_points=10), quantity=2, price=12.5)
        html = render_overrides('orders/_line_item', line_item=item)[0].html
        assert '$12.50' in html
        assert '10bp' in html

    def test_line_item_without_points(self, app):
        item = LineItem(product=Product(name='Beans', bonus_points=0), quantity=1, price=3)
        html = render_overrides('orders/_line_item', line_item=item)[0].html
        assert 'bp' not in html


class TestAccountFragment:

    def test_available_points(self, app):
        user = User(email='a@example.com', available_bonus_points=120)
        html = render_overrides('users/show', user=user)[0].html
        assert 'Available Bonus Points' in html
        assert '<dd>120</dd>' in html


class TestJinjaGlobal:

    def test_host_template_can_render_fragments(self, app):
        product = Product(name='Beans', bonus_points=4)
        html = render_template_string(
            "{% for fragment in bonus_fragments('products/_product', product=product) %}"
            "{{ fragment.html }}"
            "{% endfor %}",
            product=product,
        )
        assert '4<small>bp</small>' in html
