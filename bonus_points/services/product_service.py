"""
Product bonus points administration.
"""
import logging
from typing import Any, Dict

from ..extensions import db
from ..models.product import Product, parse_price
from ..utils.exceptions import ProductNotFoundError, ValidationError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('name', 'price', 'bonus_points')


class ProductService:
    """Admin edits of products, including their bonus points."""

    def get_product(self, product_id: int) -> Product:
        product = db.session.get(Product, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def update_product(self, product_id: int, attrs: Dict[str, Any]) -> Product:
        """
        Update a product; the write is blocked when validation fails.

        Raises:
            ProductNotFoundError: product does not exist
            ValidationError: e.g. negative bonus_points
        """
        product = self.get_product(product_id)

        unknown = set(attrs) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ['is not a permitted attribute'] for field in unknown}, 'Product')

        try:
            for field, value in attrs.items():
                if field == 'bonus_points' and value in (None, ''):
                    value = 0
                setattr(product, field, value)

            errors = product.validate()
            if product.price is None:
                errors.setdefault('price', []).append("can't be blank")
            if errors:
                logger.warning(f'Product {product.id} failed validation: {errors}')
                raise ValidationError(errors, 'Product')

            product.price = parse_price(product.price)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        return product
