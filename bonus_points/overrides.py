"""
Storefront template overrides.

Each override names a host page (virtual path), the anchor inside it
(selector), how the fragment is spliced in (action) and the partial that
renders the fragment. Splicing is done by the host's rendering pipeline;
this module only renders the fragments it needs.

Host templates can call the ``bonus_fragments`` Jinja global:

    {% for fragment in bonus_fragments('orders/_line_item', line_item=item) %}
      {{ fragment.html }}
    {% endfor %}
"""
import logging
from dataclasses import dataclass
from typing import Dict, List

from flask import Flask, render_template
from markupsafe import Markup

logger = logging.getLogger(__name__)

INSERT_AFTER = 'insert_after'
INSERT_TOP = 'insert_top'
INSERT_BOTTOM = 'insert_bottom'
REPLACE = 'replace'

ACTIONS = (INSERT_AFTER, INSERT_TOP, INSERT_BOTTOM, REPLACE)


@dataclass(frozen=True)
class Override:
    virtual_path: str
    name: str
    action: str
    selector: str
    partial: str


@dataclass(frozen=True)
class RenderedFragment:
    name: str
    action: str
    selector: str
    html: Markup


OVERRIDES: List[Override] = [
    Override(
        virtual_path='products/_product',
        name='bonuses_display_bonus_points',
        action=INSERT_AFTER,
        selector='[itemprop="price"]',
        partial='overrides/_bonus_points_index.html',
    ),
    Override(
        virtual_path='products/_cart_form',
        name='product_show_display_bonus_points',
        action=INSERT_TOP,
        selector='[data-hook="product_price"]',
        partial='overrides/_bonus_points.html',
    ),
    Override(
        virtual_path='users/show',
        name='account_summary_display_bonus_points',
        action=INSERT_BOTTOM,
        selector='#user-info',
        partial='overrides/_account_summary_show.html',
    ),
    Override(
        virtual_path='orders/_form',
        name='order_form_total_bonus_points',
        action=REPLACE,
        selector='[data-hook="orders_cart_total"]',
        partial='overrides/_order_form_total_bonus_points.html',
    ),
    Override(
        virtual_path='admin/products/_form',
        name='admin_product_edit_display_bonus_points',
        action=INSERT_AFTER,
        selector='[data-hook="admin_product_form_cost_price"]',
        partial='overrides/_admin_bonus_on_product_form.html',
    ),
    Override(
        virtual_path='orders/_line_item',
        name='line_item_display_bonus_points',
        action=REPLACE,
        selector='[data-hook="cart_item_price"]',
        partial='overrides/_bonus_on_cart_item.html',
    ),
]


def overrides_for(virtual_path: str) -> List[Override]:
    return [override for override in OVERRIDES if override.virtual_path == virtual_path]


def render_overrides(virtual_path: str, **context) -> List[RenderedFragment]:
    """Render every fragment registered for a host page, in registration order."""
    fragments = []
    for override in overrides_for(virtual_path):
        html = render_template(override.partial, **context)
        fragments.append(RenderedFragment(
            name=override.name,
            action=override.action,
            selector=override.selector,
            html=Markup(html.strip()),
        ))
    return fragments


def fragments_by_anchor(virtual_path: str, **context) -> Dict[str, Markup]:
    """Rendered fragments keyed by anchor selector."""
    return {fragment.selector: fragment.html for fragment in render_overrides(virtual_path, **context)}


def init_app(app: Flask) -> None:
    """Expose fragment rendering to templates and check the registry."""
    for override in OVERRIDES:
        if override.action not in ACTIONS:
            raise ValueError(f'Override {override.name} has unknown action {override.action}')

    app.jinja_env.globals['bonus_fragments'] = render_overrides
    logger.debug(f'Registered {len(OVERRIDES)} storefront overrides')
