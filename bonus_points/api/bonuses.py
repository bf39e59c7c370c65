"""
Bonus catalog endpoints.

Storefront pages:
    GET /bonuses                 - paginated listing of active bonuses
    GET /bonuses/<identifier>    - one active bonus by id or slug

JSON API:
    GET /api/bonuses
    GET /api/bonuses/<identifier>
"""
from flask import Blueprint, abort, jsonify, render_template, request

from ..services.bonus_catalog import BonusCatalog
from ..utils.exceptions import BonusNotFoundError

bonus_pages_bp = Blueprint('bonus_pages', __name__)
bonuses_bp = Blueprint('bonuses', __name__)


def _page_args():
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', type=int)
    return page, per_page


# ==================== Storefront pages ====================

@bonus_pages_bp.route('', methods=['GET'])
@bonus_pages_bp.route('/', methods=['GET'])
def index():
    """Listing page of active bonuses."""
    page, per_page = _page_args()
    bonuses = BonusCatalog().list_active(page=page, per_page=per_page)
    return render_template('bonuses/index.html', bonuses=bonuses)


@bonus_pages_bp.route('/<identifier>', methods=['GET'])
def show(identifier):
    """Detail page of one active bonus."""
    try:
        bonus = BonusCatalog().get_active_by_id(identifier)
    except BonusNotFoundError:
        abort(404)
    return render_template('bonuses/show.html', bonus=bonus)


# ==================== JSON API ====================

@bonuses_bp.route('', methods=['GET'])
@bonuses_bp.route('/', methods=['GET'])
def list_bonuses():
    """List active bonuses with pagination."""
    page, per_page = _page_args()
    pagination = BonusCatalog().list_active(page=page, per_page=per_page)

    return jsonify({
        'bonuses': [bonus.to_dict() for bonus in pagination.items],
        'total': pagination.total,
        'page': pagination.page,
        'per_page': pagination.per_page,
        'pages': pagination.pages
    })


@bonuses_bp.route('/<identifier>', methods=['GET'])
def get_bonus(identifier):
    """Get one active bonus; 404 when missing or soft-deleted."""
    bonus = BonusCatalog().get_active_by_id(identifier)
    return jsonify(bonus.to_dict(include_details=True))
