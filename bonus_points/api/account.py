"""
Account summary endpoint.

The host's authentication layer identifies the signed-in user with the
X-User-ID header.
"""
from flask import Blueprint, jsonify, request

from ..extensions import db
from ..models.user import User
from ..utils.errors import unauthorized
from ..utils.exceptions import UserNotFoundError

account_bp = Blueprint('account', __name__)


def get_current_user():
    user_id = request.headers.get('X-User-ID', type=int)
    if user_id is None:
        return None
    user = db.session.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@account_bp.route('/bonus-points', methods=['GET'])
def get_bonus_points():
    """Available bonus points of the signed-in user."""
    user = get_current_user()
    if user is None:
        return unauthorized()

    return jsonify({
        'user_id': user.id,
        'available_bonus_points': user.available_bonus_points or 0,
    })
