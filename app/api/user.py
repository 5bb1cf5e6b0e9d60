from flask import Blueprint, jsonify, g
from ..utils.auth import token_required
from ..services.user_service import get_user_details
from ..utils.database import get_store

user_bp = Blueprint('user', __name__)

@user_bp.route('/me', methods=['GET'])
@token_required
def user_details():
    response, status = get_user_details(get_store(), g.user)
    return jsonify(response), status
