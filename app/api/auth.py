from flask import Blueprint, jsonify
from ..services.auth_service import login_user, register_user
from ..utils.database import get_store
from ..utils.limiter import limiter
from ..utils.validation import json_body

auth_bp = Blueprint('auth', __name__)

@auth_bp.route('/login', methods=['POST'])
@limiter.limit("20 per minute")
def login():
    response, status = login_user(get_store(), json_body())
    return jsonify(response), status

@auth_bp.route('/register', methods=['POST'])
@limiter.limit("20 per minute")
def register():
    response, status = register_user(get_store(), json_body())
    return jsonify(response), status
