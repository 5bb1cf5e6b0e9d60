from flask import Blueprint, jsonify, g
from ..utils.auth import token_required
from ..services import logo_service
from ..utils.ai_clients import get_image_client
from ..utils.database import get_store
from ..utils.uploader import get_uploader
from ..utils.validation import json_body

logo_bp = Blueprint('logo', __name__)

@logo_bp.route('/generate', methods=['POST'])
@token_required
def generate_logo():
    response, status = logo_service.generate_logo(
        get_store(), get_image_client(), get_uploader(), g.user, json_body()
    )
    return jsonify(response), status

@logo_bp.route('/user', methods=['GET'])
@token_required
def user_logos():
    response, status = logo_service.list_user_logos(get_store(), g.user)
    return jsonify(response), status

@logo_bp.route('/business/<business_id>', methods=['GET'])
@token_required
def business_logos(business_id):
    response, status = logo_service.list_business_logos(get_store(), g.user, business_id)
    return jsonify(response), status

@logo_bp.route('/<logo_id>', methods=['DELETE'])
@token_required
def delete_logo(logo_id):
    response, status = logo_service.delete_logo(get_store(), g.user, logo_id)
    return jsonify(response), status

@logo_bp.route('/<logo_id>/regenerate', methods=['POST'])
@token_required
def regenerate_logo(logo_id):
    response, status = logo_service.regenerate_logo(
        get_store(), get_image_client(), get_uploader(), g.user, logo_id, json_body()
    )
    return jsonify(response), status
