from flask import Blueprint, jsonify, g
from ..utils.auth import token_required
from ..services import business_service
from ..utils.database import get_store
from ..utils.validation import json_body

business_bp = Blueprint('business', __name__)

@business_bp.route('', methods=['GET'])
@token_required
def list_businesses():
    response, status = business_service.list_businesses(get_store(), g.user)
    return jsonify(response), status

@business_bp.route('', methods=['POST'])
@token_required
def create_business():
    response, status = business_service.create_business(get_store(), g.user, json_body())
    return jsonify(response), status

@business_bp.route('/<business_id>', methods=['GET'])
@token_required
def get_business(business_id):
    response, status = business_service.get_business(get_store(), g.user, business_id)
    return jsonify(response), status

@business_bp.route('/<business_id>', methods=['PUT'])
@token_required
def update_business(business_id):
    response, status = business_service.update_business(get_store(), g.user, business_id, json_body())
    return jsonify(response), status

@business_bp.route('/<business_id>', methods=['DELETE'])
@token_required
def delete_business(business_id):
    response, status = business_service.delete_business(get_store(), g.user, business_id)
    return jsonify(response), status
