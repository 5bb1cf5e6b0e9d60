from flask import Blueprint, jsonify, request, g
from ..utils.auth import token_required
from ..services import marketing_plan_service
from ..utils.database import get_store
from ..utils.validation import json_body

marketing_plan_bp = Blueprint('marketing_plan', __name__)

@marketing_plan_bp.route('', methods=['GET'])
@token_required
def list_marketing_plans():
    response, status = marketing_plan_service.list_marketing_plans(
        get_store(), g.user, business_id=request.args.get('businessId')
    )
    return jsonify(response), status

@marketing_plan_bp.route('', methods=['POST'])
@token_required
def create_marketing_plan():
    response, status = marketing_plan_service.create_marketing_plan(get_store(), g.user, json_body())
    return jsonify(response), status

@marketing_plan_bp.route('/<plan_id>', methods=['GET'])
@token_required
def get_marketing_plan(plan_id):
    response, status = marketing_plan_service.get_marketing_plan(get_store(), g.user, plan_id)
    return jsonify(response), status

@marketing_plan_bp.route('/<plan_id>', methods=['PUT'])
@token_required
def update_marketing_plan(plan_id):
    response, status = marketing_plan_service.update_marketing_plan(get_store(), g.user, plan_id, json_body())
    return jsonify(response), status

@marketing_plan_bp.route('/<plan_id>', methods=['DELETE'])
@token_required
def delete_marketing_plan(plan_id):
    response, status = marketing_plan_service.delete_marketing_plan(get_store(), g.user, plan_id)
    return jsonify(response), status
