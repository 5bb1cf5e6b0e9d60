from flask import Blueprint, jsonify, request, g
from ..utils.auth import token_required
from ..services import media_service
from ..utils.database import get_store
from ..utils.uploader import get_uploader
from ..utils.validation import json_body

media_bp = Blueprint('media', __name__)

@media_bp.route('', methods=['GET'])
@token_required
def list_media_files():
    response, status = media_service.list_media_files(
        get_store(), g.user,
        business_id=request.args.get('businessId'),
        media_type=request.args.get('type')
    )
    return jsonify(response), status

@media_bp.route('', methods=['POST'])
@token_required
def create_media_file():
    response, status = media_service.create_media_file(get_store(), get_uploader(), g.user, json_body())
    return jsonify(response), status

@media_bp.route('/upload', methods=['POST'])
@token_required
def upload_media_file():
    response, status = media_service.upload_media_file(get_store(), get_uploader(), g.user, json_body())
    return jsonify(response), status

@media_bp.route('/<media_id>', methods=['DELETE'])
@token_required
def delete_media_file(media_id):
    response, status = media_service.delete_media_file(get_store(), g.user, media_id)
    return jsonify(response), status
