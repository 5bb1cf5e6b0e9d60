from flask import Blueprint, jsonify, request, g
from ..utils.auth import token_required
from ..services.chat_service import complete_chat, save_conversation, get_conversation_history
from ..utils.ai_clients import get_chat_client
from ..utils.database import get_store
from ..utils.validation import json_body

chat_bp = Blueprint('chat', __name__)

# Anonymous on purpose: the public assistant is usable before sign-up.
@chat_bp.route('', methods=['POST'])
def chat():
    response, status = complete_chat(get_chat_client(), json_body(), referer=request.headers.get('Origin'))
    return jsonify(response), status

@chat_bp.route('/save', methods=['POST'])
@token_required
def save():
    response, status = save_conversation(get_store(), g.user, json_body())
    return jsonify(response), status

@chat_bp.route('/history', methods=['GET'])
@token_required
def history():
    response, status = get_conversation_history(get_store(), g.user, request.args.get('businessId'))
    return jsonify(response), status
