import logging

from ..models.serializers import to_api, to_api_list
from ..utils.errors import ValidationError
from ..utils.responses import success
from ..utils.validation import require_fields, require_strings
from .ownership import get_owned_business

logger = logging.getLogger(__name__)


def complete_chat(chat_client, data, referer=None):
    """Forward ``messages`` to the chat-completion API and return its payload as-is."""
    messages = data.get('messages')
    if not isinstance(messages, list) or not messages:
        raise ValidationError('Invalid request: messages must be a non-empty array')
    if not all(isinstance(message, dict) for message in messages):
        raise ValidationError('Invalid request: every message must be an object')

    logger.info(f"Processing chat request with {len(messages)} messages")
    return success(chat_client.complete(messages, referer=referer))


def save_conversation(store, user, data):
    require_fields(
        data, 'promptContent', 'responseContent', 'businessId',
        message='Missing required fields: promptContent, responseContent, and businessId'
    )
    require_strings(data, 'promptContent', 'responseContent')
    business = get_owned_business(store, data['businessId'], user)

    conversation = store.create_conversation(
        user['id'], business['id'], data['promptContent'], data['responseContent']
    )
    return success(to_api(conversation), 201)


def get_conversation_history(store, user, business_id):
    if not business_id:
        raise ValidationError('Missing businessId query parameter')
    business = get_owned_business(store, business_id, user)
    return success(to_api_list(store.list_conversations(user['id'], business['id'])))
