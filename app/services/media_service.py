import logging

from ..models.serializers import to_api, to_api_list
from ..utils.errors import ValidationError
from ..utils.responses import success
from ..utils.validation import require_fields, require_strings, is_blank
from .ownership import get_owned, get_owned_business

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = 'image'


def _is_data_url(value):
    return isinstance(value, str) and value.startswith('data:')


def list_media_files(store, user, business_id=None, media_type=None):
    if business_id:
        get_owned_business(store, business_id, user)
    files = store.list_media_files(user['id'], business_id=business_id or None, media_type=media_type or None)
    return success(to_api_list(files))


def create_media_file(store, uploader, user, data):
    """Store a media file from ``dataUrl`` or ``url``; data URLs are re-hosted first."""
    require_strings(data, 'dataUrl', 'url', 'type', nullable=('dataUrl', 'url', 'type'))
    source = data.get('dataUrl') or data.get('url')
    if is_blank(source):
        raise ValidationError('Media data is required')
    media_type = data.get('type') or DEFAULT_MEDIA_TYPE

    business_id = data.get('businessId')
    if business_id:
        business_id = get_owned_business(store, business_id, user)['id']

    url = uploader.upload(source) if _is_data_url(source) else source
    media_file = store.create_media_file(user['id'], url, media_type, business_id=business_id or None)
    return success(to_api(media_file), 201)


def upload_media_file(store, uploader, user, data):
    require_fields(data, 'dataUrl', 'type', 'businessId',
                   message='Missing required fields: dataUrl, type, or businessId')
    require_strings(data, 'dataUrl', 'type')
    business = get_owned_business(store, data['businessId'], user)

    url = uploader.upload(data['dataUrl'])
    media_file = store.create_media_file(user['id'], url, data['type'], business_id=business['id'])
    logger.info(f"Media file {media_file['id']} uploaded for business {business['id']}")
    return success(to_api(media_file), 201, message='Media file uploaded successfully')


def delete_media_file(store, user, media_id):
    get_owned(store.get_media_file, media_id, user, 'Media file')
    store.delete_media_file(media_id)
    return success(message='Media file deleted successfully')
