import logging

from ..models.serializers import to_api, to_api_list
from ..utils.responses import success
from ..utils.validation import require_fields, require_strings, is_blank
from .ownership import get_owned_business

logger = logging.getLogger(__name__)


def list_businesses(store, user):
    return success(to_api_list(store.list_businesses(user['id'])))


def create_business(store, user, data):
    require_fields(data, 'name', 'field', message='Business name and field are required')
    require_strings(data, 'name', 'field', 'description', nullable=('description',))

    business = store.create_business(
        user['id'],
        data['name'],
        data['field'],
        description=data.get('description'),
        color_palette=data.get('colorPalette')
    )
    logger.info(f"Business {business['id']} created for user {user['id']}")
    return success(to_api(business), 201)


def get_business(store, user, business_id):
    return success(to_api(get_owned_business(store, business_id, user)))


def update_business(store, user, business_id, data):
    get_owned_business(store, business_id, user)
    require_strings(data, 'name', 'field', 'description', nullable=('name', 'field', 'description'))

    changes = {}
    # name and field cannot be cleared; only a non-empty value replaces them.
    for key in ('name', 'field'):
        if key in data and not is_blank(data[key]):
            changes[key] = data[key]
    if 'description' in data:
        changes['description'] = data['description']
    if 'colorPalette' in data:
        changes['color_palette'] = data['colorPalette']

    business = store.update_business(business_id, changes)
    return success(to_api(business))


def delete_business(store, user, business_id):
    get_owned_business(store, business_id, user)
    store.delete_business(business_id)
    logger.info(f"Business {business_id} deleted by user {user['id']}")
    return success(message='Business deleted successfully')
