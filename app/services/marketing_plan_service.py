from ..models.serializers import to_api, to_api_list
from ..utils.errors import ValidationError
from ..utils.responses import success
from ..utils.validation import require_fields, require_strings, is_blank
from .ownership import get_owned, get_owned_business


def _get_owned_plan(store, user, plan_id):
    return get_owned(store.get_marketing_plan, plan_id, user, 'Marketing plan')


def list_marketing_plans(store, user, business_id=None):
    if business_id:
        get_owned_business(store, business_id, user)
    return success(to_api_list(store.list_marketing_plans(user['id'], business_id or None)))


def create_marketing_plan(store, user, data):
    require_fields(data, 'content', 'businessId', message='Content and businessId are required')
    require_strings(data, 'content')
    business = get_owned_business(store, data['businessId'], user)

    plan = store.create_marketing_plan(user['id'], business['id'], data['content'])
    return success(to_api(plan), 201)


def get_marketing_plan(store, user, plan_id):
    return success(to_api(_get_owned_plan(store, user, plan_id)))


def update_marketing_plan(store, user, plan_id, data):
    plan = _get_owned_plan(store, user, plan_id)

    if 'content' not in data:
        return success(to_api(plan))
    require_strings(data, 'content')
    if is_blank(data['content']):
        raise ValidationError('Content cannot be empty')

    return success(to_api(store.update_marketing_plan(plan_id, data['content'])))


def delete_marketing_plan(store, user, plan_id):
    _get_owned_plan(store, user, plan_id)
    store.delete_marketing_plan(plan_id)
    return success(message='Marketing plan deleted successfully')
