from ..models.serializers import user_profile
from ..utils.errors import NotFound
from ..utils.responses import success


def get_user_details(store, user):
    record = store.get_user_by_id(user['id'])

    if not record:
        raise NotFound('User not found')

    return success(user_profile(record))
