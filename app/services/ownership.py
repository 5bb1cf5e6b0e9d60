from ..utils.errors import NotFound, Forbidden


def get_owned(fetch, resource_id, user, label):
    """Load a single resource and make sure ``user`` owns it.

    Absence is reported before ownership, so a missing id is always a 404
    regardless of who asks.
    """
    resource = fetch(str(resource_id)) if resource_id else None
    if not resource:
        raise NotFound(f'{label} not found')
    if resource['owner_id'] != user['id']:
        raise Forbidden(f'Not authorized to access this {label.lower()}')
    return resource


def get_owned_business(store, business_id, user):
    return get_owned(store.get_business, business_id, user, 'Business')
