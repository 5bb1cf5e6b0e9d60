from datetime import datetime


def _camel(key):
    head, *rest = key.split('_')
    return head + ''.join(part.title() for part in rest)


def to_api(row, exclude=()):
    """Convert a snake_case store row into the camelCase shape the API returns."""
    if row is None:
        return None
    result = {}
    for key, value in row.items():
        if key in exclude:
            continue
        if isinstance(value, datetime):
            value = value.isoformat()
        result[_camel(key)] = value
    return result


def to_api_list(rows, exclude=()):
    return [to_api(row, exclude) for row in rows]


def public_user(user):
    return {'id': user['id'], 'name': user.get('name'), 'email': user['email']}


def user_profile(user):
    return to_api(user, exclude=('password_hash', 'updated_at'))


def business_summary(business):
    if business is None:
        return None
    return {'id': business['id'], 'name': business['name'], 'field': business['field']}
