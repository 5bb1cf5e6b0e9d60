from flask import request

from .errors import ValidationError


def json_body():
    """Return the request body as a dict, treating a missing body as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(data, *fields, message=None):
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")


def require_strings(data, *fields, nullable=()):
    """Reject supplied values that are not strings; ``nullable`` fields may also be null."""
    for field in fields:
        if field not in data:
            continue
        value = data[field]
        if value is None and field in nullable:
            continue
        if not isinstance(value, str):
            raise ValidationError(f'{field} must be a string')
