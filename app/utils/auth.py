from functools import wraps
from flask import request, g, current_app
import jwt

from .database import get_store
from .errors import Unauthenticated
from ..models.serializers import public_user


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        header = request.headers.get('Authorization', '')
        scheme, _, token = header.partition(' ')
        if scheme != 'Bearer' or not token.strip():
            raise Unauthenticated('Not authorized, no token')

        try:
            data = jwt.decode(token.strip(), current_app.config['SECRET_KEY'], algorithms=["HS256"])
            user_id = data['user_id']
        except (jwt.InvalidTokenError, KeyError, TypeError):
            raise Unauthenticated('Not authorized, token failed')

        user = get_store().get_user_by_id(user_id)
        if not user:
            raise Unauthenticated('Not authorized, user not found')

        g.user = public_user(user)
        return f(*args, **kwargs)
    return decorated
