import logging
import jwt
import bcrypt
from datetime import datetime, timedelta, timezone
from flask import current_app

from ..models.serializers import public_user
from ..utils.database import DuplicateRecord
from ..utils.errors import ValidationError, InvalidCredentials
from ..utils.responses import success
from ..utils.validation import require_strings

logger = logging.getLogger(__name__)

TOKEN_LIFETIME = timedelta(days=30)
BCRYPT_ROUNDS = 10
# bcrypt only looks at the first 72 bytes and refuses longer input.
MAX_PASSWORD_BYTES = 72

# Checked against when the email is unknown so both login failures take the same time.
DUMMY_HASH = bcrypt.hashpw(b'dummy-password', bcrypt.gensalt(rounds=BCRYPT_ROUNDS))


def generate_token(user_id):
    now = datetime.now(timezone.utc)
    return jwt.encode({
        'user_id': user_id,
        'iat': now,
        'exp': now + TOKEN_LIFETIME
    }, current_app.config['SECRET_KEY'], algorithm="HS256")


def password_too_long(password):
    return len(password.encode('utf-8')) > MAX_PASSWORD_BYTES


def hash_password(password):
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode('utf-8')


def verify_password(password, password_hash):
    return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))


def _auth_payload(user):
    return {'token': generate_token(user['id']), 'user': public_user(user)}


def register_user(store, data):
    name = data.get('name')
    email = data.get('email')
    password = data.get('password')

    if not isinstance(email, str) or not isinstance(password, str) or not email.strip() or not password:
        raise ValidationError('Please provide email and password')
    require_strings(data, 'name', nullable=('name',))
    if password_too_long(password):
        raise ValidationError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes')
    email = email.strip()

    if store.get_user_by_email(email):
        logger.info("Registration rejected, email already in use")
        raise ValidationError('User already exists')

    try:
        user = store.create_user(name or None, email, hash_password(password))
    except DuplicateRecord:
        raise ValidationError('User already exists')

    logger.info(f"User created: {user['id']}")
    return success(_auth_payload(user), 201)


def login_user(store, data):
    email = data.get('email')
    password = data.get('password')

    if not isinstance(email, str) or not isinstance(password, str) or password_too_long(password):
        raise InvalidCredentials('Invalid credentials')

    user = store.get_user_by_email(email.strip())
    if not user:
        bcrypt.checkpw(password.encode('utf-8'), DUMMY_HASH)
        raise InvalidCredentials('Invalid credentials')
    if not verify_password(password, user['password_hash']):
        raise InvalidCredentials('Invalid credentials')

    logger.info(f"Login successful for user {user['id']}")
    return success(_auth_payload(user))
