import os
from urllib.parse import urlparse, unquote
from dotenv import load_dotenv

load_dotenv()


def _db_config_from_env():
    database_url = os.getenv('DATABASE_URL')
    if database_url:
        parsed = urlparse(database_url)
        return {
            'host': parsed.hostname or 'localhost',
            'port': parsed.port or 3306,
            'user': unquote(parsed.username or ''),
            'password': unquote(parsed.password or ''),
            'database': parsed.path.lstrip('/')
        }
    return {
        'host': os.getenv('DB_HOST', 'localhost'),
        'port': int(os.getenv('DB_PORT', 3306)),
        'user': os.getenv('DB_USER'),
        'password': os.getenv('DB_PASSWORD'),
        'database': os.getenv('DB_NAME')
    }


def _env_flag(name, default):
    return os.getenv(name, default).lower() in ('true', '1', 't')


class Config:
    SECRET_KEY = os.getenv('JWT_SECRET') or os.getenv('SECRET_KEY')
    DB_CONFIG = _db_config_from_env()
    INIT_DB = _env_flag('INIT_DB', 'True')
    BACKEND_HOST = os.getenv('BACKEND_HOST', 'localhost')
    BACKEND_PORT = int(os.getenv('PORT') or os.getenv('BACKEND_PORT', 3000))
    DEBUG = _env_flag('DEBUG', 'False')
    ENVIRONMENT = os.getenv('ENVIRONMENT', 'DEV')
    LOG_DIR = os.getenv('LOG_DIR')

    API_PREFIX = os.getenv('API_PREFIX', '/api/v1')
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv('CORS_ORIGINS', 'http://localhost:3001,http://127.0.0.1:3001').split(',')
        if origin.strip()
    ]
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024

    OPENROUTER_API_KEY = os.getenv('OPENROUTER_API_KEY', '')
    OPENROUTER_API_URL = os.getenv('OPENROUTER_API_URL', 'https://openrouter.ai/api/v1')
    CHAT_MODEL = os.getenv('CHAT_MODEL', 'deepseek/deepseek-chat')

    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
    OPENAI_API_URL = os.getenv('OPENAI_API_URL', 'https://api.openai.com/v1')
    IMAGE_MODEL = os.getenv('IMAGE_MODEL', 'dall-e-3')

    CLOUDINARY_CLOUD_NAME = os.getenv('CLOUDINARY_CLOUD_NAME', '')
    CLOUDINARY_API_KEY = os.getenv('CLOUDINARY_API_KEY', '')
    CLOUDINARY_API_SECRET = os.getenv('CLOUDINARY_API_SECRET', '')
    CLOUDINARY_FOLDER = os.getenv('CLOUDINARY_FOLDER', 'ai-branding')

    UPSTREAM_TIMEOUT = float(os.getenv('UPSTREAM_TIMEOUT', 60))
    MAX_IMAGE_BYTES = int(os.getenv('MAX_IMAGE_BYTES', 20 * 1024 * 1024))

    RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '100 per minute')
    RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', 'True')
