from flask import Flask, jsonify
from flask_cors import CORS
from .config.config import Config
from .utils.ai_clients import ChatCompletionClient, ImageGenerationClient
from .utils.database import MySQLStore
from .utils.errors import register_error_handlers
from .utils.limiter import init_limiter
from .utils.uploader import AssetUploader
from .api.auth import auth_bp
from .api.user import user_bp
from .api.business import business_bp
from .api.media import media_bp
from .api.marketing_plan import marketing_plan_bp
from .api.chat import chat_bp
from .api.logo import logo_bp


def create_app(config_overrides=None, store=None, chat_client=None, image_client=None, uploader=None):
    """Build the application; any collaborator passed in replaces the configured one."""
    import logging
    from logging.handlers import RotatingFileHandler
    import os

    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Production logging setup
    if not app.debug and not app.testing:
        log_dir = app.config.get('LOG_DIR') or os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'logs')
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(os.path.join(log_dir, 'app.log'), maxBytes=10*1024*1024, backupCount=5)
        file_handler.setLevel(logging.INFO)
        formatter = logging.Formatter('[%(asctime)s] %(levelname)s in %(module)s: %(message)s')
        file_handler.setFormatter(formatter)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(logging.INFO)
        app.logger.info('Production logging is enabled.')

    if not app.config.get('SECRET_KEY'):
        raise RuntimeError('JWT_SECRET (or SECRET_KEY) must be set')

    CORS(
        app,
        origins=app.config['CORS_ORIGINS'],
        supports_credentials=True,
        methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
        allow_headers=['Content-Type', 'Authorization']
    )

    app.extensions['store'] = store or MySQLStore(app.config['DB_CONFIG'])
    app.extensions['chat_client'] = chat_client or ChatCompletionClient.from_config(app.config)
    app.extensions['image_client'] = image_client or ImageGenerationClient.from_config(app.config)
    app.extensions['uploader'] = uploader or AssetUploader.from_config(app.config)
    app.teardown_appcontext(app.extensions['store'].close)

    if not app.extensions['uploader'].configured:
        app.logger.warning('Cloudinary credentials are missing; uploads will fail.')

    # Create tables within app context
    if app.config['INIT_DB']:
        with app.app_context():
            app.extensions['store'].init_schema()
            app.logger.info("Database schema initialized.")

    init_limiter(app)
    register_error_handlers(app)

    prefix = app.config['API_PREFIX'].rstrip('/')
    app.register_blueprint(auth_bp, url_prefix=f'{prefix}/auth')
    app.register_blueprint(user_bp, url_prefix=f'{prefix}/users')
    app.register_blueprint(business_bp, url_prefix=f'{prefix}/businesses')
    app.register_blueprint(media_bp, url_prefix=f'{prefix}/media-files')
    app.register_blueprint(marketing_plan_bp, url_prefix=f'{prefix}/marketing-plans')
    app.register_blueprint(chat_bp, url_prefix=f'{prefix}/chat')
    app.register_blueprint(logo_bp, url_prefix=f'{prefix}/logos')

    @app.route('/')
    def index():
        return jsonify({'ok': True, 'message': 'Welcome to AI Branding API'})

    app.logger.info("Backend is running.")
    return app
