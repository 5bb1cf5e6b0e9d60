from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask import jsonify

# Define limiter at module level (without app)
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://"
)


def init_limiter(app):
    app.config.setdefault('RATELIMIT_DEFAULT', '100 per minute')
    limiter.init_app(app)

    @app.errorhandler(429)
    def ratelimit_handler(e):
        return jsonify({
            'ok': False,
            'error': {
                'type': 'TooManyRequests',
                'message': 'There is a lot of traffic. Please wait or try again.'
            }
        }), 429

    return limiter
