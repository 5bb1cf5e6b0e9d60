import base64
import logging

import requests
from flask import current_app

from .errors import UpstreamError

logger = logging.getLogger(__name__)

CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1000
CHAT_TITLE = 'BrandFlow AI Assistant'
DOWNLOAD_CHUNK_SIZE = 64 * 1024


def get_chat_client():
    return current_app.extensions['chat_client']


def get_image_client():
    return current_app.extensions['image_client']


def _error_message(response, default):
    try:
        payload = response.json()
    except ValueError:
        return default
    if isinstance(payload, dict):
        error = payload.get('error')
        if isinstance(error, dict) and error.get('message'):
            return error['message']
        if isinstance(error, str) and error:
            return error
    return default


def _post_json(session, url, api_key, payload, timeout, headers=None):
    all_headers = {
        'Content-Type': 'application/json',
        'Authorization': f'Bearer {api_key}'
    }
    all_headers.update(headers or {})
    try:
        return session.post(url, json=payload, headers=all_headers, timeout=timeout)
    except requests.Timeout as e:
        raise UpstreamError(f'Upstream request timed out: {url}', 504) from e
    except requests.RequestException as e:
        raise UpstreamError(f'Upstream request failed: {e}') from e


class ChatCompletionClient:
    """Forwards role-tagged messages to an OpenRouter-compatible chat endpoint."""

    def __init__(self, api_key, base_url, model, timeout=60, default_referer=None, session=None):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.timeout = timeout
        self.default_referer = default_referer
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        origins = config.get('CORS_ORIGINS') or []
        return cls(
            config['OPENROUTER_API_KEY'],
            config['OPENROUTER_API_URL'],
            config['CHAT_MODEL'],
            timeout=config['UPSTREAM_TIMEOUT'],
            default_referer=origins[0] if origins else None
        )

    def complete(self, messages, referer=None):
        headers = {'X-Title': CHAT_TITLE}
        if referer or self.default_referer:
            headers['HTTP-Referer'] = referer or self.default_referer
        response = _post_json(
            self.session,
            f'{self.base_url}/chat/completions',
            self.api_key,
            {
                'model': self.model,
                'messages': messages,
                'temperature': CHAT_TEMPERATURE,
                'max_tokens': CHAT_MAX_TOKENS,
            },
            self.timeout,
            headers=headers
        )
        if not response.ok:
            message = _error_message(response, 'Failed to get AI response')
            logger.warning(f"Chat completion API error {response.status_code}: {message}")
            raise UpstreamError(message, response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError('Chat completion API returned invalid JSON') from e


class ImageGenerationClient:
    """Generates images through an OpenAI-compatible endpoint and downloads the result."""

    def __init__(self, api_key, base_url, model, timeout=60, max_image_bytes=20 * 1024 * 1024, session=None):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.timeout = timeout
        self.max_image_bytes = max_image_bytes
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        return cls(
            config['OPENAI_API_KEY'],
            config['OPENAI_API_URL'],
            config['IMAGE_MODEL'],
            timeout=config['UPSTREAM_TIMEOUT'],
            max_image_bytes=config['MAX_IMAGE_BYTES']
        )

    def generate(self, prompt, size):
        """Request exactly one image and return its (time-limited) URL."""
        response = _post_json(
            self.session,
            f'{self.base_url}/images/generations',
            self.api_key,
            {
                'model': self.model,
                'prompt': prompt,
                'n': 1,
                'size': size,
                'quality': 'standard',
                'response_format': 'url',
            },
            self.timeout
        )
        if not response.ok:
            message = _error_message(response, 'Unknown error')
            logger.warning(f"Image generation API error {response.status_code}: {message}")
            raise UpstreamError(message, response.status_code)
        try:
            return response.json()['data'][0]['url']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError('Image generation API returned no image') from e

    def fetch_as_data_url(self, url):
        """Download ``url`` into memory, bounded by ``max_image_bytes``, as a base64 data URL."""
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                if not response.ok:
                    raise UpstreamError(f'Failed to download generated image ({response.status_code})')
                content_type = response.headers.get('Content-Type', 'image/png').split(';')[0].strip()
                buffer = bytearray()
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    buffer.extend(chunk)
                    if len(buffer) > self.max_image_bytes:
                        raise UpstreamError('Generated image exceeds the maximum allowed size')
        except requests.Timeout as e:
            raise UpstreamError('Timed out downloading generated image', 504) from e
        except requests.RequestException as e:
            raise UpstreamError(f'Failed to download generated image: {e}') from e

        if not content_type.startswith('image/'):
            content_type = 'image/png'
        encoded = base64.b64encode(bytes(buffer)).decode('ascii')
        return f'data:{content_type};base64,{encoded}'
