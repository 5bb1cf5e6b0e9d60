"""Logo generation on top of the image API, the asset host and the store.

Generated images come back from the image API as short-lived URLs, so each
one is downloaded, turned into a data URL and re-hosted before a ``logo``
media file is recorded.
"""
import logging

from ..models.serializers import to_api, to_api_list, business_summary
from ..utils.errors import ValidationError, NotFound
from ..utils.responses import success
from ..utils.validation import require_fields, require_strings
from .ownership import get_owned, get_owned_business

logger = logging.getLogger(__name__)

LOGO_TYPE = 'logo'
DEFAULT_STYLE = 'modern'
DEFAULT_SIZE = '1024x1024'
ALLOWED_SIZES = ('1024x1024', '1792x1024', '1024x1792')

LOGO_PROMPT = (
    "Create a professional {style} logo for {name}, a {field} business. {prompt}. "
    "The logo should be clean, scalable, and suitable for business use. "
    "No text or words in the image."
)
VARIATION_PROMPT = (
    "Create a {style} logo variation for {name}, a {field} business. "
    "Make it different but maintain the same professional quality. "
    "No text or words in the image."
)


def build_logo_prompt(business, prompt, style):
    return LOGO_PROMPT.format(style=style, name=business['name'], field=business['field'], prompt=prompt)


def build_variation_prompt(business, style):
    return VARIATION_PROMPT.format(style=style, name=business['name'], field=business['field'])


def _render_and_host(image_client, uploader, prompt, size):
    image_url = image_client.generate(prompt, size)
    logger.info("Image generated, re-hosting on the asset host")
    data_url = image_client.fetch_as_data_url(image_url)
    return uploader.upload(data_url)


def _get_owned_logo(store, user, logo_id):
    logo = get_owned(store.get_media_file, logo_id, user, 'Logo')
    if logo['type'] != LOGO_TYPE:
        raise NotFound('Logo not found')
    return logo


def generate_logo(store, image_client, uploader, user, data):
    require_fields(data, 'prompt', 'businessId', message='Prompt and businessId are required')
    require_strings(data, 'prompt', 'style', 'size', nullable=('style', 'size'))
    style = data.get('style') or DEFAULT_STYLE
    size = data.get('size') or DEFAULT_SIZE
    if size not in ALLOWED_SIZES:
        raise ValidationError(f"size must be one of: {', '.join(ALLOWED_SIZES)}")

    business = get_owned_business(store, data['businessId'], user)
    enhanced_prompt = build_logo_prompt(business, data['prompt'], style)

    hosted_url = _render_and_host(image_client, uploader, enhanced_prompt, size)
    logo = store.create_media_file(user['id'], hosted_url, LOGO_TYPE, business_id=business['id'])
    logger.info(f"Logo {logo['id']} generated for business {business['id']}")

    return success({
        'id': logo['id'],
        'url': hosted_url,
        'originalPrompt': data['prompt'],
        'enhancedPrompt': enhanced_prompt,
        'style': style,
        'size': size,
        'business': business_summary(business)
    }, 201, message='Logo generated successfully')


def list_user_logos(store, user):
    logos = store.list_media_files(user['id'], media_type=LOGO_TYPE)
    businesses = {business['id']: business for business in store.list_businesses(user['id'])}

    result = []
    for logo in logos:
        item = to_api(logo)
        item['business'] = business_summary(businesses.get(logo.get('business_id')))
        result.append(item)
    return success(result)


def list_business_logos(store, user, business_id):
    business = get_owned_business(store, business_id, user)
    logos = store.list_media_files(user['id'], business_id=business['id'], media_type=LOGO_TYPE)
    return success(to_api_list(logos))


def delete_logo(store, user, logo_id):
    _get_owned_logo(store, user, logo_id)
    store.delete_media_file(logo_id)
    return success(message='Logo deleted successfully')


def regenerate_logo(store, image_client, uploader, user, logo_id, data):
    original = _get_owned_logo(store, user, logo_id)
    require_strings(data, 'style', nullable=('style',))
    business = store.get_business(original['business_id']) if original.get('business_id') else None
    if not business:
        raise ValidationError('Logo is not linked to a business')

    style = data.get('style') or DEFAULT_STYLE
    prompt = build_variation_prompt(business, style)

    hosted_url = _render_and_host(image_client, uploader, prompt, DEFAULT_SIZE)
    variation = store.create_media_file(user['id'], hosted_url, LOGO_TYPE, business_id=business['id'])
    logger.info(f"Logo variation {variation['id']} generated from {original['id']}")

    return success({
        'id': variation['id'],
        'url': hosted_url,
        'originalLogoId': original['id'],
        'style': style
    }, 201, message='Logo variation generated successfully')
