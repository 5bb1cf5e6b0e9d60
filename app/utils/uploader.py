import logging

import cloudinary
import cloudinary.uploader
from flask import current_app

from .errors import UploadFailed

logger = logging.getLogger(__name__)


def get_uploader():
    return current_app.extensions['uploader']


class AssetUploader:
    """Re-hosts data URLs and remote URLs on Cloudinary under a fixed folder."""

    def __init__(self, cloud_name, api_key, api_secret, folder='ai-branding'):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder

    @classmethod
    def from_config(cls, config):
        return cls(
            config['CLOUDINARY_CLOUD_NAME'],
            config['CLOUDINARY_API_KEY'],
            config['CLOUDINARY_API_SECRET'],
            folder=config['CLOUDINARY_FOLDER']
        )

    @property
    def configured(self):
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def upload(self, source):
        """Upload ``source`` (``data:`` URL or http(s) URL) and return its secure URL."""
        if not self.configured:
            raise UploadFailed('Failed to upload media: Cloudinary is not configured')

        logger.info("Starting Cloudinary upload")
        try:
            result = cloudinary.uploader.upload(
                source,
                resource_type='auto',
                folder=self.folder,
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                secure=True
            )
        except Exception as e:
            logger.error(f"Cloudinary upload error: {e}")
            raise UploadFailed(f'Failed to upload media: {e}') from e

        secure_url = result.get('secure_url')
        if not secure_url:
            raise UploadFailed('Failed to upload media: no URL returned')
        logger.info(f"Cloudinary upload successful: {secure_url}")
        return secure_url
