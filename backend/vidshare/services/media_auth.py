from functools import lru_cache
from typing import Any, Dict, Optional

from imagekitio import ImageKit

from ..core.config import settings
from ..core.exceptions import ConfigurationError


@lru_cache(maxsize=4)
def _imagekit_client(private_key: str, public_key: str, url_endpoint: str) -> ImageKit:
    return ImageKit(private_key=private_key, public_key=public_key, url_endpoint=url_endpoint)


def get_imagekit() -> ImageKit:
    if not (settings.imagekit_private_key and settings.imagekit_public_key and settings.imagekit_url_endpoint):
        raise ConfigurationError("ImageKit keys are not configured")
    return _imagekit_client(
        settings.imagekit_private_key,
        settings.imagekit_public_key,
        settings.imagekit_url_endpoint,
    )


def get_authentication_parameters(token: Optional[str] = None, expire: Optional[int] = None) -> Dict[str, Any]:
    """Short-lived ``{token, expire, signature}`` a client uses to upload straight to ImageKit."""
    return get_imagekit().get_authentication_parameters(token=token or "", expire=expire or 0)
