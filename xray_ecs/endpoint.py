import logging
import os
from urllib.parse import urlparse

METADATA_BASE_URL_ENVIRONMENT_VARIABLE = "ECS_CONTAINER_METADATA_URI_V4"

logger = logging.getLogger(__name__)


def resolve_metadata_endpoint(
    environ=None, variable: str = METADATA_BASE_URL_ENVIRONMENT_VARIABLE
):
    """Return the metadata endpoint URI from the environment, or None."""
    if environ is None:
        environ = os.environ

    metadata_uri = environ.get(variable)
    if not metadata_uri:
        logger.debug(f"{variable} is not set")
        return None

    try:
        parsed = urlparse(metadata_uri)
    except ValueError as e:
        logger.debug(f"{variable} is not a valid URI: {e}")
        return None

    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        logger.debug(f"{variable} is not a valid URI: {metadata_uri}")
        return None

    logger.debug(f"metadata_uri is {metadata_uri}")
    return metadata_uri
