import logging

import requests

from .exceptions import MetadataRequestError

# The endpoint is link-local, a slow answer means it is not coming.
READ_TIMEOUT = 1
MAX_ATTEMPTS = 2


class MetadataFetcher:
    """GET the container metadata document, retrying a failed attempt once."""

    def __init__(self, session=None, timeout: float = READ_TIMEOUT, logger=None):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def _request(self, uri):
        try:
            response = self.session.get(uri, timeout=self.timeout)
        except requests.RequestException as e:
            raise MetadataRequestError(f"Request to {uri} failed: {e}")

        if response.status_code != 200:
            raise MetadataRequestError(
                f"Unsuccessful response::{response.status_code}::{response.reason}",
                status_code=response.status_code,
            )
        return response.text

    def fetch(self, uri):
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._request(uri)
            except MetadataRequestError as e:
                if attempt < MAX_ATTEMPTS:
                    self.logger.debug(f"Attempt {attempt} failed, retrying: {e}")
                    continue
                self.logger.warning(f"Failed to complete request due to: {e}.")
                raise
