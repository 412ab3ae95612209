import logging
import os
import socket
import threading
from types import MappingProxyType

from .config_loader import ConfigLoader, PluginConfig
from .endpoint import resolve_metadata_endpoint
from .fetcher import MetadataFetcher
from .metadata_mapper import hostname_metadata, parse_metadata


def _freeze(metadata):
    return MappingProxyType(
        {group: MappingProxyType(dict(fields)) for group, fields in metadata.items()}
    )


class ECSPlugin:
    """
    Resolves the ECS container metadata recorded on trace segments. The pipeline
    runs on the first call to aws() only; whatever it produced, including the
    empty result of a failure, is handed out to every later caller.
    """

    ORIGIN = "AWS::ECS::Container"

    def __init__(
        self,
        config: PluginConfig = None,
        fetcher=None,
        environ=None,
        gethostname=socket.gethostname,
        logger=None,
    ):
        self.config = config or PluginConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.fetcher = fetcher or MetadataFetcher(
            timeout=self.config.read_timeout, logger=self.logger
        )
        self.environ = environ if environ is not None else os.environ
        self.gethostname = gethostname
        self._lock = threading.Lock()
        self._resolved = False
        self._metadata = None

    @classmethod
    def from_config_file(cls, config_path, **kwargs):
        return cls(config=ConfigLoader(config_path).load_config(), **kwargs)

    def hostname(self):
        return self.config.hostname or self.gethostname()

    def _resolve(self):
        metadata_uri = resolve_metadata_endpoint(
            self.environ, variable=self.config.environment_variable
        )
        if metadata_uri is None:
            return hostname_metadata(self.hostname())

        json_str = self.fetcher.fetch(metadata_uri)
        return parse_metadata(json_str, self.hostname())

    def aws(self):
        if self._resolved:
            return self._metadata

        with self._lock:
            if not self._resolved:
                try:
                    metadata = self._resolve()
                except Exception as e:
                    self.logger.warning(
                        f"cannot get the ecs container metadata due to: {e}."
                    )
                    metadata = {}
                self._metadata = _freeze(metadata)
                self._resolved = True
        return self._metadata


_default_plugin = None
_default_plugin_lock = threading.Lock()


def get_default_plugin():
    global _default_plugin
    if _default_plugin is None:
        with _default_plugin_lock:
            if _default_plugin is None:
                _default_plugin = ECSPlugin()
    return _default_plugin


def aws():
    """Process-wide ECS metadata for trace segments."""
    return get_default_plugin().aws()
