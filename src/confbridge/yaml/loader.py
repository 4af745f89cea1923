"""YAML loader: turns YAML files from a host file set into root Values."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from confbridge.adapters.base import Loader
from confbridge.errors import PathNotFoundError
from confbridge.models.config import LoaderConfig
from confbridge.yaml.value import YAMLValue, parse

logger = logging.getLogger(__name__)

NAME = "yaml"
CONFIG_PATH_PATTERN = re.compile(r".*\.(yaml|yml)")


class YAMLLoader(Loader):
    """Loads single YAML files (`*.yaml`, `*.yml`) into YAMLValues.

    Args:
        config: Parsing and iteration options. Defaults to LoaderConfig().
    """

    def __init__(self, config: LoaderConfig | None = None) -> None:
        self.config = config or LoaderConfig()

    def type(self) -> str:
        return NAME

    def path_pattern(self) -> re.Pattern[str]:
        return CONFIG_PATH_PATTERN

    def allow_dir(self) -> bool:
        return False

    def load(self, path: str, files: Mapping[str, bytes | str]) -> YAMLValue:
        """Parse the file at path and return its root value.

        Args:
            path: Key of the file within files.
            files: Mapping of paths to raw file content.

        Returns:
            YAMLValue wrapping the root of the first document.

        Raises:
            PathNotFoundError: If path is not in files.
            ParseError: If the content is not valid YAML.
        """
        if path not in files:
            raise PathNotFoundError(path)
        content = files[path]
        logger.debug("loading %s (%d bytes)", path, len(content))
        return parse(content, self.config, path=path)

    def clear(self) -> None:
        return None
