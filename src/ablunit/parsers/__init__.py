from pathlib import Path

from ablunit.config import DiscoveryConfig
from ablunit.parsers.abl_parser import AblParser
from ablunit.parsers.base import BaseParser


def get_parser_for_file(file_path: Path, config: DiscoveryConfig | None = None) -> BaseParser | None:
    """Return the parser able to discover tests in ``file_path``, or None."""
    config = config or DiscoveryConfig()
    suffix = file_path.suffix.lower()

    if suffix in (ext.lower() for ext in config.extensions):
        return AblParser(config)

    return None
