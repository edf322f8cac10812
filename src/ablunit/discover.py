import logging
from pathlib import Path

from ablunit.config import DiscoveryConfig, load_discovery_config
from ablunit.models import LocatedEntity
from ablunit.parsers import get_parser_for_file
from ablunit.repository import find_repository_root, find_source_files, get_relative_path

logger = logging.getLogger(__name__)


def read_source(file_path: Path) -> str:
    """Read an ABL source file as UTF-8.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    return file_path.read_text(encoding="utf-8")


def discover_file(
    file_path: str,
    root: Path | None = None,
    config: DiscoveryConfig | None = None
) -> list[LocatedEntity]:
    """Discover the test entities in a single file.

    Args:
        file_path: Path to file (can be absolute or relative to repo root)
        root: Repository root (auto-detected if None)
        config: Discovery configuration (loaded from root if None)

    Returns:
        Located entities in the order the scanner reported them

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file type not supported or the file is not valid UTF-8
    """
    if root is None:
        root = find_repository_root(Path.cwd())
    if config is None:
        config = load_discovery_config(root)

    file_path_obj = Path(file_path)
    if not file_path_obj.is_absolute():
        file_path_obj = root / file_path_obj

    if not file_path_obj.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    parser = get_parser_for_file(file_path_obj, config)
    if parser is None:
        raise ValueError(f"Unsupported file type: {file_path}")

    source_code = read_source(file_path_obj)
    relative_path = get_relative_path(file_path_obj, root)

    return parser.extract_entities(source_code, relative_path)


def discover_tests(root: Path | None = None, config: DiscoveryConfig | None = None) -> list[LocatedEntity]:
    """Discover test entities in every ABL source file below the repository root.

    Files that cannot be read are logged and skipped.
    """
    if root is None:
        root = find_repository_root(Path.cwd())
    if config is None:
        config = load_discovery_config(root)

    entities = []
    for file_path in find_source_files(root, config):
        parser = get_parser_for_file(file_path, config)
        if parser is None:
            continue

        try:
            source_code = read_source(file_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping {file_path}: {e}")
            continue

        relative_path = get_relative_path(file_path, root)
        found = parser.extract_entities(source_code, relative_path)
        logger.debug(f"{relative_path}: {len(found)} test entities")
        entities.extend(found)

    return entities
