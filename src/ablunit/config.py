"""Configuration management for ablunit test discovery."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_EXCLUDE_DIRS = [
    ".git", ".svn", ".builder", ".pct",
    "node_modules", "__pycache__",
    ".vscode", ".idea",
]


@dataclass
class DiscoveryConfig:
    """Configuration for scanning ABL sources for tests.

    Attributes:
        class_extension: Suffix identifying class files.
        program_extension: Suffix identifying procedure/program files.
        legacy_ranges: When True, class header, suite anchor and procedure
            ranges use the identifier length as the end column. When False,
            the end column is start column + identifier length.
        suite_case_sensitive: When True, the @testsuite(...) parameter
            pattern only matches the lowercase annotation. When False,
            @TestSuite(...) and other spellings are read as well.
        exclude_dirs: Directory names skipped while enumerating files.
    """
    class_extension: str = ".cls"
    program_extension: str = ".p"
    legacy_ranges: bool = True
    suite_case_sensitive: bool = True
    exclude_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))

    @property
    def extensions(self) -> tuple[str, str]:
        """Both source suffixes, class first."""
        return (self.class_extension, self.program_extension)


def _option(section: dict, key: str, expected: type):
    """Return section[key] if it has the expected type, else the field default."""
    default = getattr(DiscoveryConfig, key)
    value = section.get(key, default)
    return value if isinstance(value, expected) else default


def load_discovery_config(repo_root: Path | None = None) -> DiscoveryConfig:
    """Load discovery configuration from .ablunit file in repository root.

    Args:
        repo_root: Path to repository root. If None, uses current directory.

    Returns:
        DiscoveryConfig object with loaded or default values.

    Notes:
        If .ablunit file doesn't exist or can't be parsed, returns default config.
        Expected YAML structure:

        ```yaml
        discovery:
          class_extension: .cls
          program_extension: .p
          legacy_ranges: true
          suite_case_sensitive: true
          exclude_dirs: [.git, .builder]
        ```
    """
    if repo_root is None:
        repo_root = Path.cwd()

    config_path = repo_root / ".ablunit"

    if not config_path.exists():
        return DiscoveryConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return DiscoveryConfig()

        discovery = data.get("discovery", {})
        if not isinstance(discovery, dict):
            return DiscoveryConfig()

        exclude_dirs = discovery.get("exclude_dirs", DEFAULT_EXCLUDE_DIRS)
        if not isinstance(exclude_dirs, list):
            return DiscoveryConfig()

        return DiscoveryConfig(
            class_extension=_option(discovery, "class_extension", str),
            program_extension=_option(discovery, "program_extension", str),
            legacy_ranges=_option(discovery, "legacy_ranges", bool),
            suite_case_sensitive=_option(discovery, "suite_case_sensitive", bool),
            exclude_dirs=[str(d) for d in exclude_dirs],
        )
    except (yaml.YAMLError, OSError, KeyError, TypeError, ValueError):
        # Return default config on any parsing errors
        return DiscoveryConfig()
