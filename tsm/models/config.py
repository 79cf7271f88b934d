"""Application configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import logbook
import yaml

log = logbook.Logger(__name__)

CONFIG_DIR_NAME = "tsm"
CONFIG_FILE_NAMES = ("config.yaml", "config.yml")
DEFAULT_MAX_DEPTH = 3

# Common build/vendor/cache dirs across ecosystems
DEFAULT_EXCLUDE_DIRS = (
    ".git", "node_modules", "vendor", "dist", "build", "target", "out", "bin",
    ".cache", ".next", ".nuxt", ".pnpm-store", ".yarn", ".yarn/cache",
    ".venv", ".direnv", "deps", "_build",
    ".terraform", ".terragrunt-cache",
    ".m2", ".gradle", "Pods", "Carthage",
)


class ConfigError(Exception):
    """Exception raised when configuration cannot be written or located."""

    pass


def get_config_dir() -> Path:
    """Get the configuration directory path, honouring XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / CONFIG_DIR_NAME
    try:
        home = Path.home()
    except RuntimeError as e:
        raise ConfigError("cannot resolve $HOME for XDG") from e
    return home / ".config" / CONFIG_DIR_NAME


def get_config_file() -> Path:
    """Get the main configuration file path."""
    return get_config_dir() / CONFIG_FILE_NAMES[0]


def _find_config_file() -> Path | None:
    """Return the first existing config file in the config directory."""
    try:
        config_dir = get_config_dir()
    except ConfigError as e:
        log.warning("Cannot locate config directory: {}", e)
        return None
    for name in CONFIG_FILE_NAMES:
        candidate = config_dir / name
        if candidate.is_file():
            return candidate
    return None


@dataclass(frozen=True)
class ScanConfig:
    """Read-only input of a repository scan."""

    roots: tuple[str, ...]
    exclude: frozenset[str] = frozenset(DEFAULT_EXCLUDE_DIRS)
    max_depth: int = DEFAULT_MAX_DEPTH  # 0 means unlimited


@dataclass
class AppConfig:
    """Application configuration."""

    scan_paths: list[str] = field(default_factory=lambda: ["~/Code"])
    bookmarks: list[str] = field(default_factory=list)
    exclude_dirs: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS)
    )
    max_depth: int = DEFAULT_MAX_DEPTH

    @property
    def scan_config(self) -> ScanConfig:
        """Build the scanner input from this configuration."""
        return ScanConfig(
            roots=tuple(self.scan_paths),
            exclude=frozenset(self.exclude_dirs),
            max_depth=self.max_depth,
        )

    @classmethod
    def load(cls, explicit_path: Path | None = None) -> "AppConfig":
        """Load configuration from file.

        Loading is best-effort: a missing, unreadable or malformed file
        yields the defaults.
        """
        config_file = explicit_path or _find_config_file()
        if config_file is None:
            log.debug("No config file found, using defaults")
            return cls()

        try:
            with open(config_file) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            log.warning("Cannot read config {}: {}", config_file, e)
            return cls()
        except yaml.YAMLError as e:
            log.warning("Malformed config {}: {}", config_file, e)
            return cls()

        if data is None:
            data = {}
        if not isinstance(data, dict):
            log.warning("Config {} is not a mapping, using defaults", config_file)
            return cls()

        log.debug("Loaded config from {}", config_file)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "AppConfig":
        """Create from dictionary, falling back to defaults per key."""
        defaults = cls()

        max_depth = data.get("max_depth")
        if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 0:
            if max_depth is not None:
                log.warning("Invalid max_depth {!r}, using {}", max_depth, DEFAULT_MAX_DEPTH)
            max_depth = DEFAULT_MAX_DEPTH

        return cls(
            scan_paths=_string_list(data.get("scan_paths")) or defaults.scan_paths,
            bookmarks=_string_list(data.get("bookmarks")),
            exclude_dirs=_string_list(data.get("exclude_dirs")) or defaults.exclude_dirs,
            max_depth=max_depth,
        )


def _string_list(value: object) -> list[str]:
    """Coerce a YAML value into a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        log.warning("Expected a list in config, got {!r}", value)
        return []
    return [str(item) for item in value if item is not None and str(item).strip()]


def default_config_text() -> str:
    """Render the default configuration file."""
    document = {
        "scan_paths": ["$HOME/Code"],
        "bookmarks": ["$HOME"],
        "exclude_dirs": list(DEFAULT_EXCLUDE_DIRS),
        "max_depth": DEFAULT_MAX_DEPTH,
    }
    body = yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
    return "# tsm config\n" + body


def write_default_config(path: Path | None = None) -> Path:
    """Write the default configuration and return its path.

    Raises:
        ConfigError: If the file already exists or cannot be written.
    """
    config_file = path or get_config_file()
    if config_file.exists():
        raise ConfigError(f"config already exists at {config_file}")

    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(default_config_text())
    except OSError as e:
        raise ConfigError(f"cannot write config {config_file}: {e}") from e

    log.info("Wrote default config to {}", config_file)
    return config_file
