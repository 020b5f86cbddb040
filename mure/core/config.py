"""Typed configuration loading and access.

The config file lives at ``~/.mure.toml`` unless ``MURE_CONFIG_PATH`` points
elsewhere:

    [core]
    base_dir = "~/.dev"

    [github]
    username = "someone"

    [shell]
    cd_shims = "mucd"

``base_dir`` is the workspace root. Clones live in the content-addressed
store ``<base_dir>/repo/<host>/<owner>/<name>`` and are exposed as
``<base_dir>/<name>`` symlinks.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_PATH_ENV",
    "Config",
    "ConfigError",
    "CoreConfig",
    "GitHubConfig",
    "ShellConfig",
    "initialize_config",
    "load_config",
    "resolve_config_path",
]

CONFIG_PATH_ENV = "MURE_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "~/.mure.toml"
DEFAULT_BASE_DIR = "~/.dev"
DEFAULT_CD_SHIMS = "mucd"
STORE_DIR_NAME = "repo"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded, parsed or created."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class CoreConfig:
    base_dir: str = DEFAULT_BASE_DIR


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    username: str = ""


@dataclass(frozen=True, slots=True)
class ShellConfig:
    cd_shims: str = DEFAULT_CD_SHIMS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    core: CoreConfig = field(default_factory=CoreConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a parsed TOML mapping.

        Raises:
            KeyError: if ``[core] base_dir`` is missing.
        """
        core: StrDict | None = get_table(data, "core")
        if core is None:
            raise KeyError("missing [core] table")
        base_dir = get_str(core, "base_dir")
        if base_dir is None:
            raise KeyError("missing [core] base_dir")

        github: StrDict = get_table(data, "github") or {}
        shell: StrDict = get_table(data, "shell") or {}

        return cls(
            core=CoreConfig(base_dir=base_dir),
            github=GitHubConfig(username=get_str(github, "username") or ""),
            shell=ShellConfig(cd_shims=get_str(shell, "cd_shims") or DEFAULT_CD_SHIMS),
        )

    @property
    def base_path(self) -> Path:
        """Workspace root with ``~`` expanded."""
        return Path(self.core.base_dir).expanduser()

    @property
    def repos_store_path(self) -> Path:
        return self.base_path / STORE_DIR_NAME

    def repo_store_path(self, host: str, owner: str, name: str) -> Path:
        return self.repos_store_path / host / owner / name

    def repo_work_path(self, name: str) -> Path:
        """Symlink location for a managed repository."""
        return self.base_path / name

    def to_toml(self) -> str:
        return (
            "[core]\n"
            f'base_dir = "{self.core.base_dir}"\n'
            "\n"
            "[github]\n"
            f'username = "{self.github.username}"\n'
            "\n"
            "[shell]\n"
            f'cd_shims = "{self.shell.cd_shims}"\n'
        )


def resolve_config_path() -> Path:
    """Return ``$MURE_CONFIG_PATH`` if set, else ``~/.mure.toml``."""
    env = os.environ.get(CONFIG_PATH_ENV)
    if env:
        return Path(env).expanduser()
    return Path(DEFAULT_CONFIG_PATH).expanduser()


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(
            ConfigError(
                f"Config file not found: {path}",
                path=path,
                hint="Run: mure init",
            )
        )
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path | None = None) -> Result[Config, ConfigError]:
    """Load and parse configuration.

    Args:
        path: Config file; defaults to ``resolve_config_path()``

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    path = path or resolve_config_path()
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def initialize_config(path: Path | None = None) -> Result[Config, ConfigError]:
    """Write the default config file. Refuses to overwrite an existing one."""
    path = path or resolve_config_path()
    if path.exists():
        return Err(ConfigError(f"config file already exists: {path}", path=path))

    config = Config()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(config.to_toml(), encoding="utf-8", newline="\n")
    except OSError as e:
        return Err(ConfigError(f"Could not write {path}: {e}", path=path))
    return Ok(config)
