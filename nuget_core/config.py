"""Resolve NuGet plugin configuration from raw mappings, env vars and files."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import NuGetConfigError
from .paths import UserDirs

DEFAULT_SOURCE = "https://api.nuget.org/v3/index.json"
DEFAULT_PACKAGE_PATH = "*.nupkg"
DEFAULT_TIMEOUT = 300

API_KEY_ENV = "NUGET_API_KEY"
CONFIG_ENV = "NUGET_CONFIG"
CONFIG_FILE_NAME = "nuget.yml"
CONFIG_SECTION = "nuget"


@dataclass(frozen=True)
class NuGetConfig:
    """Resolved settings for a single push invocation."""

    api_key: str = ""
    source: str = DEFAULT_SOURCE
    package_path: str = DEFAULT_PACKAGE_PATH
    skip_duplicate: bool = False
    timeout: int = DEFAULT_TIMEOUT


class ConfigParser:
    """Typed accessors over an untyped config mapping.

    A raw value is only used when it is present and of the expected type;
    anything else falls back to the environment (when an env var is named)
    and then to the default.
    """

    def __init__(self, raw: Mapping[str, Any] | None, env: Mapping[str, str] | None = None) -> None:
        self.raw: Mapping[str, Any] = raw or {}
        self.env: Mapping[str, str] = os.environ if env is None else env

    def get_string(self, key: str, env_var: str = "", default: str = "") -> str:
        value = self.raw.get(key)
        if isinstance(value, str) and value:
            return value
        if env_var:
            env_value = self.env.get(env_var, "")
            if env_value:
                return env_value
        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.raw.get(key)
        if isinstance(value, bool):
            return value
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.raw.get(key)
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return default


def parse_config(raw: Mapping[str, Any] | None, env: Mapping[str, str] | None = None) -> NuGetConfig:
    """Build a :class:`NuGetConfig` without validating it."""

    parser = ConfigParser(raw, env)
    return NuGetConfig(
        api_key=parser.get_string("api_key", API_KEY_ENV, ""),
        source=parser.get_string("source", "", DEFAULT_SOURCE),
        package_path=parser.get_string("package_path", "", DEFAULT_PACKAGE_PATH),
        skip_duplicate=parser.get_bool("skip_duplicate", False),
        timeout=parser.get_int("timeout", DEFAULT_TIMEOUT),
    )


def default_config_paths(
    cwd: Path | None = None,
    user_dirs: UserDirs | None = None,
) -> tuple[Path, ...]:
    """Return the config files consulted when none is given explicitly."""

    base = cwd or Path.cwd()
    dirs = user_dirs or UserDirs()
    return (base / CONFIG_FILE_NAME, dirs.config_dir() / CONFIG_FILE_NAME)


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML or TOML config file and return the plugin section."""

    try:
        if path.suffix.lower() == ".toml":
            with path.open("rb") as handle:
                document = tomllib.load(handle)
        else:
            document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise NuGetConfigError(f"unable to read config at {path}: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise NuGetConfigError(f"expected mapping in config file {path}")
    section = document.get(CONFIG_SECTION, document)
    if not isinstance(section, Mapping):
        raise NuGetConfigError(f"'{CONFIG_SECTION}' section in {path} must be a mapping")
    return {str(key): value for key, value in section.items()}


def load_raw_config(
    path: Path | str | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    user_dirs: UserDirs | None = None,
) -> dict[str, Any]:
    """Locate and load the raw plugin config.

    An explicit ``path`` (or ``NUGET_CONFIG``) must exist; the default
    locations are optional and yield an empty mapping when absent.
    """

    environment = os.environ if env is None else env
    explicit = path or environment.get(CONFIG_ENV) or None
    if explicit:
        explicit_path = Path(explicit).expanduser()
        if not explicit_path.is_file():
            raise NuGetConfigError(f"config file not found: {explicit_path}")
        return load_config_file(explicit_path)

    for candidate in default_config_paths(cwd, user_dirs):
        if candidate.is_file():
            return load_config_file(candidate)
    return {}
