"""Handle plugin manifest parsing."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from nuget_core.errors import NuGetManifestError

from .types import Hook, PluginInfo

MANIFEST_FILE_NAME = "plugin.toml"


@dataclass(frozen=True)
class PluginManifest:
    """Immutable representation of a plugin manifest document."""

    name: str
    version: str
    description: str
    author: str
    hooks: tuple[Hook, ...]
    options: dict[str, dict[str, Any]]

    @staticmethod
    def _normalize_field(label: str, value: object) -> str:
        if not isinstance(value, str):
            raise NuGetManifestError(f"'{label}' must be a string")
        normalized = value.strip()
        if not normalized:
            raise NuGetManifestError(f"{label} cannot be empty.")
        return normalized

    @classmethod
    def load(cls, path: Path | None = None) -> "PluginManifest":
        """Load and validate ``plugin.toml``; defaults to the packaged copy."""

        try:
            if path is None:
                text = resources.files(__package__).joinpath(MANIFEST_FILE_NAME).read_text(encoding="utf-8")
            else:
                text = path.read_text(encoding="utf-8")
            document = tomllib.loads(text)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise NuGetManifestError(f"unable to read manifest at {path or MANIFEST_FILE_NAME}") from exc
        return cls.from_document(document)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "PluginManifest":
        plugin_section = document.get("plugin")
        if not isinstance(plugin_section, dict):
            raise NuGetManifestError("missing or malformed [plugin] section")

        fields: dict[str, str] = {}
        for key in ("name", "version", "description", "author"):
            if key not in plugin_section:
                raise NuGetManifestError(f"missing '{key}' in manifest")
            fields[key] = cls._normalize_field(key, plugin_section[key])

        raw_hooks = plugin_section.get("hooks", [])
        if not isinstance(raw_hooks, list) or not raw_hooks:
            raise NuGetManifestError("'hooks' must be a non-empty list")
        try:
            hooks = tuple(Hook(str(hook)) for hook in raw_hooks)
        except ValueError as exc:
            raise NuGetManifestError(f"unknown hook in manifest: {exc}") from exc

        config_section = document.get("config", {})
        if not isinstance(config_section, dict):
            raise NuGetManifestError("[config] must be a table of options")
        options: dict[str, dict[str, Any]] = {}
        for option, schema in config_section.items():
            if not isinstance(schema, dict) or "type" not in schema:
                raise NuGetManifestError(f"config option '{option}' needs a 'type'")
            options[str(option)] = dict(schema)

        return cls(hooks=hooks, options=options, **fields)

    def config_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": self.options, "required": []}

    def to_info(self) -> PluginInfo:
        return PluginInfo(
            name=self.name,
            version=self.version,
            description=self.description,
            author=self.author,
            hooks=self.hooks,
            config_schema=json.dumps(self.config_schema(), indent=2),
        )
