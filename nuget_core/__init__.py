"""Core pieces of the NuGet release plugin."""

from .config import (
    DEFAULT_PACKAGE_PATH,
    DEFAULT_SOURCE,
    DEFAULT_TIMEOUT,
    ConfigParser,
    NuGetConfig,
    load_raw_config,
    parse_config,
)
from .errors import (
    NuGetCommandError,
    NuGetConfigError,
    NuGetDiscoveryError,
    NuGetError,
    NuGetManifestError,
    NuGetSecurityError,
)
from .locator import find_packages
from .plugin import ExecuteRequest, ExecuteResponse, Hook, NuGetPlugin, ReleaseContext
from .runner import CommandResult, CommandRunner, SubprocessRunner
from .security import is_private_ip, validate_package_path, validate_source_url

__all__ = [
    "NuGetPlugin",
    "NuGetConfig",
    "ConfigParser",
    "parse_config",
    "load_raw_config",
    "DEFAULT_SOURCE",
    "DEFAULT_PACKAGE_PATH",
    "DEFAULT_TIMEOUT",
    "Hook",
    "ReleaseContext",
    "ExecuteRequest",
    "ExecuteResponse",
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "find_packages",
    "is_private_ip",
    "validate_package_path",
    "validate_source_url",
    "NuGetError",
    "NuGetConfigError",
    "NuGetSecurityError",
    "NuGetDiscoveryError",
    "NuGetCommandError",
    "NuGetManifestError",
]
