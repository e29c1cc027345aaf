"""Host-facing plugin surface for the NuGet publisher."""

from .manifest import PluginManifest
from .nuget import DOTNET_COMMAND, NuGetPlugin
from .types import (
    ExecuteRequest,
    ExecuteResponse,
    Hook,
    PluginInfo,
    ReleaseContext,
    ValidateResponse,
    ValidationBuilder,
    ValidationError,
)

__all__ = [
    "NuGetPlugin",
    "DOTNET_COMMAND",
    "PluginManifest",
    "PluginInfo",
    "Hook",
    "ReleaseContext",
    "ExecuteRequest",
    "ExecuteResponse",
    "ValidateResponse",
    "ValidationBuilder",
    "ValidationError",
]
