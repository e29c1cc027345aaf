"""Typed NuGet plugin errors."""

from __future__ import annotations


class NuGetError(RuntimeError):
    """Base NuGet plugin error."""


class NuGetConfigError(NuGetError):
    """Plugin configuration is invalid."""


class NuGetSecurityError(NuGetConfigError):
    """Security policy violation (SSRF/path traversal)."""


class NuGetDiscoveryError(NuGetError):
    """Package discovery failed before any match was produced."""


class NuGetCommandError(NuGetError):
    """dotnet nuget push failed for a single package."""


class NuGetManifestError(NuGetError):
    """Raised when the plugin manifest cannot be loaded or validated."""
