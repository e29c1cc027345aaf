"""Discover ``.nupkg`` artifacts matching a package glob."""

from __future__ import annotations

import glob
import logging

from .errors import NuGetDiscoveryError
from .security import validate_package_path

logger = logging.getLogger(__name__)

PACKAGE_EXTENSION = ".nupkg"


def find_packages(pattern: str) -> list[str]:
    """Expand ``pattern`` and keep only NuGet package files.

    The pattern is validated again so this is safe to call on its own. An
    empty result is returned as-is; deciding whether that is an error is up
    to the caller.
    """

    validate_package_path(pattern)
    _check_glob_syntax(pattern)

    try:
        matches = sorted(glob.glob(pattern, recursive=True))
    except ValueError as exc:
        raise NuGetDiscoveryError(f"invalid glob pattern: {exc}") from exc
    packages = [match for match in matches if match.lower().endswith(PACKAGE_EXTENSION)]
    logger.debug("pattern %s matched %d file(s), %d package(s)", pattern, len(matches), len(packages))
    return packages


def _check_glob_syntax(pattern: str) -> None:
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "[":
            end = index + 1
            if end < length and pattern[end] in "!^":
                end += 1
            if end < length and pattern[end] == "]":
                end += 1
            while end < length and pattern[end] != "]":
                end += 1
            if end >= length:
                raise NuGetDiscoveryError(f"invalid glob pattern: unterminated '[' in {pattern!r}")
            index = end + 1
            continue
        index += 1
