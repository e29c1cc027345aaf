"""Security helpers for NuGet source URLs and package paths."""

from __future__ import annotations

import ipaddress
import os
import socket
from typing import Callable, Sequence
from urllib.parse import urlsplit

from .errors import NuGetSecurityError

HostResolver = Callable[[str], Sequence[str]]

LOCALHOST_NAMES = frozenset({"localhost", "127.0.0.1", "::1"})

_BLOCKED_NETWORKS = tuple(
    ipaddress.ip_network(cidr)
    for cidr in (
        "10.0.0.0/8",
        "172.16.0.0/12",
        "192.168.0.0/16",
        "127.0.0.0/8",
        "169.254.0.0/16",  # link-local
        "0.0.0.0/8",
        "169.254.169.254/32",  # AWS/GCP/Azure metadata
        "fd00:ec2::254/128",  # AWS IMDSv2 IPv6
    )
)

_GLOB_CHARS = "*?[]"
_SENSITIVE_FLAGS = frozenset({"--api-key", "-k"})


def resolve_host(host: str) -> list[str]:
    """Return every address ``host`` resolves to."""

    infos = socket.getaddrinfo(host, None)
    addresses: list[str] = []
    for info in infos:
        address = str(info[4][0])
        if address not in addresses:
            addresses.append(address)
    return addresses


def validate_source_url(raw_url: str, *, resolver: HostResolver | None = None) -> None:
    """Reject URLs that are not HTTPS or that reach private networks."""

    if not raw_url:
        raise NuGetSecurityError("source URL cannot be empty")

    try:
        parsed = urlsplit(raw_url)
        host = parsed.hostname or ""
    except ValueError as exc:
        raise NuGetSecurityError(f"invalid URL: {exc}") from exc

    # HTTP is allowed only for localhost and it is intentionally local
    is_localhost = host in LOCALHOST_NAMES
    if parsed.scheme != "https" and not is_localhost:
        raise NuGetSecurityError(f"only HTTPS URLs are allowed (got {parsed.scheme})")
    if is_localhost:
        return
    if not host:
        raise NuGetSecurityError(f"invalid URL: missing host in {raw_url!r}")

    lookup = resolver or resolve_host
    try:
        addresses = lookup(host)
    except (OSError, UnicodeError) as exc:
        raise NuGetSecurityError(f"failed to resolve hostname: {exc}") from exc
    if not addresses:
        raise NuGetSecurityError(f"failed to resolve hostname: no addresses for {host}")

    for address in addresses:
        if is_private_ip(address):
            raise NuGetSecurityError("URLs pointing to private networks are not allowed")


def is_private_ip(address: str | ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    """Check whether ``address`` sits in a private, reserved or metadata range."""

    try:
        ip = ipaddress.ip_address(str(address).split("%", 1)[0])
    except ValueError:
        return True
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    for network in _BLOCKED_NETWORKS:
        if ip.version == network.version and ip in network:
            return True

    if ip.is_loopback or ip.is_link_local or ip.is_private:
        return True
    return ip.is_multicast and _is_link_local_multicast(ip)


def _is_link_local_multicast(ip: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    if ip.version == 4:
        return ip in ipaddress.ip_network("224.0.0.0/24")
    return ip in ipaddress.ip_network("ff02::/16")


def validate_package_path(path: str) -> None:
    """Reject package globs that could escape the working directory."""

    if not path:
        raise NuGetSecurityError("package path cannot be empty")
    if ".." in path:
        raise NuGetSecurityError("path traversal detected: cannot use '..'")

    placeholder = path
    for char in _GLOB_CHARS:
        placeholder = placeholder.replace(char, "x")
    cleaned = os.path.normpath(placeholder)
    if cleaned.startswith("..") or f"{os.sep}.." in cleaned:
        raise NuGetSecurityError("path traversal detected: cannot escape working directory")
    # absolute paths stay allowed, CI/CD artifact folders usually need them


def redact_command_for_log(command: Sequence[str]) -> list[str]:
    redacted: list[str] = []
    skip_next = False
    for item in command:
        if skip_next:
            redacted.append("***")
            skip_next = False
            continue
        if item.lower() in _SENSITIVE_FLAGS:
            redacted.append(item)
            skip_next = True
            continue
        if "://" in item:
            parsed = urlsplit(item)
            if parsed.password:
                safe_netloc = parsed.netloc.replace(parsed.password, "***")
                redacted.append(item.replace(parsed.netloc, safe_netloc))
                continue
        redacted.append(item)
    return redacted
