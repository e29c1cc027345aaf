"""NuGet plugin: push ``.nupkg`` artifacts after a release is published."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from nuget_core.config import API_KEY_ENV, NuGetConfig, parse_config
from nuget_core.errors import (
    NuGetCommandError,
    NuGetConfigError,
    NuGetDiscoveryError,
    NuGetSecurityError,
)
from nuget_core.locator import find_packages
from nuget_core.runner import CommandRunner, SubprocessRunner
from nuget_core.security import HostResolver, validate_package_path, validate_source_url

from .manifest import PluginManifest
from .types import (
    ExecuteRequest,
    ExecuteResponse,
    Hook,
    PluginInfo,
    ReleaseContext,
    ValidateResponse,
    ValidationBuilder,
)

logger = logging.getLogger(__name__)

DOTNET_COMMAND = "dotnet"


class NuGetPlugin:
    """Publish packages to NuGet (.NET) through ``dotnet nuget push``.

    ``runner`` executes the external CLI and ``resolver`` maps a hostname
    to its addresses for the SSRF check. Both default to the real
    implementations.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        resolver: HostResolver | None = None,
    ) -> None:
        self.runner: CommandRunner = runner or SubprocessRunner()
        self.resolver = resolver

    def get_info(self) -> PluginInfo:
        return PluginManifest.load().to_info()

    def execute(self, request: ExecuteRequest) -> ExecuteResponse:
        """Run the plugin for ``request.hook``."""

        if request.hook != Hook.POST_PUBLISH:
            return ExecuteResponse(success=True, message=f"Hook {request.hook} not handled")

        cfg = parse_config(request.config, request.env)
        return self.push_packages(
            cfg,
            request.context,
            dry_run=request.dry_run,
            deadline=request.deadline,
        )

    def push_packages(
        self,
        cfg: NuGetConfig,
        release: ReleaseContext,
        *,
        dry_run: bool = False,
        deadline: float | None = None,
    ) -> ExecuteResponse:
        """Validate, discover and push every package matching the config."""

        try:
            self.validate_config(cfg)
        except NuGetConfigError as exc:
            logger.warning("nuget configuration rejected: %s", exc)
            return ExecuteResponse(success=False, error=f"configuration validation failed: {exc}")

        try:
            packages = find_packages(cfg.package_path)
        except (NuGetSecurityError, NuGetDiscoveryError) as exc:
            return ExecuteResponse(success=False, error=f"failed to find packages: {exc}")

        if not packages:
            return ExecuteResponse(
                success=False,
                error=f"no packages found matching pattern: {cfg.package_path}",
            )

        version = release.version.removeprefix("v")

        if dry_run:
            return ExecuteResponse(
                success=True,
                message=f"Would push {len(packages)} package(s) to NuGet",
                outputs={
                    "packages": packages,
                    "source": cfg.source,
                    "skip_duplicate": cfg.skip_duplicate,
                    "version": version,
                },
            )

        pushed: list[str] = []
        for package in packages:
            try:
                self._execute_push(cfg, package, deadline=deadline)
            except NuGetCommandError as exc:
                logger.warning("push of %s failed after %d package(s): %s", package, len(pushed), exc)
                return ExecuteResponse(
                    success=False,
                    error=f"failed to push package {package}: {exc}",
                    outputs={
                        "pushed_packages": list(pushed),
                        "failed_package": package,
                    },
                )
            pushed.append(package)

        logger.info("pushed %d package(s) to %s", len(pushed), cfg.source)
        return ExecuteResponse(
            success=True,
            message=f"Successfully pushed {len(pushed)} package(s) to NuGet",
            outputs={
                "packages": pushed,
                "source": cfg.source,
                "version": version,
            },
        )

    def build_push_args(self, cfg: NuGetConfig, package_path: str) -> list[str]:
        args = ["nuget", "push", package_path]
        args += ["--api-key", cfg.api_key]
        args += ["--source", cfg.source]
        if cfg.skip_duplicate:
            args.append("--skip-duplicate")
        args += ["--timeout", str(cfg.timeout)]
        return args

    def _execute_push(self, cfg: NuGetConfig, package_path: str, *, deadline: float | None) -> None:
        timeout: float | None = None
        if deadline is not None:
            timeout = deadline - time.monotonic()
            if timeout <= 0:
                raise NuGetCommandError("deadline exceeded")

        result = self.runner.run(DOTNET_COMMAND, self.build_push_args(cfg, package_path), timeout=timeout)
        if not result.ok:
            detail = f"{result.text}: {result.error}" if result.text else str(result.error)
            raise NuGetCommandError(detail)

    def validate_config(self, cfg: NuGetConfig) -> None:
        """Raise :class:`NuGetConfigError` for the first invalid setting."""

        if not cfg.api_key:
            raise NuGetConfigError(
                f"API key is required (set api_key or {API_KEY_ENV} environment variable)"
            )
        try:
            validate_source_url(cfg.source, resolver=self.resolver)
        except NuGetSecurityError as exc:
            raise NuGetSecurityError(f"invalid source URL: {exc}") from exc
        try:
            validate_package_path(cfg.package_path)
        except NuGetSecurityError as exc:
            raise NuGetSecurityError(f"invalid package path: {exc}") from exc
        if cfg.timeout <= 0:
            raise NuGetConfigError("timeout must be a positive integer")

    def validate(self, config: Mapping[str, Any]) -> ValidateResponse:
        """Check a raw config ahead of execution.

        The API key is not required here; it can still arrive through
        ``NUGET_API_KEY`` at run time.
        """

        builder = ValidationBuilder()
        cfg = parse_config(config, env={})

        if cfg.source:
            try:
                validate_source_url(cfg.source, resolver=self.resolver)
            except NuGetSecurityError as exc:
                builder.add_error("source", str(exc))

        if cfg.package_path:
            try:
                validate_package_path(cfg.package_path)
            except NuGetSecurityError as exc:
                builder.add_error("package_path", str(exc))

        if cfg.timeout <= 0:
            builder.add_error("timeout", "must be a positive integer")

        return builder.build()
