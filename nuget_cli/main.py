"""Standalone entrypoint that drives the NuGet plugin outside a release host."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Sequence

from nuget_core.config import load_raw_config
from nuget_core.errors import NuGetConfigError
from nuget_core.plugin import ExecuteRequest, Hook, NuGetPlugin, ReleaseContext

CLI_VERSION = "2.0.0"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nuget-plugin",
        description="Publish .nupkg artifacts with dotnet nuget push.",
    )
    parser.add_argument("--version", action="version", version=f"nuget-plugin v{CLI_VERSION}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("info", help="Print plugin metadata as JSON.")

    validate = sub.add_parser("validate", help="Validate a plugin config file.")
    validate.add_argument("--config", "-c", dest="config_path", default=None)

    push = sub.add_parser("push", help="Push packages for a release.")
    push.add_argument("--config", "-c", dest="config_path", default=None)
    push.add_argument("--release-version", dest="release_version", required=True)
    push.add_argument("--dry-run", action="store_true", help="Report what would be pushed.")
    push.add_argument(
        "--hook",
        default=Hook.POST_PUBLISH.value,
        choices=[hook.value for hook in Hook],
        help="Lifecycle hook to simulate (default: post-publish).",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    plugin: NuGetPlugin | None = None,
) -> int:
    """Parse ``argv`` and run the requested command."""

    parser = build_parser()
    try:
        args = parser.parse_args(list(argv) if argv is not None else None)
    except SystemExit as exc:
        return _exit_code(exc.code)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    nuget = plugin or NuGetPlugin()

    if args.command == "info":
        return _print_info(nuget)

    try:
        raw = load_raw_config(args.config_path)
    except NuGetConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    logger.debug("loaded config keys: %s", ", ".join(sorted(raw)) or "none")

    if args.command == "validate":
        return _print_validation(nuget, raw)
    return _run_push(nuget, raw, args)


def _print_info(nuget: NuGetPlugin) -> int:
    info = nuget.get_info()
    payload = asdict(info)
    payload["hooks"] = [hook.value for hook in info.hooks]
    payload["config_schema"] = json.loads(info.config_schema)
    print(json.dumps(payload, indent=2))
    return 0


def _print_validation(nuget: NuGetPlugin, raw: dict[str, Any]) -> int:
    result = nuget.validate(raw)
    if result.valid:
        print("configuration is valid")
        return 0
    for error in result.errors:
        print(f"{error.field}: {error.message}")
    return 1


def _run_push(nuget: NuGetPlugin, raw: dict[str, Any], args: argparse.Namespace) -> int:
    request = ExecuteRequest(
        hook=Hook(args.hook),
        config=raw,
        context=ReleaseContext(version=args.release_version),
        dry_run=bool(args.dry_run),
    )
    response = nuget.execute(request)
    if response.success:
        print(response.message)
    else:
        print(f"error: {response.error}", file=sys.stderr)
    if response.outputs:
        print(json.dumps(response.outputs, indent=2))
    return 0 if response.success else 1


def _exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1
