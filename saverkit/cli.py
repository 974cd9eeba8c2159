"""
cli.py

Responsibility: CLI entrypoint for saverkit.

High-level flow (single command `mac`):
1) Merge CLI flags over an optional YAML config -> `BuildRequest`
2) Pick a toolchain and build the bundle -> `pipeline.build_saver`
3) Report the outcome: exit 0 on success, 1 on a build error, 2 on usage errors

This module should orchestrate behavior but keep concerns isolated:
- Config parsing: `config.py`
- Bundle building: `pipeline.py`
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from saverkit import pipeline
from saverkit.config import ConfigError, SaverConfig, parse_config
from saverkit.errors import SaverError
from saverkit.logging_config import configure_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

CLI_DEFAULT_NAME = "MyScreensaver"

USAGE = """macOS Video Screensaver Generator - convert MP4 to macOS .saver bundle

Usage:
  saverkit mac --in video.mp4 --out MyScreensaver.saver [--name "My Screensaver"]

Example:
  saverkit mac --in sunset.mp4 --out SunsetSaver.saver --name "Beautiful Sunset"
"""


class UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting, so usage errors map to exit code 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _usage() -> None:
    print(USAGE)


def _request_from_args(args: argparse.Namespace, cfg: SaverConfig) -> pipeline.BuildRequest:
    # CLI overrides
    input_path = Path(args.input) if args.input else cfg.input
    output_path = Path(args.output) if args.output else cfg.output
    if args.name is not None:
        name = args.name
    elif cfg.name is not None:
        name = cfg.name
    else:
        name = CLI_DEFAULT_NAME

    if input_path is None or output_path is None:
        raise UsageError("--in and --out are required")
    return pipeline.BuildRequest(input_path=input_path, output_path=output_path, name=name)


def mac_cmd(args: argparse.Namespace) -> int:
    cfg = parse_config(args.config) if args.config else SaverConfig()
    request = _request_from_args(args, cfg)

    pipeline.build_saver(
        request,
        scratch_root=cfg.scratch_root,
        cleanup_delay=cfg.cleanup_delay,
    )
    print(f"Built macOS screensaver: {request.output_path}")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="saverkit", description="Convert an MP4 video into a macOS .saver bundle", add_help=False)
    sub = p.add_subparsers(dest="command", parser_class=_Parser)

    m = sub.add_parser("mac", help="Build a macOS .saver bundle", add_help=False)
    m.add_argument("--in", "-in", dest="input", default=None, help="Input MP4 file")
    m.add_argument("--out", "-out", dest="output", default=None, help="Output .saver bundle")
    m.add_argument("--name", "-name", dest="name", default=None, help=f"Screensaver display name (default: {CLI_DEFAULT_NAME})")
    m.add_argument("--config", default=None, help="YAML config file; flags override its values")
    m.add_argument("--verbose", "-v", action="store_true", help="Log debug output (workspace paths, tool commands)")

    m.set_defaults(func=mac_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
        if getattr(args, "func", None) is None:
            raise UsageError("a command is required")
        configure_logging(verbose=bool(args.verbose))
        return int(args.func(args))
    except UsageError:
        _usage()
        return EXIT_USAGE
    except (SaverError, ConfigError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
