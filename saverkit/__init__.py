"""
saverkit package

This package converts an MP4 video into a native macOS screensaver (`.saver`) bundle.

Key responsibilities are split across modules:
- `renderer.py`: deterministic Jinja2 rendering of Info.plist, Swift source and Xcode project
- `assembler.py`: filesystem operations (copy, scaffold, permissions)
- `toolchain.py`: pick swiftc or xcodebuild based on what is installed
- `pipeline.py`: orchestration (workspace -> scaffold -> compile -> verify -> promote)
- `config.py`: optional YAML build configuration
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
