"""
pipeline.py

Responsibility: Turn a BuildRequest into an installed `.saver` bundle.

High-level flow (per strategy):
1) Create a private scratch workspace
2) Scaffold directories, stage the video, emit rendered templates
3) Run the external compiler / build tool in the workspace
4) Verify the expected output exists (a zero exit status alone is not trusted)
5) Promote the bundle to the requested output path

Every failure is terminal and leaves the workspace on disk for inspection.
The swiftc strategy never removes its workspace; the xcodebuild strategy removes
it on a background timer once the bundle has been promoted.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path

from saverkit import assembler, renderer
from saverkit.errors import (
    BuildFailed,
    CompileFailed,
    CopyFailed,
    OutputMissing,
    PromotionFailed,
    WorkspaceCreationFailed,
)
from saverkit.toolchain import BuildStrategy, Which, select_strategy, warn_if_not_macos

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Screensaver"
WORKSPACE_PREFIX = "scrgen-mac-"
DEFAULT_CLEANUP_DELAY = 3.0

MODULE_NAME = "VideoSaver"
SOURCE_FILENAME = "VideoSaver.swift"
SWIFT_FRAMEWORKS = ("ScreenSaver", "AVFoundation", "AVKit", "Cocoa")

XCODE_PROJECT = "VideoSaver.xcodeproj"
XCODE_SCHEME = "VideoSaver"
XCODE_CONFIGURATION = "Release"


def sanitize_name(name: str | None) -> str:
    name = (name or "").strip()
    return name or DEFAULT_NAME


@dataclass(frozen=True)
class BuildRequest:
    """One invocation's inputs. The display name is sanitized on construction."""

    input_path: Path
    output_path: Path
    name: str = DEFAULT_NAME

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_path", Path(self.input_path))
        object.__setattr__(self, "output_path", Path(self.output_path))
        object.__setattr__(self, "name", sanitize_name(self.name))


@dataclass(frozen=True)
class BuildResult:
    strategy: BuildStrategy
    output_path: Path
    workspace: Path
    binary_path: Path


@dataclass(frozen=True)
class BundleLayout:
    """Paths of the `<Name>.saver/Contents/...` tree rooted at `root`."""

    root: Path

    @property
    def contents(self) -> Path:
        return self.root / "Contents"

    @property
    def macos(self) -> Path:
        return self.contents / "MacOS"

    @property
    def resources(self) -> Path:
        return self.contents / "Resources"

    @property
    def info_plist(self) -> Path:
        return self.contents / "Info.plist"

    @property
    def binary(self) -> Path:
        return self.macos / renderer.EXECUTABLE_NAME

    @property
    def payload(self) -> Path:
        return self.resources / renderer.RESOURCE_FILENAME

    def directories(self) -> tuple[Path, ...]:
        return (self.root, self.contents, self.macos, self.resources)


def _run(cmd: list[str], *, cwd: Path) -> None:
    """
    Run a tool in cwd with the caller's stdout/stderr attached. Blocks until it exits.

    Raises CalledProcessError on nonzero exit and OSError when it cannot be spawned.
    """
    logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd)
    subprocess.run(cmd, cwd=str(cwd), check=True)


def _create_workspace(scratch_root: Path | None) -> Path:
    try:
        workspace = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=scratch_root))
    except OSError as e:
        raise WorkspaceCreationFailed(f"Could not create scratch workspace: {e}") from e
    logger.debug("Temp directory: %s", workspace)
    return workspace


def _promote(src: Path, dst: Path) -> None:
    try:
        assembler.copy_tree(src, dst)
    except CopyFailed as e:
        raise PromotionFailed(f"Could not copy bundle to {dst}: {e}") from e


def _remove_later(path: Path, delay: float) -> threading.Timer:
    """
    Remove path after `delay` seconds on a daemon timer. Nobody waits on it, and a
    process that exits first simply leaves the directory behind.
    """
    timer = threading.Timer(delay, shutil.rmtree, args=(path,), kwargs={"ignore_errors": True})
    timer.daemon = True
    timer.start()
    return timer


def build_with_swiftc(request: BuildRequest, *, scratch_root: Path | None = None) -> BuildResult:
    logger.info("Using Swift compiler directly")
    workspace = _create_workspace(scratch_root)

    bundle = BundleLayout(workspace / f"{request.name}.saver")
    assembler.scaffold(*bundle.directories())
    assembler.copy_file(request.input_path, bundle.payload)
    assembler.write_text(bundle.info_plist, renderer.render_info_plist(request.name))
    assembler.write_text(workspace / SOURCE_FILENAME, renderer.render_saver_source(request.name))

    cmd = ["swiftc"]
    for framework in SWIFT_FRAMEWORKS:
        cmd += ["-framework", framework]
    cmd += ["-emit-library", "-module-name", MODULE_NAME, "-o", str(bundle.binary), SOURCE_FILENAME]

    logger.debug("Compiling Swift to: %s", bundle.binary)
    try:
        _run(cmd, cwd=workspace)
    except (subprocess.CalledProcessError, OSError) as e:
        raise CompileFailed(e) from e

    if not bundle.binary.exists():
        raise OutputMissing(bundle.binary)
    logger.debug("Executable created successfully: %s", bundle.binary)

    _promote(bundle.root, request.output_path)

    promoted = BundleLayout(request.output_path)
    assembler.fix_permissions(promoted.binary)

    return BuildResult(
        strategy=BuildStrategy.SWIFTC,
        output_path=request.output_path,
        workspace=workspace,
        binary_path=promoted.binary,
    )


def build_with_xcodebuild(
    request: BuildRequest,
    *,
    scratch_root: Path | None = None,
    cleanup_delay: float = DEFAULT_CLEANUP_DELAY,
) -> BuildResult:
    logger.info("Using Xcode build system")
    workspace = _create_workspace(scratch_root)

    sources = workspace / MODULE_NAME
    files = {
        workspace / XCODE_PROJECT / "project.pbxproj": renderer.render_pbxproj(request.name),
        sources / SOURCE_FILENAME: renderer.render_saver_source(request.name),
        sources / "Info.plist": renderer.render_info_plist(request.name),
    }
    for path, text in files.items():
        assembler.write_text(path, text)
    assembler.copy_file(request.input_path, sources / renderer.RESOURCE_FILENAME)

    cmd = [
        "xcodebuild",
        "-project",
        XCODE_PROJECT,
        "-scheme",
        XCODE_SCHEME,
        "-configuration",
        XCODE_CONFIGURATION,
        "build",
    ]
    try:
        _run(cmd, cwd=workspace)
    except (subprocess.CalledProcessError, OSError) as e:
        raise BuildFailed(e) from e

    built = workspace / "build" / XCODE_CONFIGURATION / f"{request.name}.saver"
    if not built.exists():
        raise OutputMissing(built)

    _promote(built, request.output_path)
    _remove_later(workspace, cleanup_delay)

    return BuildResult(
        strategy=BuildStrategy.XCODEBUILD,
        output_path=request.output_path,
        workspace=workspace,
        binary_path=BundleLayout(request.output_path).binary,
    )


def build_saver(
    request: BuildRequest,
    *,
    which: Which = shutil.which,
    scratch_root: Path | None = None,
    cleanup_delay: float = DEFAULT_CLEANUP_DELAY,
) -> BuildResult:
    """
    Build a `.saver` bundle for request using whichever toolchain is installed.

    The toolchain is chosen before anything is written, so a machine without
    swiftc or xcodebuild fails with NoToolchainAvailable and an untouched disk.
    """
    warn_if_not_macos()
    strategy = select_strategy(which)
    logger.info("Building %s with %s", request.output_path, strategy.executable)

    if strategy is BuildStrategy.SWIFTC:
        return build_with_swiftc(request, scratch_root=scratch_root)
    return build_with_xcodebuild(request, scratch_root=scratch_root, cleanup_delay=cleanup_delay)
