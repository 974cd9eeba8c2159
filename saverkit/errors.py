"""
errors.py

Responsibility: the error taxonomy shared by every pipeline stage.

Every error is terminal for the current build; the CLI prints it verbatim and
exits nonzero. Nothing here is retried or recovered locally.
"""

from __future__ import annotations

from pathlib import Path


class SaverError(RuntimeError):
    pass


class NoToolchainAvailable(SaverError):
    pass


class WorkspaceCreationFailed(SaverError):
    pass


class ScaffoldFailed(SaverError):
    pass


class RenderError(SaverError):
    pass


class PromotionFailed(SaverError):
    pass


class CopyFailed(SaverError):
    def __init__(self, path: str | Path, reason: object = None) -> None:
        self.path = Path(path)
        msg = f"copy failed: {self.path}"
        if reason is not None:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class OutputMissing(SaverError):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"expected output not found: {self.path}")


class _ToolFailed(SaverError):
    tool_label = "build"

    def __init__(self, underlying: BaseException) -> None:
        self.underlying = underlying
        super().__init__(f"{self.tool_label} failed: {underlying}")


class CompileFailed(_ToolFailed):
    tool_label = "swift compilation"


class BuildFailed(_ToolFailed):
    tool_label = "xcodebuild"
