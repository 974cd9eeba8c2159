from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from saverkit import pipeline

VIDEO_BYTES = b"\x00\x00\x00\x18ftypmp42" + bytes(range(256)) * 8


@pytest.fixture
def video(tmp_path: Path) -> Path:
    p = tmp_path / "input" / "clip.mp4"
    p.parent.mkdir()
    p.write_bytes(VIDEO_BYTES)
    return p


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    p = tmp_path / "scratch"
    p.mkdir()
    return p


def which_only(*available: str) -> Callable[[str], str | None]:
    def which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in available else None

    return which


class FakeRunner:
    """Stands in for `pipeline._run`; records calls and simulates the tool's effect."""

    def __init__(self, effect: Callable[[list[str], Path], None] | None = None) -> None:
        self.calls: list[tuple[list[str], Path]] = []
        self._effect = effect

    def __call__(self, cmd: list[str], *, cwd: Path) -> None:
        self.calls.append((list(cmd), Path(cwd)))
        if self._effect is not None:
            self._effect(cmd, Path(cwd))


def swiftc_writes_binary(cmd: list[str], cwd: Path) -> None:
    out = Path(cmd[cmd.index("-o") + 1])
    out.write_bytes(b"\xcf\xfa\xed\xfe fake dylib")


def xcodebuild_writes_bundle(name: str) -> Callable[[list[str], Path], None]:
    def effect(cmd: list[str], cwd: Path) -> None:
        built = cwd / "build" / "Release" / f"{name}.saver" / "Contents"
        (built / "MacOS").mkdir(parents=True)
        (built / "Resources").mkdir()
        (built / "MacOS" / "VideoSaver").write_bytes(b"binary")
        (built / "Info.plist").write_text((cwd / "VideoSaver" / "Info.plist").read_text())
        (built / "Resources" / "payload.mp4").write_bytes((cwd / "VideoSaver" / "payload.mp4").read_bytes())

    return effect


@pytest.fixture
def install_runner(monkeypatch: pytest.MonkeyPatch) -> Callable[..., FakeRunner]:
    def install(effect: Callable[[list[str], Path], None] | None = None) -> FakeRunner:
        runner = FakeRunner(effect)
        monkeypatch.setattr(pipeline, "_run", runner)
        return runner

    return install
