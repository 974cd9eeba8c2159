from __future__ import annotations

import logging

import pytest

from saverkit.errors import NoToolchainAvailable
from saverkit.toolchain import BuildStrategy, select_strategy, warn_if_not_macos

from .conftest import which_only


def test_prefers_swiftc_when_both_available() -> None:
    assert select_strategy(which_only("swiftc", "xcodebuild")) is BuildStrategy.SWIFTC


def test_falls_back_to_xcodebuild() -> None:
    assert select_strategy(which_only("xcodebuild")) is BuildStrategy.XCODEBUILD


def test_no_toolchain_has_install_hint() -> None:
    with pytest.raises(NoToolchainAvailable, match="xcode-select --install"):
        select_strategy(which_only())


def test_probes_in_priority_order() -> None:
    probed: list[str] = []

    def which(name: str) -> None:
        probed.append(name)
        return None

    with pytest.raises(NoToolchainAvailable):
        select_strategy(which)
    assert probed == ["swiftc", "xcodebuild"]


def test_warns_off_macos(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="saverkit.toolchain"):
        assert warn_if_not_macos("linux") is True
        assert warn_if_not_macos("darwin") is False
    assert caplog.text.count("requires macOS") == 1
